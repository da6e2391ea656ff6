import uuid

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import relationship

from core.db.base import AbstractSQLModel
from core.db.mixins import TimestampsMixin


class Review(AbstractSQLModel, TimestampsMixin):
    """One rating per completed booking."""

    __tablename__ = "reviews"
    __table_args__ = (CheckConstraint("rating >= 1 AND rating <= 5", name="rating_range"),)

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    parking_id = Column(
        Uuid(as_uuid=True), ForeignKey("parking_lots.id"), nullable=False, index=True
    )
    booking_id = Column(
        Uuid(as_uuid=True), ForeignKey("bookings.id"), nullable=False, unique=True
    )
    rating = Column(Integer, nullable=False)
    comment = Column(String(2000), nullable=True)

    user = relationship("User", lazy="joined", innerjoin=True)
    parking = relationship("ParkingLot", lazy="joined", innerjoin=True)
    booking = relationship("Booking", lazy="joined", innerjoin=True)
