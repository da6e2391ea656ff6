# apps/api/booking/models.py

import enum
import uuid

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship

from core.db.base import AbstractSQLModel
from core.db.fields import TZAwareDateTime
from core.db.mixins import TimestampsMixin


# ===== Enums =====

class BookingStatus(str, enum.Enum):
    """Lifecycle of a booking"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    ACTIVE = "active"  # checked in
    COMPLETED = "completed"  # checked out
    CANCELLED = "cancelled"


# Statuses that hold a slot for their time window
OCCUPYING_STATUSES = (BookingStatus.CONFIRMED.value, BookingStatus.ACTIVE.value)


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    WALLET = "wallet"


# ===== Models =====

class Booking(AbstractSQLModel, TimestampsMixin):
    """
    A time-windowed reservation of one numbered slot in a parking lot.
    Price is computed once on creation and never recomputed.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="window_ordered"),
        CheckConstraint("slot_number >= 1", name="slot_number_positive"),
        Index("ix_bookings_parking_window", "parking_id", "start_time", "end_time"),
        Index("ix_bookings_user_created", "user_id", "created_at"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False
    )
    parking_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("parking_lots.id"),
        nullable=False
    )
    slot_number = Column(Integer, nullable=False)

    start_time = Column(TZAwareDateTime(), nullable=False)
    end_time = Column(TZAwareDateTime(), nullable=False)
    duration = Column(Float, nullable=False, comment="Hours, fractional")
    total_price = Column(Numeric(10, 2), nullable=False)

    status = Column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING.value,
        index=True
    )
    payment_status = Column(
        String(20),
        nullable=False,
        default=PaymentStatus.PENDING.value
    )
    payment_method = Column(
        String(20),
        nullable=False,
        default=PaymentMethod.CASH.value
    )

    check_in_time = Column(TZAwareDateTime(), nullable=True)
    check_out_time = Column(TZAwareDateTime(), nullable=True)

    qr_code = Column(Text, nullable=False, default="")

    # Relationships
    user = relationship("User", foreign_keys=[user_id], lazy="joined", innerjoin=True)
    parking = relationship(
        "ParkingLot", back_populates="bookings", lazy="joined", innerjoin=True
    )
