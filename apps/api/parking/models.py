# apps/api/parking/models.py

import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Uuid,
)
from sqlalchemy.orm import relationship

from core.db.base import AbstractSQLModel
from core.db.mixins import TimestampsMixin


# ===== Enums =====

class ApprovalStatus(str, enum.Enum):
    """Admin review state of a parking registration"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


DEFAULT_REJECTION_REASON = "Registration rejected by admin"


# ===== Models =====

class ParkingLot(AbstractSQLModel, TimestampsMixin):
    """
    Parking lot registered by an owner and approved by an admin.

    ``available_slots`` is a display counter kept roughly in step with
    bookings; capacity decisions always count overlapping bookings instead.
    """
    __tablename__ = "parking_lots"
    __table_args__ = (
        CheckConstraint("total_slots >= 1", name="total_slots_positive"),
        CheckConstraint(
            "available_slots >= 0 AND available_slots <= total_slots",
            name="available_slots_bounds",
        ),
        CheckConstraint("price_per_hour >= 0", name="price_non_negative"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    owner_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)

    # Address
    street = Column(String(300), nullable=False)
    city = Column(String(120), nullable=False, index=True)
    state = Column(String(120), nullable=False)
    zip_code = Column(String(20), nullable=False)
    country = Column(String(120), nullable=False, default="India")

    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)

    total_slots = Column(Integer, nullable=False)
    available_slots = Column(Integer, nullable=False)
    price_per_hour = Column(Numeric(10, 2), nullable=False)

    images = Column(JSON, nullable=False, default=list)
    amenities = Column(JSON, nullable=False, default=list)
    opening_time = Column(String(5), nullable=False, default="00:00")
    closing_time = Column(String(5), nullable=False, default="23:59")

    is_active = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    approval_status = Column(
        String(20),
        nullable=False,
        default=ApprovalStatus.PENDING.value,
        index=True
    )
    rejection_reason = Column(String(500), nullable=True)

    rating_average = Column(Float, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id], lazy="joined", innerjoin=True)
    bookings = relationship("Booking", back_populates="parking")

    def release_slot(self) -> None:
        """Give one slot back to the display counter, capped at capacity."""
        self.available_slots = min(self.total_slots, self.available_slots + 1)

    def hold_slot(self) -> None:
        self.available_slots = max(0, self.available_slots - 1)
