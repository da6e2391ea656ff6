# apps/api/booking/schema.py

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, Field, field_validator

from apps.api.booking.models import BookingStatus, PaymentMethod, PaymentStatus
from apps.api.parking.schema import ParkingLotSummary
from apps.api.user.schema import UserContact
from core.response.models import CustomBaseModel


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and normalize aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class BookingCreate(CustomBaseModel):
    parking_id: UUID = Field(
        ...,
        validation_alias=AliasChoices("parkingId", "parking", "parking_id"),
        description="Parking lot to book",
    )
    start_time: datetime = Field(..., description="Start of the window, ISO-8601")
    end_time: datetime = Field(..., description="End of the window, ISO-8601")
    payment_method: PaymentMethod = Field(PaymentMethod.CASH)

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)


class BookingResponse(CustomBaseModel):
    id: UUID
    user_id: UUID
    parking_id: UUID
    user: Optional[UserContact] = None
    parking: Optional[ParkingLotSummary] = None
    slot_number: int
    start_time: datetime
    end_time: datetime
    duration: float = Field(..., description="Hours")
    total_price: float
    status: BookingStatus
    payment_status: PaymentStatus
    payment_method: PaymentMethod
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    qr_code: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
