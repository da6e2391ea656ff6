# apps/api/review/schema.py

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from core.response.models import CustomBaseModel


class ReviewCreate(CustomBaseModel):
    booking_id: UUID = Field(
        ..., validation_alias=AliasChoices("bookingId", "booking", "booking_id")
    )
    parking_id: Optional[UUID] = Field(
        None,
        validation_alias=AliasChoices("parkingId", "parking", "parking_id"),
        description="Optional; must match the booking's lot when given",
    )
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=2000)


class ReviewAuthor(CustomBaseModel):
    id: UUID
    name: str
    avatar: Optional[str] = None


class ReviewParking(CustomBaseModel):
    id: UUID
    name: str
    city: str


class ReviewResponse(CustomBaseModel):
    id: UUID
    user_id: UUID
    parking_id: UUID
    booking_id: UUID
    user: Optional[ReviewAuthor] = None
    parking: Optional[ReviewParking] = None
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
