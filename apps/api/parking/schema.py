# apps/api/parking/schema.py

import re
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from apps.api.parking.models import ApprovalStatus
from apps.api.user.schema import UserContact
from core.response.models import CustomBaseModel

_HHMM = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


# ===== Address & Location Sub-Schemas =====

class Address(CustomBaseModel):
    street: str = Field(..., min_length=1, max_length=300, description="Street address")
    city: str = Field(..., min_length=1, max_length=120)
    state: str = Field(..., min_length=1, max_length=120)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field("India", min_length=1, max_length=120)


class AddressUpdate(CustomBaseModel):
    street: Optional[str] = Field(None, min_length=1, max_length=300)
    city: Optional[str] = Field(None, min_length=1, max_length=120)
    state: Optional[str] = Field(None, min_length=1, max_length=120)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    country: Optional[str] = Field(None, min_length=1, max_length=120)


class Location(CustomBaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="Latitude")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude")


class OperatingHours(CustomBaseModel):
    open: str = Field("00:00", description="Opening time, HH:MM")
    close: str = Field("23:59", description="Closing time, HH:MM")

    @field_validator("open", "close")
    @classmethod
    def validate_hhmm(cls, v: str) -> str:
        if not _HHMM.match(v):
            raise ValueError("Time must use the HH:MM format")
        return v


class Rating(CustomBaseModel):
    average: float = Field(0, ge=0, le=5)
    count: int = Field(0, ge=0)


# ===== Parking Lot Schemas =====

class ParkingLotCreate(CustomBaseModel):
    """Schema for registering a new parking lot"""
    name: str = Field(..., min_length=1, max_length=200, description="Parking lot name")
    description: Optional[str] = Field(None, max_length=1000)
    address: Address = Field(...)
    location: Location = Field(...)
    total_slots: int = Field(..., ge=1, description="Number of bookable slots")
    price_per_hour: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    images: List[str] = Field(default_factory=list)
    amenities: List[str] = Field(default_factory=list)
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)


class ParkingLotUpdate(CustomBaseModel):
    """Partial update by the owner of record or an admin. Owner is not writable."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    address: Optional[AddressUpdate] = None
    location: Optional[Location] = None
    total_slots: Optional[int] = Field(None, ge=1)
    price_per_hour: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    images: Optional[List[str]] = None
    amenities: Optional[List[str]] = None
    operating_hours: Optional[OperatingHours] = None
    is_active: Optional[bool] = None


class ParkingLotResponse(CustomBaseModel):
    """Schema for parking lot response"""
    id: UUID
    owner_id: UUID
    owner: Optional[UserContact] = None
    name: str
    description: Optional[str] = None
    address: Address
    location: Location
    total_slots: int
    available_slots: int
    price_per_hour: float
    images: List[str] = []
    amenities: List[str] = []
    operating_hours: OperatingHours
    is_active: bool
    is_verified: bool
    approval_status: ApprovalStatus
    rejection_reason: Optional[str] = None
    rating: Rating
    distance: Optional[float] = Field(None, description="Kilometers from the search point")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="before")
    @classmethod
    def from_model(cls, data):
        """Fold the flat ``ParkingLot`` columns into nested objects."""
        if isinstance(data, (dict, BaseModel)):
            return data
        return {
            "id": data.id,
            "owner_id": data.owner_id,
            "owner": data.owner,
            "name": data.name,
            "description": data.description,
            "address": {
                "street": data.street,
                "city": data.city,
                "state": data.state,
                "zip_code": data.zip_code,
                "country": data.country,
            },
            "location": {"latitude": data.latitude, "longitude": data.longitude},
            "total_slots": data.total_slots,
            "available_slots": data.available_slots,
            "price_per_hour": data.price_per_hour,
            "images": data.images or [],
            "amenities": data.amenities or [],
            "operating_hours": {"open": data.opening_time, "close": data.closing_time},
            "is_active": data.is_active,
            "is_verified": data.is_verified,
            "approval_status": data.approval_status,
            "rejection_reason": data.rejection_reason,
            "rating": {"average": data.rating_average, "count": data.rating_count},
            "distance": getattr(data, "distance", None),
            "created_at": data.created_at,
            "updated_at": data.updated_at,
        }


class ParkingLotSummary(CustomBaseModel):
    """Short lot reference embedded in bookings and reviews"""
    id: UUID
    name: str
    street: str
    city: str
    latitude: float
    longitude: float
    price_per_hour: float


class SlotAvailability(CustomBaseModel):
    total_slots: int
    available_slots: int
    booked_slots: int


class ParkingRejection(CustomBaseModel):
    reason: Optional[str] = Field(None, max_length=500)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v
