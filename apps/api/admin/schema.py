# apps/api/admin/schema.py

from typing import List

from apps.api.booking.schema import BookingResponse
from apps.api.user.schema import UserContact, UserSchema
from core.response.models import CustomBaseModel


class CustomerWithBookings(UserSchema):
    booking_history: List[BookingResponse] = []
    total_bookings: int = 0
    total_spent: float = 0


class CustomerBookings(CustomBaseModel):
    user: UserContact
    bookings: List[BookingResponse] = []
