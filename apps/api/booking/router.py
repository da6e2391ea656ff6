# apps/api/booking/router.py

from uuid import UUID

from fastapi import APIRouter, status

from apps.api.auth.dependency import UserDependency
from apps.api.booking.schema import BookingCreate, BookingResponse
from apps.api.booking.service import BookingServiceDependency
from core.response.models import ApiResponse

router = APIRouter(
    prefix="/bookings",
    tags=["Bookings"],
)


@router.post(
    "",
    summary="Book a parking slot",
    status_code=status.HTTP_201_CREATED,
)
async def create_booking(
    user: UserDependency,
    booking_service: BookingServiceDependency,
    data: BookingCreate,
) -> ApiResponse[BookingResponse]:
    """
    Reserve a slot in a verified lot for ``startTime``..``endTime``.

    The price is frozen at booking time and the response carries a QR code
    (PNG data URI) encoding the booking reference.
    """
    booking = await booking_service.create_booking(user, data)
    return ApiResponse(
        message="Booking created successfully",
        data=BookingResponse.model_validate(booking),
    )


@router.get("", summary="List own bookings")
async def list_bookings(
    user: UserDependency,
    booking_service: BookingServiceDependency,
) -> ApiResponse[list[BookingResponse]]:
    bookings = await booking_service.list_user_bookings(user)
    return ApiResponse(
        count=len(bookings),
        data=[BookingResponse.model_validate(b) for b in bookings],
    )


@router.get("/{booking_id}", summary="Get booking details")
async def get_booking(
    booking_id: UUID,
    user: UserDependency,
    booking_service: BookingServiceDependency,
) -> ApiResponse[BookingResponse]:
    booking = await booking_service.get_booking(booking_id, user)
    return ApiResponse(data=BookingResponse.model_validate(booking))


@router.put("/{booking_id}/checkin", summary="Check in to a confirmed booking")
async def check_in(
    booking_id: UUID,
    user: UserDependency,
    booking_service: BookingServiceDependency,
) -> ApiResponse[BookingResponse]:
    booking = await booking_service.check_in(booking_id, user)
    return ApiResponse(
        message="Checked in successfully",
        data=BookingResponse.model_validate(booking),
    )


@router.put("/{booking_id}/checkout", summary="Check out of an active booking")
async def check_out(
    booking_id: UUID,
    user: UserDependency,
    booking_service: BookingServiceDependency,
) -> ApiResponse[BookingResponse]:
    booking = await booking_service.check_out(booking_id, user)
    return ApiResponse(
        message="Checked out successfully",
        data=BookingResponse.model_validate(booking),
    )


@router.put("/{booking_id}/cancel", summary="Cancel a booking")
async def cancel_booking(
    booking_id: UUID,
    user: UserDependency,
    booking_service: BookingServiceDependency,
) -> ApiResponse[BookingResponse]:
    booking = await booking_service.cancel(booking_id, user)
    return ApiResponse(
        message="Booking cancelled successfully",
        data=BookingResponse.model_validate(booking),
    )
