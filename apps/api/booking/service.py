# apps/api/booking/service.py

import asyncio
import weakref
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from apps.api.auth.identity import Caller, SyntheticAdmin, is_admin, persisted_user_id
from apps.api.booking.models import (
    OCCUPYING_STATUSES,
    Booking,
    BookingStatus,
    PaymentStatus,
)
from apps.api.booking.schema import BookingCreate, as_utc
from apps.api.parking.models import ParkingLot
from core.architecture.service import AbstractService
from core.exceptions import (
    CapacityExceededException,
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    ValidationException,
)
from core.utils.qr import qr_data_uri

# Allowed status moves; completed and cancelled are terminal.
TRANSITIONS = {
    BookingStatus.PENDING: {BookingStatus.CONFIRMED, BookingStatus.CANCELLED},
    BookingStatus.CONFIRMED: {BookingStatus.ACTIVE, BookingStatus.CANCELLED},
    BookingStatus.ACTIVE: {BookingStatus.COMPLETED, BookingStatus.CANCELLED},
    BookingStatus.COMPLETED: set(),
    BookingStatus.CANCELLED: set(),
}

_lot_locks: "weakref.WeakValueDictionary[UUID, asyncio.Lock]" = weakref.WeakValueDictionary()


def _lot_lock(parking_id: UUID) -> asyncio.Lock:
    """One lock per lot, shared by every booking creation in this process"""
    lock = _lot_locks.get(parking_id)
    if lock is None:
        lock = asyncio.Lock()
        _lot_locks[parking_id] = lock
    return lock


# ===== Pure helpers =====

def validate_window(
    start_time: Optional[datetime], end_time: Optional[datetime]
) -> Tuple[datetime, datetime]:
    if start_time is None or end_time is None:
        raise ValidationException(
            "Start time and end time are required",
            errors=[
                {"field": name, "message": "Field required"}
                for name, value in (("startTime", start_time), ("endTime", end_time))
                if value is None
            ],
        )
    start_time, end_time = as_utc(start_time), as_utc(end_time)
    if end_time <= start_time:
        raise ValidationException(
            "End time must be after start time",
            error_code="INVALID_TIME_WINDOW",
            errors=[{"field": "endTime", "message": "End time must be after start time"}],
        )
    return start_time, end_time


def allocate_slot_number(taken: Iterable[int], total_slots: int) -> int:
    """Lowest slot number in 1..total_slots not in ``taken``"""
    used = set(taken)
    for slot_number in range(1, total_slots + 1):
        if slot_number not in used:
            return slot_number
    raise CapacityExceededException(
        "No available slots", error_code="NO_SLOT_AVAILABLE"
    )


def booking_duration_hours(start_time: datetime, end_time: datetime) -> float:
    return (end_time - start_time).total_seconds() / 3600


def calculate_price(duration_hours: float, price_per_hour) -> Decimal:
    price = Decimal(str(duration_hours)) * Decimal(str(price_per_hour))
    return price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def build_qr_payload(booking: Booking) -> dict:
    return {
        "bookingId": str(booking.id),
        "parkingId": str(booking.parking_id),
        "userId": str(booking.user_id),
        "startTime": booking.start_time.isoformat(),
        "endTime": booking.end_time.isoformat(),
    }


def peak_concurrency(windows: Iterable[Tuple[datetime, datetime]]) -> int:
    """Largest number of half-open windows covering a single instant"""
    events = []
    for start_time, end_time in windows:
        events.append((start_time, 1))
        events.append((end_time, -1))
    # an end sorts before a start at the same instant
    events.sort(key=lambda event: (event[0], event[1]))

    current = peak = 0
    for _, delta in events:
        current += delta
        peak = max(peak, current)
    return peak


async def slots_in_use(session: AsyncSession, parking_id: UUID) -> int:
    """
    Capacity a lot needs for its confirmed or active bookings that have not
    ended yet: the peak overlap or the highest allocated slot, whichever is
    larger.
    """
    result = await session.execute(
        select(Booking.start_time, Booking.end_time, Booking.slot_number).where(
            Booking.parking_id == parking_id,
            Booking.status.in_(OCCUPYING_STATUSES),
            Booking.end_time > datetime.now(timezone.utc),
        )
    )
    rows = result.all()
    return max(
        peak_concurrency((row.start_time, row.end_time) for row in rows),
        max((row.slot_number for row in rows), default=0),
    )


async def find_overlapping_bookings(
    session: AsyncSession,
    parking_id: UUID,
    start_time: datetime,
    end_time: datetime,
) -> List[Booking]:
    """
    Confirmed or active bookings of a lot whose window intersects the
    half-open window [start_time, end_time).
    """
    result = await session.execute(
        select(Booking).where(
            Booking.parking_id == parking_id,
            Booking.status.in_(OCCUPYING_STATUSES),
            Booking.start_time < end_time,
            Booking.end_time > start_time,
        )
    )
    return list(result.scalars().all())


class BookingService(AbstractService):
    def __init__(self, session, **kwargs):
        super().__init__(session=session, **kwargs)

    # ===== Helper Methods =====

    async def _get_lot_for_update(self, parking_id: UUID) -> ParkingLot:
        lot = await self.session.scalar(
            select(ParkingLot)
            .where(ParkingLot.id == parking_id)
            .with_for_update(of=ParkingLot)
        )
        if not lot:
            raise NotFoundException(
                "Parking space not found", error_code="PARKING_NOT_FOUND"
            )
        return lot

    async def _get_booking(self, booking_id: UUID) -> Booking:
        return await self.get_or_404(
            Booking, booking_id, "Booking not found", error_code="BOOKING_NOT_FOUND"
        )

    async def _get_owned_booking(
        self, booking_id: UUID, caller: Caller, allow_admin: bool = False
    ) -> Booking:
        booking = await self._get_booking(booking_id)
        if booking.user_id != caller.id and not (allow_admin and is_admin(caller)):
            raise ForbiddenException("Not authorized", error_code="NOT_BOOKING_OWNER")
        return booking

    def _transition(
        self, booking: Booking, target: BookingStatus, message: str
    ) -> None:
        current = BookingStatus(booking.status)
        if target not in TRANSITIONS[current]:
            raise InvalidStateException(message, error_code="INVALID_BOOKING_STATE")
        self.logger.info(
            "Booking %s: %s -> %s", booking.id, current.value, target.value
        )
        booking.status = target.value

    async def _save(self, booking: Booking) -> Booking:
        await self.session.commit()
        await self.session.refresh(booking)
        return booking

    # ===== Booking Lifecycle =====

    async def create_booking(self, caller: Caller, data: BookingCreate) -> Booking:
        """
        Reserve the lowest free slot of a verified lot for a time window.

        The overlap count decides capacity; ``available_slots`` is only
        adjusted for display. Creation is serialized per lot so two
        requests cannot both claim the last slot.
        """
        user_id = persisted_user_id(caller, "book parking")
        start_time, end_time = validate_window(data.start_time, data.end_time)

        async with _lot_lock(data.parking_id):
            lot = await self._get_lot_for_update(data.parking_id)
            if not lot.is_verified:
                raise ValidationException(
                    "Parking space is not verified yet",
                    error_code="PARKING_NOT_VERIFIED",
                )

            overlapping = await find_overlapping_bookings(
                self.session, lot.id, start_time, end_time
            )
            if len(overlapping) >= lot.total_slots:
                raise CapacityExceededException(
                    "No available slots for the selected time",
                    error_code="CAPACITY_EXCEEDED",
                )
            slot_number = allocate_slot_number(
                (b.slot_number for b in overlapping), lot.total_slots
            )

            duration = booking_duration_hours(start_time, end_time)
            booking = Booking(
                user_id=user_id,
                parking_id=lot.id,
                slot_number=slot_number,
                start_time=start_time,
                end_time=end_time,
                duration=duration,
                total_price=calculate_price(duration, lot.price_per_hour),
                status=BookingStatus.CONFIRMED.value,
                payment_status=PaymentStatus.PENDING.value,
                payment_method=data.payment_method.value,
            )
            self.session.add(booking)
            await self.session.flush()

            booking.qr_code = qr_data_uri(build_qr_payload(booking))
            lot.hold_slot()
            await self._save(booking)

        self.logger.info(
            "Booking %s created on parking %s slot %s for user %s",
            booking.id, lot.id, slot_number, user_id,
        )
        return booking

    async def get_booking(self, booking_id: UUID, caller: Caller) -> Booking:
        return await self._get_owned_booking(booking_id, caller, allow_admin=True)

    async def list_user_bookings(self, caller: Caller) -> List[Booking]:
        if isinstance(caller, SyntheticAdmin):
            return []
        result = await self.session.execute(
            select(Booking)
            .where(Booking.user_id == caller.id)
            .order_by(Booking.created_at.desc())
        )
        return list(result.scalars().all())

    async def check_in(self, booking_id: UUID, caller: Caller) -> Booking:
        booking = await self._get_owned_booking(booking_id, caller)
        self._transition(
            booking, BookingStatus.ACTIVE, "Booking is not in confirmed status"
        )
        booking.check_in_time = datetime.now(timezone.utc)
        return await self._save(booking)

    async def check_out(self, booking_id: UUID, caller: Caller) -> Booking:
        """Complete the booking and mark it paid; no payment is captured"""
        booking = await self._get_owned_booking(booking_id, caller)
        self._transition(booking, BookingStatus.COMPLETED, "Booking is not active")
        booking.check_out_time = datetime.now(timezone.utc)
        booking.payment_status = PaymentStatus.PAID.value
        booking.parking.release_slot()
        return await self._save(booking)

    async def cancel(self, booking_id: UUID, caller: Caller) -> Booking:
        booking = await self._get_owned_booking(booking_id, caller, allow_admin=True)
        self._transition(
            booking, BookingStatus.CANCELLED, "Cannot cancel this booking"
        )
        booking.parking.release_slot()
        return await self._save(booking)


BookingServiceDependency = Annotated[BookingService, BookingService.get_dependency()]
