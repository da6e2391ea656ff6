# apps/api/parking/service.py

from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from sqlalchemy import or_, select

from apps.api.auth.identity import Caller, SyntheticAdmin, is_admin, persisted_user_id
from apps.api.booking.service import (
    find_overlapping_bookings,
    slots_in_use,
    validate_window,
)
from apps.api.parking.models import (
    DEFAULT_REJECTION_REASON,
    ApprovalStatus,
    ParkingLot,
)
from apps.api.parking.schema import (
    ParkingLotCreate,
    ParkingLotUpdate,
    SlotAvailability,
)
from core.architecture.service import AbstractService
from core.exceptions import ForbiddenException, ValidationException
from core.utils.geo import haversine_km

DEFAULT_SEARCH_RADIUS_METERS = 5000


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def filter_by_radius(
    lots: List[ParkingLot],
    latitude: float,
    longitude: float,
    radius_meters: float = DEFAULT_SEARCH_RADIUS_METERS,
) -> List[ParkingLot]:
    """
    Keep lots within ``radius_meters`` of the point, nearest first.

    Linear scan over already loaded lots; each kept lot gets a transient
    ``distance`` attribute in kilometers.
    """
    radius_km = radius_meters / 1000
    nearby = []
    for lot in lots:
        distance = haversine_km(latitude, longitude, lot.latitude, lot.longitude)
        if distance <= radius_km:
            lot.distance = distance
            nearby.append(lot)
    nearby.sort(key=lambda lot: lot.distance)
    return nearby


class ParkingService(AbstractService):
    def __init__(self, session, **kwargs):
        super().__init__(session=session, **kwargs)

    # ===== Helper Methods =====

    def _ensure_can_manage(self, lot: ParkingLot, caller: Caller) -> None:
        """Owner of record or an admin"""
        if lot.owner_id != caller.id and not is_admin(caller):
            raise ForbiddenException(
                "Not authorized to update this parking",
                error_code="NOT_PARKING_OWNER",
            )

    # ===== Parking Lot Management =====

    async def create_parking(self, caller: Caller, data: ParkingLotCreate) -> ParkingLot:
        """Register a lot; it stays pending and unverified until an admin acts"""
        owner_id = persisted_user_id(caller, "own a parking lot")

        lot = ParkingLot(
            owner_id=owner_id,
            name=data.name,
            description=data.description,
            street=data.address.street,
            city=data.address.city,
            state=data.address.state,
            zip_code=data.address.zip_code,
            country=data.address.country,
            latitude=data.location.latitude,
            longitude=data.location.longitude,
            total_slots=data.total_slots,
            available_slots=data.total_slots,
            price_per_hour=data.price_per_hour,
            images=data.images,
            amenities=data.amenities,
            opening_time=data.operating_hours.open,
            closing_time=data.operating_hours.close,
            is_active=True,
            is_verified=False,
            approval_status=ApprovalStatus.PENDING.value,
        )
        self.session.add(lot)
        await self.session.commit()
        await self.session.refresh(lot)

        self.logger.info("Parking %s registered by %s", lot.id, owner_id)
        return lot

    async def get_parking(self, parking_id: UUID) -> ParkingLot:
        return await self.get_or_404(
            ParkingLot,
            parking_id,
            "Parking space not found",
            error_code="PARKING_NOT_FOUND",
        )

    async def list_parkings(
        self,
        search: Optional[str] = None,
        city: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        radius: float = DEFAULT_SEARCH_RADIUS_METERS,
    ) -> List[ParkingLot]:
        """
        Active lots matching the optional filters.

        ``search`` matches name, description or street and ``city`` matches
        the city, both as case-insensitive substrings. When both coordinates
        are given, results are limited to ``radius`` meters and sorted by
        distance.
        """
        query = select(ParkingLot).where(ParkingLot.is_active.is_(True))

        if city:
            query = query.where(ParkingLot.city.ilike(_like_pattern(city), escape="\\"))

        if search:
            pattern = _like_pattern(search)
            query = query.where(
                or_(
                    ParkingLot.name.ilike(pattern, escape="\\"),
                    ParkingLot.description.ilike(pattern, escape="\\"),
                    ParkingLot.street.ilike(pattern, escape="\\"),
                )
            )

        query = query.order_by(ParkingLot.created_at.desc())
        result = await self.session.execute(query)
        lots = list(result.scalars().all())

        if latitude is not None and longitude is not None:
            lots = filter_by_radius(lots, latitude, longitude, radius)
        return lots

    async def list_owner_parkings(self, caller: Caller) -> List[ParkingLot]:
        if isinstance(caller, SyntheticAdmin):
            return []
        result = await self.session.execute(
            select(ParkingLot)
            .where(ParkingLot.owner_id == caller.id)
            .order_by(ParkingLot.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_parking(
        self,
        parking_id: UUID,
        caller: Caller,
        data: ParkingLotUpdate
    ) -> ParkingLot:
        """Partial update; the owner cannot be changed through this path"""
        lot = await self.get_parking(parking_id)
        self._ensure_can_manage(lot, caller)

        update_data = data.model_dump(exclude_unset=True)

        total_slots = update_data.pop("total_slots", None)
        if total_slots is not None and total_slots < lot.total_slots:
            required = await slots_in_use(self.session, lot.id)
            if total_slots < required:
                raise ValidationException(
                    f"Upcoming bookings need at least {required} slots",
                    error_code="SLOTS_IN_USE",
                    errors=[{
                        "field": "totalSlots",
                        "message": f"Must be at least {required}",
                    }],
                )

        address = update_data.pop("address", None) or {}
        for field, value in address.items():
            if value is not None:
                setattr(lot, field, value)

        location = update_data.pop("location", None)
        if location:
            lot.latitude = location["latitude"]
            lot.longitude = location["longitude"]

        hours = update_data.pop("operating_hours", None)
        if hours:
            lot.opening_time = hours["open"]
            lot.closing_time = hours["close"]

        if total_slots is not None:
            delta = total_slots - lot.total_slots
            lot.total_slots = total_slots
            lot.available_slots = min(total_slots, max(0, lot.available_slots + delta))

        for field, value in update_data.items():
            # only description may be cleared
            if value is None and field != "description":
                continue
            setattr(lot, field, value)

        await self.session.commit()
        await self.session.refresh(lot)
        return lot

    # ===== Admin Verification =====

    async def verify_parking(self, parking_id: UUID) -> ParkingLot:
        """
        Legacy direct verification. Verified lots are always approved, so a
        pending or rejected lot is promoted to approved as well.
        """
        lot = await self.get_parking(parking_id)
        lot.is_verified = True
        lot.approval_status = ApprovalStatus.APPROVED.value
        lot.rejection_reason = None
        await self.session.commit()
        await self.session.refresh(lot)
        self.logger.info("Parking %s verified", lot.id)
        return lot

    async def list_parking_requests(
        self, status: Optional[ApprovalStatus] = None
    ) -> List[ParkingLot]:
        status = status or ApprovalStatus.PENDING
        result = await self.session.execute(
            select(ParkingLot)
            .where(ParkingLot.approval_status == status.value)
            .order_by(ParkingLot.created_at.desc())
        )
        return list(result.scalars().all())

    async def approve_parking(self, parking_id: UUID) -> ParkingLot:
        lot = await self.get_parking(parking_id)
        lot.approval_status = ApprovalStatus.APPROVED.value
        lot.is_verified = True
        lot.rejection_reason = None
        await self.session.commit()
        await self.session.refresh(lot)
        self.logger.info("Parking %s approved", lot.id)
        return lot

    async def reject_parking(
        self, parking_id: UUID, reason: Optional[str] = None
    ) -> ParkingLot:
        lot = await self.get_parking(parking_id)
        lot.approval_status = ApprovalStatus.REJECTED.value
        lot.is_verified = False
        lot.rejection_reason = reason or DEFAULT_REJECTION_REASON
        await self.session.commit()
        await self.session.refresh(lot)
        self.logger.info("Parking %s rejected: %s", lot.id, lot.rejection_reason)
        return lot

    # ===== Availability =====

    async def get_availability(
        self,
        parking_id: UUID,
        start_time: Optional[datetime],
        end_time: Optional[datetime],
    ) -> SlotAvailability:
        """Free slots for a window, counted from overlapping bookings"""
        start_time, end_time = validate_window(start_time, end_time)
        lot = await self.get_parking(parking_id)

        overlapping = await find_overlapping_bookings(
            self.session, lot.id, start_time, end_time
        )
        booked = len(overlapping)
        return SlotAvailability(
            total_slots=lot.total_slots,
            available_slots=max(0, lot.total_slots - booked),
            booked_slots=booked,
        )


ParkingServiceDependency = Annotated[ParkingService, ParkingService.get_dependency()]
