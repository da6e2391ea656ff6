# apps/api/parking/router.py

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Query, status

from apps.api.auth.dependency import (
    AdminUserDependency,
    OwnerUserDependency,
    UserDependency,
)
from apps.api.parking.schema import (
    ParkingLotCreate,
    ParkingLotResponse,
    ParkingLotUpdate,
    SlotAvailability,
)
from apps.api.parking.service import (
    DEFAULT_SEARCH_RADIUS_METERS,
    ParkingServiceDependency,
)
from core.response.models import ApiResponse

router = APIRouter(
    prefix="/parking",
    tags=["Parking Management"],
)


# ===== Public Endpoints (No Authentication Required) =====

@router.get("", summary="Search parking lots")
async def list_parkings(
    parking_service: ParkingServiceDependency,
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius: float = Query(
        DEFAULT_SEARCH_RADIUS_METERS, gt=0, description="Search radius in meters"
    ),
    city: Optional[str] = Query(None, description="Case-insensitive city match"),
    search: Optional[str] = Query(
        None, description="Matches name, description or street"
    ),
) -> ApiResponse[List[ParkingLotResponse]]:
    """
    Active parking lots. With both ``latitude`` and ``longitude`` the result
    is limited to ``radius`` meters and sorted nearest first.
    """
    lots = await parking_service.list_parkings(
        search=search,
        city=city,
        latitude=latitude,
        longitude=longitude,
        radius=radius,
    )
    return ApiResponse(
        count=len(lots), data=[ParkingLotResponse.model_validate(lot) for lot in lots]
    )


# ===== Owner Endpoints =====
# Declared before /{parking_id} so the literal path wins.

@router.get("/owner/my-parkings", summary="List own parking lots")
async def list_my_parkings(
    owner: OwnerUserDependency,
    parking_service: ParkingServiceDependency,
) -> ApiResponse[List[ParkingLotResponse]]:
    lots = await parking_service.list_owner_parkings(owner)
    return ApiResponse(
        count=len(lots), data=[ParkingLotResponse.model_validate(lot) for lot in lots]
    )


@router.get("/{parking_id}", summary="Get parking lot details")
async def get_parking(
    parking_id: UUID,
    parking_service: ParkingServiceDependency,
) -> ApiResponse[ParkingLotResponse]:
    lot = await parking_service.get_parking(parking_id)
    return ApiResponse(data=ParkingLotResponse.model_validate(lot))


@router.get("/{parking_id}/availability", summary="Check slot availability")
async def get_availability(
    parking_id: UUID,
    parking_service: ParkingServiceDependency,
    start_time: Optional[datetime] = Query(None, alias="startTime"),
    end_time: Optional[datetime] = Query(None, alias="endTime"),
) -> ApiResponse[SlotAvailability]:
    availability = await parking_service.get_availability(
        parking_id, start_time, end_time
    )
    return ApiResponse(data=availability)


@router.post(
    "",
    summary="Register a parking lot",
    status_code=status.HTTP_201_CREATED,
)
async def create_parking(
    owner: OwnerUserDependency,
    parking_service: ParkingServiceDependency,
    data: ParkingLotCreate,
) -> ApiResponse[ParkingLotResponse]:
    """New lots start pending and unverified until an admin approves them."""
    lot = await parking_service.create_parking(owner, data)
    return ApiResponse(
        message="Parking registered successfully. Awaiting admin approval.",
        data=ParkingLotResponse.model_validate(lot),
    )


@router.put("/{parking_id}", summary="Update a parking lot")
async def update_parking(
    parking_id: UUID,
    user: UserDependency,
    parking_service: ParkingServiceDependency,
    data: ParkingLotUpdate,
) -> ApiResponse[ParkingLotResponse]:
    lot = await parking_service.update_parking(parking_id, user, data)
    return ApiResponse(
        message="Parking updated successfully",
        data=ParkingLotResponse.model_validate(lot),
    )


# ===== Admin Endpoints =====

@router.put("/{parking_id}/verify", summary="Verify a parking lot")
async def verify_parking(
    parking_id: UUID,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> ApiResponse[ParkingLotResponse]:
    lot = await parking_service.verify_parking(parking_id)
    return ApiResponse(
        message="Parking verified successfully",
        data=ParkingLotResponse.model_validate(lot),
    )
