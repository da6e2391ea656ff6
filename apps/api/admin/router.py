# apps/api/admin/router.py

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Body, Query

from apps.api.admin.schema import CustomerBookings, CustomerWithBookings
from apps.api.admin.service import AdminDashboardServiceDependency
from apps.api.analytics.schema import AnalyticsSummary
from apps.api.analytics.service import AnalyticsServiceDependency
from apps.api.auth.dependency import AdminUserDependency
from apps.api.parking.models import ApprovalStatus
from apps.api.parking.schema import ParkingLotResponse, ParkingRejection
from apps.api.parking.service import ParkingServiceDependency
from core.response.models import ApiResponse

router = APIRouter(prefix="/admin", tags=["Admin"])


# ===== Parking Approval =====

@router.get("/parking-requests", summary="List parking registration requests")
async def list_parking_requests(
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
    status: Optional[ApprovalStatus] = Query(
        None, description="Defaults to pending"
    ),
) -> ApiResponse[List[ParkingLotResponse]]:
    lots = await parking_service.list_parking_requests(status)
    return ApiResponse(
        count=len(lots), data=[ParkingLotResponse.model_validate(lot) for lot in lots]
    )


@router.get("/parking-requests/{parking_id}", summary="Get a parking request")
async def get_parking_request(
    parking_id: UUID,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> ApiResponse[ParkingLotResponse]:
    lot = await parking_service.get_parking(parking_id)
    return ApiResponse(data=ParkingLotResponse.model_validate(lot))


@router.put("/parking-requests/{parking_id}/approve", summary="Approve a parking")
async def approve_parking(
    parking_id: UUID,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> ApiResponse[ParkingLotResponse]:
    lot = await parking_service.approve_parking(parking_id)
    return ApiResponse(
        message="Parking approved successfully",
        data=ParkingLotResponse.model_validate(lot),
    )


@router.put("/parking-requests/{parking_id}/reject", summary="Reject a parking")
async def reject_parking(
    parking_id: UUID,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
    data: Optional[ParkingRejection] = Body(None),
) -> ApiResponse[ParkingLotResponse]:
    lot = await parking_service.reject_parking(
        parking_id, data.reason if data else None
    )
    return ApiResponse(
        message="Parking rejected",
        data=ParkingLotResponse.model_validate(lot),
    )


# ===== Analytics & Customers =====

@router.get("/analytics", summary="Income and usage analytics")
async def get_analytics(
    admin: AdminUserDependency,
    analytics_service: AnalyticsServiceDependency,
) -> ApiResponse[AnalyticsSummary]:
    return ApiResponse(data=await analytics_service.get_summary())


@router.get("/users", summary="List customers with booking history")
async def list_customers(
    admin: AdminUserDependency,
    admin_dashboard_service: AdminDashboardServiceDependency,
) -> ApiResponse[List[CustomerWithBookings]]:
    customers = await admin_dashboard_service.list_customers()
    return ApiResponse(count=len(customers), data=customers)


@router.get("/users/{user_id}/bookings", summary="Booking history of a customer")
async def get_customer_bookings(
    user_id: UUID,
    admin: AdminUserDependency,
    admin_dashboard_service: AdminDashboardServiceDependency,
) -> ApiResponse[CustomerBookings]:
    history = await admin_dashboard_service.get_customer_bookings(user_id)
    return ApiResponse(count=len(history.bookings), data=history)
