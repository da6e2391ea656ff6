# apps/api/analytics/service.py

from typing import Annotated, List

from sqlalchemy import func, select

from apps.api.analytics.schema import AnalyticsSummary, OwnerIncome
from apps.api.booking.models import Booking, BookingStatus, PaymentStatus
from apps.api.parking.models import ApprovalStatus, ParkingLot
from apps.api.user.models import User, UserRoles
from core.architecture.service import AbstractService

# Bookings that count towards income
INCOME_STATUSES = (BookingStatus.COMPLETED.value, BookingStatus.ACTIVE.value)
INCOME_PAYMENT_STATUSES = (PaymentStatus.PAID.value, PaymentStatus.PENDING.value)


def _income_filter():
    return (
        Booking.status.in_(INCOME_STATUSES),
        Booking.payment_status.in_(INCOME_PAYMENT_STATUSES),
    )


class AnalyticsService(AbstractService):
    """Read-only aggregates, recomputed on every call"""

    def __init__(self, session, **kwargs):
        super().__init__(session=session, **kwargs)

    async def get_total_income(self) -> float:
        total = await self.session.scalar(
            select(func.coalesce(func.sum(Booking.total_price), 0)).where(
                *_income_filter()
            )
        )
        return float(total or 0)

    async def get_income_by_owner(self) -> List[OwnerIncome]:
        total_income = func.coalesce(func.sum(Booking.total_price), 0)
        query = (
            select(
                User.id,
                User.name,
                User.email,
                User.phone,
                total_income.label("total_income"),
                func.count(Booking.id).label("bookings_count"),
            )
            .select_from(Booking)
            .join(ParkingLot, ParkingLot.id == Booking.parking_id)
            .join(User, User.id == ParkingLot.owner_id)
            .where(*_income_filter())
            .group_by(User.id, User.name, User.email, User.phone)
            .order_by(total_income.desc())
        )
        result = await self.session.execute(query)
        return [
            OwnerIncome(
                owner_id=row.id,
                owner_name=row.name,
                owner_email=row.email,
                owner_phone=row.phone,
                total_income=float(row.total_income or 0),
                bookings_count=row.bookings_count,
            )
            for row in result.all()
        ]

    async def count_bookings(self) -> int:
        return await self.session.scalar(select(func.count(Booking.id)))

    async def count_approved_parkings(self) -> int:
        return await self.session.scalar(
            select(func.count(ParkingLot.id)).where(
                ParkingLot.approval_status == ApprovalStatus.APPROVED.value
            )
        )

    async def count_users(self, role: UserRoles) -> int:
        return await self.session.scalar(
            select(func.count(User.id)).where(User.role == role.value)
        )

    async def get_summary(self) -> AnalyticsSummary:
        return AnalyticsSummary(
            total_income=await self.get_total_income(),
            income_by_owner=await self.get_income_by_owner(),
            total_bookings=await self.count_bookings(),
            total_parkings=await self.count_approved_parkings(),
            total_users=await self.count_users(UserRoles.USER),
            total_owners=await self.count_users(UserRoles.OWNER),
        )


AnalyticsServiceDependency = Annotated[AnalyticsService, AnalyticsService.get_dependency()]
