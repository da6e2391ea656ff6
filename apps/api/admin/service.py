# apps/api/admin/service.py

from collections import defaultdict
from typing import Annotated, List
from uuid import UUID

from sqlalchemy import select

from apps.api.admin.schema import CustomerBookings, CustomerWithBookings
from apps.api.booking.models import Booking
from apps.api.booking.schema import BookingResponse
from apps.api.user.models import User, UserRoles
from apps.api.user.schema import UserContact, UserSchema
from core.architecture.service import AbstractService
from core.exceptions import NotFoundException


class AdminDashboardService(AbstractService):
    def __init__(self, session, **kwargs):
        super().__init__(session=session, **kwargs)

    async def _get_customer(self, user_id: UUID) -> User:
        user = await self.session.get(User, user_id)
        if user is None or user.role != UserRoles.USER.value:
            raise NotFoundException("Customer not found", error_code="CUSTOMER_NOT_FOUND")
        return user

    async def list_customers(self) -> List[CustomerWithBookings]:
        """Role ``user`` accounts with their full booking history, newest first"""
        users = (
            await self.session.execute(
                select(User)
                .where(User.role == UserRoles.USER.value)
                .order_by(User.created_at.desc())
            )
        ).scalars().all()
        if not users:
            return []

        bookings = (
            await self.session.execute(
                select(Booking)
                .where(Booking.user_id.in_([u.id for u in users]))
                .order_by(Booking.created_at.desc())
            )
        ).scalars().all()
        by_user = defaultdict(list)
        for booking in bookings:
            by_user[booking.user_id].append(booking)

        customers = []
        for user in users:
            history = by_user[user.id]
            customers.append(
                CustomerWithBookings(
                    **UserSchema.model_validate(user).model_dump(),
                    booking_history=[BookingResponse.model_validate(b) for b in history],
                    total_bookings=len(history),
                    total_spent=float(sum(b.total_price or 0 for b in history)),
                )
            )
        return customers

    async def get_customer_bookings(self, user_id: UUID) -> CustomerBookings:
        user = await self._get_customer(user_id)
        bookings = (
            await self.session.execute(
                select(Booking)
                .where(Booking.user_id == user.id)
                .order_by(Booking.created_at.desc())
            )
        ).scalars().all()
        return CustomerBookings(
            user=UserContact.model_validate(user),
            bookings=[BookingResponse.model_validate(b) for b in bookings],
        )


AdminDashboardServiceDependency = Annotated[
    AdminDashboardService, AdminDashboardService.get_dependency()
]
