import uuid

from apps.api.admin.service import AdminDashboardService
from apps.api.analytics.service import AnalyticsService
from apps.api.booking.schema import BookingCreate
from apps.api.booking.service import BookingService
from apps.api.user.models import UserRoles
from core.exceptions import NotFoundException
from tests.base import DatabaseTestCase, at


class AnalyticsTest(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.owner = await self.create_user("owner@example.com", UserRoles.OWNER, name="Owner One")
        self.owner2 = await self.create_user("owner2@example.com", UserRoles.OWNER, name="Owner Two")
        self.driver = await self.create_user("driver@example.com")
        self.driver2 = await self.create_user("driver2@example.com")
        self.lot = await self.create_lot(self.owner, total_slots=5, price_per_hour="10.00")
        self.lot2 = await self.create_lot(self.owner2, name="Second", total_slots=5, price_per_hour="20.00")
        await self.create_lot(self.owner2, name="Pending", verified=False)
        self.bookings = BookingService(self.session)

    async def book(self, user, lot, start, end):
        return await self.bookings.create_booking(
            self.caller(user),
            BookingCreate(parking_id=lot.id, start_time=at(start), end_time=at(end)),
        )

    async def test_summary(self):
        caller = self.caller(self.driver)
        completed = await self.book(self.driver, self.lot, 8, 10)  # 20.00
        await self.bookings.check_in(completed.id, caller)
        await self.bookings.check_out(completed.id, caller)

        active = await self.book(self.driver2, self.lot2, 8, 9)  # 20.00
        await self.bookings.check_in(active.id, self.caller(self.driver2))

        await self.book(self.driver, self.lot, 11, 12)  # confirmed, not counted
        cancelled = await self.book(self.driver, self.lot2, 12, 14)
        await self.bookings.cancel(cancelled.id, caller)

        summary = await AnalyticsService(self.session).get_summary()
        self.assertEqual(summary.total_income, 40.0)
        self.assertEqual(summary.total_bookings, 4)
        self.assertEqual(summary.total_parkings, 2)
        self.assertEqual(summary.total_users, 2)
        self.assertEqual(summary.total_owners, 2)

        by_owner = {o.owner_email: o for o in summary.income_by_owner}
        self.assertEqual(set(by_owner), {"owner@example.com", "owner2@example.com"})
        self.assertEqual(by_owner["owner@example.com"].total_income, 20.0)
        self.assertEqual(by_owner["owner@example.com"].bookings_count, 1)
        self.assertEqual(by_owner["owner2@example.com"].owner_name, "Owner Two")

    async def test_empty_summary(self):
        summary = await AnalyticsService(self.session).get_summary()
        self.assertEqual(summary.total_income, 0)
        self.assertEqual(summary.income_by_owner, [])

    async def test_customers_with_history(self):
        await self.book(self.driver, self.lot, 8, 10)
        await self.book(self.driver, self.lot2, 8, 9)

        customers = await AdminDashboardService(self.session).list_customers()
        by_email = {c.email: c for c in customers}
        self.assertEqual(set(by_email), {"driver@example.com", "driver2@example.com"})
        self.assertEqual(by_email["driver@example.com"].total_bookings, 2)
        self.assertEqual(by_email["driver@example.com"].total_spent, 40.0)
        self.assertEqual(by_email["driver2@example.com"].booking_history, [])

    async def test_customer_bookings(self):
        await self.book(self.driver, self.lot, 8, 10)
        service = AdminDashboardService(self.session)

        history = await service.get_customer_bookings(self.driver.id)
        self.assertEqual(history.user.email, "driver@example.com")
        self.assertEqual(len(history.bookings), 1)

        with self.assertRaises(NotFoundException):
            await service.get_customer_bookings(self.owner.id)
        with self.assertRaises(NotFoundException):
            await service.get_customer_bookings(uuid.uuid4())
