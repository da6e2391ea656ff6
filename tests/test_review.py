from apps.api.booking.schema import BookingCreate
from apps.api.booking.service import BookingService
from apps.api.review.schema import ReviewCreate
from apps.api.review.service import ReviewService
from apps.api.user.models import UserRoles
from core.exceptions import (
    ConflictException,
    ForbiddenException,
    InvalidStateException,
    NotFoundException,
    ValidationException,
)
from tests.base import DatabaseTestCase, at


class ReviewServiceTest(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.owner = await self.create_user("owner@example.com", UserRoles.OWNER)
        self.user = await self.create_user("driver@example.com", name="Driver")
        self.other = await self.create_user("other@example.com")
        self.lot = await self.create_lot(self.owner, total_slots=2)
        self.bookings = BookingService(self.session)
        self.service = ReviewService(self.session)

    async def completed_booking(self, user, start=10):
        caller = self.caller(user)
        booking = await self.bookings.create_booking(
            caller,
            BookingCreate(parking_id=self.lot.id, start_time=at(start), end_time=at(start + 1)),
        )
        await self.bookings.check_in(booking.id, caller)
        return await self.bookings.check_out(booking.id, caller)

    async def test_review_requires_completed_booking(self):
        booking = await self.bookings.create_booking(
            self.caller(self.user),
            BookingCreate(parking_id=self.lot.id, start_time=at(10), end_time=at(11)),
        )
        with self.assertRaises(InvalidStateException):
            await self.service.create_review(
                self.caller(self.user), ReviewCreate(booking_id=booking.id, rating=4)
            )

    async def test_rating_is_the_mean_of_all_reviews(self):
        first = await self.completed_booking(self.user, start=8)
        second = await self.completed_booking(self.other, start=10)

        review = await self.service.create_review(
            self.caller(self.user),
            ReviewCreate(booking_id=first.id, rating=5, comment="Easy entry"),
        )
        self.assertEqual(review.parking_id, self.lot.id)
        self.assertEqual((self.lot.rating_average, self.lot.rating_count), (5, 1))

        await self.service.create_review(
            self.caller(self.other), ReviewCreate(booking_id=second.id, rating=2)
        )
        self.assertEqual((self.lot.rating_average, self.lot.rating_count), (3.5, 2))

        reviews = await self.service.list_parking_reviews(self.lot.id)
        self.assertEqual(len(reviews), 2)
        mine = await self.service.list_user_reviews(self.caller(self.user))
        self.assertEqual([r.id for r in mine], [review.id])
        self.assertEqual(mine[0].user.name, "Driver")

    async def test_rating_average_is_not_rounded(self):
        third = await self.create_user("third@example.com")
        for rating, user, start in ((5, self.user, 8), (4, self.other, 10), (4, third, 12)):
            booking = await self.completed_booking(user, start=start)
            await self.service.create_review(
                self.caller(user), ReviewCreate(booking_id=booking.id, rating=rating)
            )

        self.assertEqual(self.lot.rating_count, 3)
        self.assertAlmostEqual(self.lot.rating_average, 13 / 3)
        self.assertNotEqual(self.lot.rating_average, 4.33)

    async def test_one_review_per_booking(self):
        booking = await self.completed_booking(self.user)
        data = ReviewCreate(booking_id=booking.id, rating=4)
        await self.service.create_review(self.caller(self.user), data)
        with self.assertRaises(ConflictException):
            await self.service.create_review(self.caller(self.user), data)

    async def test_only_author_of_booking_reviews(self):
        booking = await self.completed_booking(self.user)
        with self.assertRaises(ForbiddenException):
            await self.service.create_review(
                self.caller(self.other), ReviewCreate(booking_id=booking.id, rating=4)
            )
        with self.assertRaises(ValidationException):
            await self.service.create_review(
                self.admin(), ReviewCreate(booking_id=booking.id, rating=4)
            )

    async def test_parking_must_match_booking(self):
        booking = await self.completed_booking(self.user)
        other_lot = await self.create_lot(self.owner, name="Elsewhere")
        with self.assertRaises(ValidationException):
            await self.service.create_review(
                self.caller(self.user),
                ReviewCreate(booking_id=booking.id, parking_id=other_lot.id, rating=4),
            )

    async def test_unknown_booking(self):
        with self.assertRaises(NotFoundException):
            await self.service.create_review(
                self.caller(self.user),
                ReviewCreate(booking_id="00000000-0000-0000-0000-000000000000", rating=3),
            )
