# apps/api/review/service.py

from typing import Annotated, List
from uuid import UUID

from sqlalchemy import func, select

from apps.api.auth.identity import Caller, SyntheticAdmin, persisted_user_id
from apps.api.booking.models import Booking, BookingStatus
from apps.api.parking.models import ParkingLot
from apps.api.review.models import Review
from apps.api.review.schema import ReviewCreate
from core.architecture.service import AbstractService
from core.exceptions import (
    ConflictException,
    ForbiddenException,
    InvalidStateException,
    ValidationException,
)


class ReviewService(AbstractService):
    def __init__(self, session, **kwargs):
        super().__init__(session=session, **kwargs)

    async def _refresh_rating(self, lot: ParkingLot) -> None:
        """Recompute the lot's rating from every stored review"""
        average, count = (
            await self.session.execute(
                select(func.avg(Review.rating), func.count(Review.id)).where(
                    Review.parking_id == lot.id
                )
            )
        ).one()
        lot.rating_average = float(average or 0)
        lot.rating_count = count

    async def create_review(self, caller: Caller, data: ReviewCreate) -> Review:
        user_id = persisted_user_id(caller, "write a review")
        booking = await self.get_or_404(
            Booking, data.booking_id, "Booking not found", error_code="BOOKING_NOT_FOUND"
        )
        if booking.user_id != user_id:
            raise ForbiddenException("Not authorized", error_code="NOT_BOOKING_OWNER")
        if booking.status != BookingStatus.COMPLETED.value:
            raise InvalidStateException(
                "Can only review completed bookings",
                error_code="BOOKING_NOT_COMPLETED",
            )
        if data.parking_id is not None and data.parking_id != booking.parking_id:
            raise ValidationException(
                "Parking does not match the booking",
                error_code="PARKING_MISMATCH",
                errors=[{"field": "parkingId", "message": "Does not match the booking"}],
            )

        existing = await self.session.scalar(
            select(Review.id).where(Review.booking_id == booking.id)
        )
        if existing is not None:
            raise ConflictException(
                "Review already submitted for this booking",
                error_code="REVIEW_EXISTS",
            )

        review = Review(
            user_id=user_id,
            parking_id=booking.parking_id,
            booking_id=booking.id,
            rating=data.rating,
            comment=data.comment,
        )
        self.session.add(review)
        await self.session.flush()

        await self._refresh_rating(booking.parking)
        await self.session.commit()
        await self.session.refresh(review)

        self.logger.info(
            "Review %s (%s stars) added to parking %s",
            review.id, review.rating, review.parking_id,
        )
        return review

    async def list_parking_reviews(self, parking_id: UUID) -> List[Review]:
        result = await self.session.execute(
            select(Review)
            .where(Review.parking_id == parking_id)
            .order_by(Review.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_user_reviews(self, caller: Caller) -> List[Review]:
        if isinstance(caller, SyntheticAdmin):
            return []
        result = await self.session.execute(
            select(Review)
            .where(Review.user_id == caller.id)
            .order_by(Review.created_at.desc())
        )
        return list(result.scalars().all())


ReviewServiceDependency = Annotated[ReviewService, ReviewService.get_dependency()]
