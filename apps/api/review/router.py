# apps/api/review/router.py

from typing import List
from uuid import UUID

from fastapi import APIRouter, status

from apps.api.auth.dependency import UserDependency
from apps.api.review.schema import ReviewCreate, ReviewResponse
from apps.api.review.service import ReviewServiceDependency
from core.response.models import ApiResponse

router = APIRouter(
    prefix="/reviews",
    tags=["Reviews"],
)


@router.post("", summary="Review a completed booking", status_code=status.HTTP_201_CREATED)
async def create_review(
    user: UserDependency,
    review_service: ReviewServiceDependency,
    data: ReviewCreate,
) -> ApiResponse[ReviewResponse]:
    review = await review_service.create_review(user, data)
    return ApiResponse(
        message="Review submitted successfully",
        data=ReviewResponse.model_validate(review),
    )


@router.get("/parking/{parking_id}", summary="List reviews of a parking lot")
async def list_parking_reviews(
    parking_id: UUID,
    user: UserDependency,
    review_service: ReviewServiceDependency,
) -> ApiResponse[List[ReviewResponse]]:
    reviews = await review_service.list_parking_reviews(parking_id)
    return ApiResponse(
        count=len(reviews), data=[ReviewResponse.model_validate(r) for r in reviews]
    )


@router.get("", summary="List own reviews")
async def list_my_reviews(
    user: UserDependency,
    review_service: ReviewServiceDependency,
) -> ApiResponse[List[ReviewResponse]]:
    reviews = await review_service.list_user_reviews(user)
    return ApiResponse(
        count=len(reviews), data=[ReviewResponse.model_validate(r) for r in reviews]
    )
