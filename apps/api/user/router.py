from fastapi import APIRouter

from apps.api.auth.dependency import AdminUserDependency, UserDependency
from apps.api.auth.identity import persisted_user_id
from apps.api.auth.schema import UserDetailsResponse
from apps.api.user.schema import ProfileUpdate, UserSchema
from apps.api.user.service import UserServiceDependency
from core.response.models import ApiResponse

router = APIRouter(
    prefix="/users",
    tags=["User"],
)


@router.get("/profile", summary="Get own profile")
async def get_profile(user: UserDependency) -> ApiResponse[UserDetailsResponse]:
    return ApiResponse(data=UserDetailsResponse.model_validate(user))


@router.put("/profile", summary="Update own profile")
async def update_profile(
    user: UserDependency,
    user_service: UserServiceDependency,
    data: ProfileUpdate,
) -> ApiResponse[UserDetailsResponse]:
    updated = await user_service.update_profile(
        persisted_user_id(user, "edit a profile"), data
    )
    return ApiResponse(
        message="Profile updated successfully",
        data=UserDetailsResponse.model_validate(updated),
    )


@router.get("", summary="List all users")
async def list_users(
    admin: AdminUserDependency,
    user_service: UserServiceDependency,
) -> ApiResponse[list[UserSchema]]:
    users = await user_service.list_users()
    return ApiResponse(
        count=len(users), data=[UserSchema.model_validate(u) for u in users]
    )
