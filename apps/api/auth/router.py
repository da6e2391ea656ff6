from fastapi import APIRouter, status

from apps.api.auth.dependency import UserDependency
from apps.api.auth.schema import (
    AdminLoginRequest,
    AuthTokenResponse,
    LoginRequest,
    RegisterRequest,
    UserDetailsResponse,
)
from apps.api.auth.service import AuthServiceDependency
from core.response.models import ApiResponse

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    summary="Register a new user",
    status_code=status.HTTP_201_CREATED,
)
async def register(
    auth_service: AuthServiceDependency, data: RegisterRequest
) -> ApiResponse[AuthTokenResponse]:
    user, token = await auth_service.register(data)
    return ApiResponse(
        message="User registered successfully",
        data=AuthTokenResponse(
            user=UserDetailsResponse.model_validate(user), token=token
        ),
    )


@router.post("/login", summary="Log in with email and password")
async def login(
    auth_service: AuthServiceDependency, data: LoginRequest
) -> ApiResponse[AuthTokenResponse]:
    user, token = await auth_service.login(data.email, data.password)
    return ApiResponse(
        message="Login successful",
        data=AuthTokenResponse(
            user=UserDetailsResponse.model_validate(user), token=token
        ),
    )


@router.post("/admin/login", summary="Log in as the built-in administrator")
async def admin_login(
    auth_service: AuthServiceDependency, data: AdminLoginRequest
) -> ApiResponse[AuthTokenResponse]:
    admin, token = auth_service.admin_login(data.username, data.password)
    return ApiResponse(
        message="Admin login successful",
        data=AuthTokenResponse(
            user=UserDetailsResponse.model_validate(admin), token=token
        ),
    )


@router.get("/me", summary="Get the authenticated caller")
async def me(user: UserDependency) -> ApiResponse[UserDetailsResponse]:
    return ApiResponse(data=UserDetailsResponse.model_validate(user))
