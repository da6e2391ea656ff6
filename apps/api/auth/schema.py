import uuid
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from apps.api.user.models import UserRoles
from core.response.models import CustomBaseModel


class RegisterRequest(CustomBaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    email: EmailStr = Field(...)
    password: str = Field(..., min_length=6, description="At least 6 characters")
    phone: Optional[str] = Field(None, max_length=30)
    role: UserRoles = Field(UserRoles.USER)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v


class LoginRequest(CustomBaseModel):
    email: EmailStr = Field(...)
    password: str = Field(..., min_length=1)


class AdminLoginRequest(CustomBaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserDetailsResponse(CustomBaseModel):
    id: uuid.UUID | str = Field(...)
    name: str = Field(...)
    email: str = Field(...)
    role: str = Field(...)
    phone: str | None = Field(None)
    avatar: str | None = Field(None)


class AuthTokenResponse(CustomBaseModel):
    user: UserDetailsResponse
    token: str
