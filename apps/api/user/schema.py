import uuid
from datetime import datetime
from typing import Optional

from pydantic import Field

from core.response.models import CustomBaseModel


class ProfileUpdate(CustomBaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    phone: Optional[str] = Field(None, max_length=30)
    avatar: Optional[str] = Field(None, max_length=500)


class UserSchema(CustomBaseModel):
    id: uuid.UUID
    name: str
    email: str
    role: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserContact(CustomBaseModel):
    """Short user reference embedded in other resources"""

    id: uuid.UUID
    name: str
    email: str
    phone: Optional[str] = None
    avatar: Optional[str] = None
