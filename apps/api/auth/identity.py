from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from apps.api.user.models import User, UserRoles
from core.exceptions.request import ValidationException

# Reserved subject of the built-in administrator. It never exists as a row.
ADMIN_SUBJECT = "admin_special_id"


@dataclass(frozen=True)
class PersistedUser:
    """Caller backed by a stored ``User`` row."""

    user: User

    @property
    def id(self) -> UUID:
        return self.user.id

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def name(self) -> str:
        return self.user.name

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def phone(self) -> Optional[str]:
        return self.user.phone

    @property
    def avatar(self) -> Optional[str]:
        return self.user.avatar


@dataclass(frozen=True)
class SyntheticAdmin:
    """
    Built-in administrator authenticated from its token claims alone.

    Resolved once by the token verifier and never looked up in the database.
    It has no user row, so it cannot own lots, bookings or reviews.
    """

    username: str
    id: str = ADMIN_SUBJECT
    role: str = UserRoles.ADMIN.value
    name: str = "Admin"
    email: str = "admin@smartpark.com"
    phone: Optional[str] = None
    avatar: Optional[str] = None


Caller = Union[PersistedUser, SyntheticAdmin]


def is_admin(caller: Caller) -> bool:
    return caller.role == UserRoles.ADMIN.value


def persisted_user_id(caller: Caller, action: str) -> UUID:
    """Id of the caller's user row; the synthetic admin has none."""
    if isinstance(caller, SyntheticAdmin):
        raise ValidationException(
            f"The built-in administrator cannot {action}. Use a registered account.",
            error_code="SYNTHETIC_ADMIN_NOT_ALLOWED",
        )
    return caller.id
