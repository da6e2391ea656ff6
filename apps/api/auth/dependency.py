import logging
from typing import Annotated, Optional

from fastapi import Depends

from apps.api.auth.identity import Caller
from apps.api.auth.service import AuthService
from apps.api.user.models import UserRoles
from core.authentication.jwt.dependency import JWTAuthDependency
from core.db.core import SessionDep
from core.exceptions.authentication import ForbiddenException, UnauthorizedException

logger = logging.getLogger(__name__)


async def get_current_user(
    session: SessionDep, decoded_token: JWTAuthDependency
) -> Caller:
    return await AuthService(session).resolve_caller(decoded_token)


UserDependency = Annotated[Caller, Depends(get_current_user)]


def ensure_role(caller: Optional[Caller], roles: tuple[str, ...]) -> Caller:
    if caller is None:
        raise UnauthorizedException(
            "Authentication required", error_code="AUTHENTICATION_REQUIRED"
        )
    if caller.role not in roles:
        logger.info("Caller %s with role %s denied, needs %s", caller.id, caller.role, roles)
        raise ForbiddenException(
            "Access denied. Insufficient permissions.",
            error_code="INSUFFICIENT_ROLE",
        )
    return caller


def authorize(*roles: UserRoles):
    allowed = tuple(role.value for role in roles)

    async def dependency(user: UserDependency) -> Caller:
        return ensure_role(user, allowed)

    return dependency


AdminUserDependency = Annotated[Caller, Depends(authorize(UserRoles.ADMIN))]
OwnerUserDependency = Annotated[
    Caller, Depends(authorize(UserRoles.OWNER, UserRoles.ADMIN))
]
