import hmac
from typing import Annotated
from uuid import UUID

from sqlalchemy import select

from apps.api.auth.identity import ADMIN_SUBJECT, Caller, PersistedUser, SyntheticAdmin
from apps.api.auth.schema import RegisterRequest
from apps.api.user.models import User, UserRoles
from apps.settings import settings
from core.architecture.service import AbstractService
from core.authentication.jwt.models import DecodedToken
from core.authentication.jwt.tokens import create_access_token, decode_access_token
from core.authentication.passwords import get_password_hash, verify_password
from core.exceptions import ConflictException, UnauthorizedException


class AuthService(AbstractService):
    """Issues access tokens and resolves them back into callers."""

    def __init__(self, session):
        super().__init__(session)

    # ===== Token verification =====

    async def verify_token(self, credential: str) -> Caller:
        return await self.resolve_caller(decode_access_token(credential))

    async def resolve_caller(self, decoded_token: DecodedToken) -> Caller:
        if (
            decoded_token.sub == ADMIN_SUBJECT
            and decoded_token.role == UserRoles.ADMIN.value
        ):
            return SyntheticAdmin(
                username=decoded_token.username or settings.ADMIN_USERNAME
            )

        try:
            user_id = UUID(decoded_token.sub)
        except ValueError:
            raise UnauthorizedException(
                "Invalid token. Access denied.", error_code="INVALID_TOKEN"
            )

        user = await self.session.get(User, user_id)
        if not user:
            raise UnauthorizedException(
                "User not found. Access denied.", error_code="USER_NOT_FOUND"
            )
        return PersistedUser(user)

    # ===== Token issuance =====

    @staticmethod
    def issue_token(user: User) -> str:
        return create_access_token(str(user.id))

    async def register(self, data: RegisterRequest) -> tuple[User, str]:
        email = data.email.lower()
        existing = await self.session.scalar(select(User).where(User.email == email))
        if existing:
            raise ConflictException(
                "User already exists with this email", error_code="EMAIL_TAKEN"
            )

        user = User(
            name=data.name,
            email=email,
            password=get_password_hash(data.password),
            phone=data.phone,
            role=data.role.value,
        )
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)

        self.logger.info("Registered user %s with role %s", user.id, user.role)
        return user, self.issue_token(user)

    async def login(self, email: str, password: str) -> tuple[User, str]:
        user = await self.session.scalar(
            select(User).where(User.email == email.lower())
        )
        if not user or not verify_password(password, user.password):
            self.logger.warning("Failed login for %s", email)
            raise UnauthorizedException(
                "Invalid credentials", error_code="INVALID_CREDENTIALS"
            )
        return user, self.issue_token(user)

    def admin_login(self, username: str, password: str) -> tuple[SyntheticAdmin, str]:
        """Log in the built-in administrator configured through settings."""
        configured = settings.ADMIN_PASSWORD
        if (
            not configured
            or not hmac.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode())
            or not hmac.compare_digest(password.encode(), configured.encode())
        ):
            self.logger.warning("Failed admin login for %s", username)
            raise UnauthorizedException(
                "Invalid credentials", error_code="INVALID_CREDENTIALS"
            )

        admin = SyntheticAdmin(username=username)
        token = create_access_token(
            ADMIN_SUBJECT, role=admin.role, username=admin.username
        )
        return admin, token


AuthServiceDependency = Annotated[AuthService, AuthService.get_dependency()]
