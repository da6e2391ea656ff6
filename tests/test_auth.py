from datetime import timedelta

from apps.api.auth.dependency import ensure_role
from apps.api.auth.identity import ADMIN_SUBJECT, PersistedUser, SyntheticAdmin
from apps.api.auth.schema import RegisterRequest
from apps.api.auth.service import AuthService
from apps.api.user.models import UserRoles
from core.authentication.jwt.tokens import create_access_token, decode_access_token
from core.exceptions import ConflictException, ForbiddenException, UnauthorizedException
from tests.base import DatabaseTestCase


class AuthServiceTest(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.service = AuthService(self.session)

    async def test_register_and_login(self):
        user, token = await self.service.register(
            RegisterRequest(name="  Asha  ", email="Asha@Example.com", password="secret123")
        )
        self.assertEqual(user.name, "Asha")
        self.assertEqual(user.email, "asha@example.com")
        self.assertEqual(user.role, UserRoles.USER.value)
        self.assertNotEqual(user.password, "secret123")

        caller = await self.service.verify_token(token)
        self.assertIsInstance(caller, PersistedUser)
        self.assertEqual(caller.id, user.id)

        logged_in, _ = await self.service.login("ASHA@example.com", "secret123")
        self.assertEqual(logged_in.id, user.id)

    async def test_duplicate_email(self):
        data = RegisterRequest(name="Asha", email="asha@example.com", password="secret123")
        await self.service.register(data)
        with self.assertRaises(ConflictException):
            await self.service.register(data)

    async def test_wrong_password(self):
        await self.create_user("asha@example.com")
        with self.assertRaises(UnauthorizedException):
            await self.service.login("asha@example.com", "wrong-password")
        with self.assertRaises(UnauthorizedException):
            await self.service.login("nobody@example.com", "secret123")

    async def test_token_for_deleted_user(self):
        user = await self.create_user()
        token = create_access_token(str(user.id))
        await self.session.delete(user)
        await self.session.commit()
        with self.assertRaises(UnauthorizedException):
            await self.service.verify_token(token)

    async def test_invalid_and_expired_tokens(self):
        with self.assertRaises(UnauthorizedException):
            await self.service.verify_token("not-a-token")
        expired = create_access_token("whatever", expires_delta=timedelta(minutes=-1))
        with self.assertRaises(UnauthorizedException):
            await self.service.verify_token(expired)

    async def test_synthetic_admin_needs_no_row(self):
        admin, token = self.service.admin_login("admin", "admin-secret")
        self.assertIsInstance(admin, SyntheticAdmin)

        decoded = decode_access_token(token)
        self.assertEqual(decoded.sub, ADMIN_SUBJECT)
        self.assertEqual(decoded.role, "admin")

        caller = await self.service.verify_token(token)
        self.assertIsInstance(caller, SyntheticAdmin)
        self.assertEqual(ensure_role(caller, ("admin",)), caller)

    async def test_reserved_subject_without_admin_role(self):
        token = create_access_token(ADMIN_SUBJECT, role="user")
        with self.assertRaises(UnauthorizedException):
            await self.service.verify_token(token)

    async def test_admin_login_rejects_bad_credentials(self):
        with self.assertRaises(UnauthorizedException):
            self.service.admin_login("admin", "nope")
        with self.assertRaises(UnauthorizedException):
            self.service.admin_login("root", "admin-secret")

    async def test_role_guard(self):
        user = await self.create_user()
        caller = PersistedUser(user)
        self.assertEqual(ensure_role(caller, ("user", "owner")), caller)
        with self.assertRaises(ForbiddenException):
            ensure_role(caller, ("admin",))
        with self.assertRaises(UnauthorizedException):
            ensure_role(None, ("admin",))
