from typing import Annotated, Optional
from uuid import UUID

from sqlalchemy import select

from apps.api.user.models import User, UserRoles
from apps.api.user.schema import ProfileUpdate
from core.architecture.service import AbstractService


class UserService(AbstractService):
    def __init__(self, session, **kwargs):
        super().__init__(session=session, **kwargs)

    async def get_user_by_id(self, user_id: UUID) -> User:
        return await self.get_or_404(
            User, user_id, "User not found", error_code="USER_NOT_FOUND"
        )

    async def update_profile(self, user_id: UUID, data: ProfileUpdate) -> User:
        """Update name, phone and avatar. Email and role are not editable here."""
        user = await self.get_user_by_id(user_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "name" and value is None:
                continue
            setattr(user, field, value)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def list_users(self, role: Optional[UserRoles] = None) -> list[User]:
        query = select(User).order_by(User.created_at.desc())
        if role is not None:
            query = query.where(User.role == role.value)
        result = await self.session.execute(query)
        return list(result.scalars().all())


UserServiceDependency = Annotated[UserService, UserService.get_dependency()]
