import logging
from typing import Callable, Type, TypeVar
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.db.core import SessionDep
from core.exceptions.request import NotFoundException

T = TypeVar("T", bound="AbstractService")
M = TypeVar("M")


class AbstractService:
    """
    Base for request scoped services.

    A service owns the ``AsyncSession`` of the current request; routers get
    an instance through ``Annotated[Service, Service.get_dependency()]``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.logger = logging.getLogger(self.__class__.__module__)

    async def get_or_404(
        self,
        model: Type[M],
        object_id: UUID,
        message: str = "Resource not found",
        error_code: str = "NOT_FOUND",
    ) -> M:
        instance = await self.session.get(model, object_id)
        if instance is None:
            raise NotFoundException(message, error_code=error_code)
        return instance

    @classmethod
    def _get_dependency_function(cls: Type[T], session: SessionDep) -> T:
        return cls(session=session)

    @classmethod
    def get_dependency(cls: Type[T]) -> Callable[..., T]:
        """FastAPI dependency that builds the service on the request session."""
        return Depends(cls._get_dependency_function)
