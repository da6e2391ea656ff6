import uuid
from enum import Enum as PyEnum

from sqlalchemy import Column, String, Uuid

from core.db.base import AbstractSQLModel
from core.db.mixins import TimestampsMixin


class UserRoles(PyEnum):
    USER = "user"
    OWNER = "owner"
    ADMIN = "admin"


# -------------------------
# 1. User Model
# -------------------------
class User(AbstractSQLModel, TimestampsMixin):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(120), nullable=False)
    email = Column(String(120), unique=True, nullable=False, index=True)
    # argon2 hash, excluded from every response schema
    password = Column(String(255), nullable=False)
    # assigned at registration, no endpoint changes it
    role = Column(
        String(20),
        default=UserRoles.USER.value,
        nullable=False,
        server_default=UserRoles.USER.value,
    )
    phone = Column(String(30), nullable=True)
    avatar = Column(String(500), nullable=True)
