from core.exceptions.base import AbstractException
from core.exceptions.authentication import ForbiddenException, UnauthorizedException
from core.exceptions.request import (
    CapacityExceededException,
    ConflictException,
    InvalidRequestException,
    InvalidStateException,
    NotFoundException,
    ValidationException,
)

__all__ = [
    "AbstractException",
    "CapacityExceededException",
    "ConflictException",
    "ForbiddenException",
    "InvalidRequestException",
    "InvalidStateException",
    "NotFoundException",
    "UnauthorizedException",
    "ValidationException",
]
