from core.exceptions.base import AbstractException


class InvalidRequestException(AbstractException):
    status_code = 400
    default_error_code = "INVALID_REQUEST"


class ValidationException(InvalidRequestException):
    """Malformed or missing input; ``errors`` carries the field level list."""

    default_error_code = "VALIDATION_ERROR"


class NotFoundException(AbstractException):
    status_code = 404
    default_error_code = "NOT_FOUND"


class InvalidStateException(InvalidRequestException):
    """Operation not valid for the current booking or lot state."""

    default_error_code = "INVALID_STATE"


class CapacityExceededException(InvalidRequestException):
    default_error_code = "CAPACITY_EXCEEDED"


class ConflictException(InvalidRequestException):
    """A unique resource already exists (duplicate email, duplicate review)."""

    default_error_code = "CONFLICT"
