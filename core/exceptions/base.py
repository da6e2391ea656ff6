from typing import Any, Optional


class AbstractException(Exception):
    """
    Base class for every error the API reports to its clients.

    Subclasses fix the HTTP status and a default machine readable
    ``error_code``; the request boundary turns them into the standard
    ``{success, message, errors}`` envelope.
    """

    status_code: int = 500
    default_error_code: str = "SERVER_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        errors: Optional[list[dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        if status_code is not None:
            self.status_code = status_code
        self.errors = errors
