import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt
from pydantic import ValidationError

from apps.settings import settings
from core.authentication.jwt.models import DecodedToken
from core.exceptions.authentication import UnauthorizedException

logger = logging.getLogger(__name__)


def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    **claims: Any,
) -> str:
    """
    Sign an access token for ``subject``.

    Extra keyword arguments are added as claims. Expiry defaults to
    ``APP_JWT_EXPIRE_MINUTES``.
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload = {
        **claims,
        "sub": str(subject),
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> DecodedToken:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return DecodedToken.model_validate(payload)
    except (JWTError, ValidationError) as e:
        logger.info("Rejected access token: %s", e)
        raise UnauthorizedException(
            "Invalid token. Access denied.", error_code="INVALID_TOKEN"
        ) from e
