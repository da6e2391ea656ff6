from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.authentication.jwt.models import DecodedToken
from core.authentication.jwt.tokens import decode_access_token
from core.exceptions.authentication import UnauthorizedException

http_bearer = HTTPBearer(auto_error=False)


async def jwt_authenticate(
    token: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer)],
) -> DecodedToken:
    if not token or not token.credentials:
        raise UnauthorizedException(
            "No token provided. Access denied.",
            error_code="TOKEN_MISSING",
        )
    return decode_access_token(token.credentials)


JWTAuthDependency = Annotated[DecodedToken, Depends(jwt_authenticate)]
