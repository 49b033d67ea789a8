"""Bearer token authentication dependency"""

from typing import Optional

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from libs.result import Error
from src.api.error import ClientError
from src.app.services.token_service import TokenService, TokenError
from src.depends import get_token_service

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    token_service: TokenService = Depends(get_token_service),
) -> int:
    """
    Resolve the authenticated user ID from `Authorization: Bearer <token>`

    Raises:
        ClientError: 401 with MISSING_TOKEN, INVALID_TOKEN or TOKEN_EXPIRED
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error(code="MISSING_TOKEN", message="No token provided"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        return token_service.verify(credentials.credentials)
    except TokenError as e:
        raise ClientError(
            Error(code=e.code, message=str(e)),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
