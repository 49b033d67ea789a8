"""PyJWT Access Token Service Implementation"""

from datetime import datetime, timedelta, timezone

import jwt

from src.app.services.token_service import TokenService, TokenError, TokenExpiredError


class JwtTokenService(TokenService):
    """
    JWT implementation of TokenService

    Claims: sub (user id as string), email, iat, exp.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expires_minutes: int = 60 * 24 * 7):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, user_id: int, email: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + timedelta(minutes=self.expires_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.PyJWTError as e:
            raise TokenError(f"Invalid token: {e}") from e

        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as e:
            raise TokenError("Token has no valid subject") from e
