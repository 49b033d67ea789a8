"""Access Token Service Interface

Issues and verifies the bearer tokens that identify the invoice owner.
"""

from abc import ABC, abstractmethod


class TokenError(Exception):
    """Token could not be verified"""

    code = "INVALID_TOKEN"


class TokenExpiredError(TokenError):
    """Token signature is valid but it has expired"""

    code = "TOKEN_EXPIRED"


class TokenService(ABC):
    """Service interface for access tokens"""

    @abstractmethod
    def issue(self, user_id: int, email: str) -> str:
        """
        Issue an access token

        Args:
            user_id: Authenticated user ID
            email: User email (informational claim)

        Returns:
            Encoded token
        """
        pass

    @abstractmethod
    def verify(self, token: str) -> int:
        """
        Verify a token and return the user ID it was issued for

        Raises:
            TokenExpiredError: If the token has expired
            TokenError: If the token is malformed or the signature is invalid
        """
        pass
