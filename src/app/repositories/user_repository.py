"""User Repository Interface

Defines the contract for user persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.user import User


class UserRepository(ABC):
    """Repository interface for User persistence"""

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user

        Args:
            user: User entity to persist

        Returns:
            Created User with generated ID

        Raises:
            IntegrityError: If the email is already registered
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve user by (lower-cased) email

        Args:
            email: Login email

        Returns:
            User if found, None otherwise
        """
        pass
