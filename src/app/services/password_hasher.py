"""Password Hashing Service Interface"""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """One-way password hashing"""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass
