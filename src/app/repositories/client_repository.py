"""Client Repository Interface

Defines the contract for client persistence operations.
Every lookup is scoped by owner so other users' clients are invisible.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple
from src.domain.client import Client


class ClientRepository(ABC):
    """Repository interface for Client persistence"""

    @abstractmethod
    async def create(self, client: Client) -> Client:
        """
        Create a new client

        Args:
            client: Client entity to persist

        Returns:
            Created Client with generated ID
        """
        pass

    @abstractmethod
    async def get_for_owner(self, owner_id: int, client_id: int) -> Optional[Client]:
        """
        Retrieve client by ID if it belongs to owner

        Args:
            owner_id: Owner user ID
            client_id: Client ID

        Returns:
            Client if found and owned, None otherwise
        """
        pass

    @abstractmethod
    async def get_many_for_owner(self, owner_id: int, client_ids: Sequence[int]) -> Dict[int, Client]:
        """
        Retrieve several clients of an owner at once

        Returns:
            Mapping of client ID to Client (unknown IDs are absent)
        """
        pass

    @abstractmethod
    async def find_by_name(self, owner_id: int, client_name: str) -> Optional[Client]:
        """
        Find an owner's client by name (case-insensitive exact match)

        Used by free-text and image extraction to reuse existing clients.

        Args:
            owner_id: Owner user ID
            client_name: Name to look up

        Returns:
            Client if found, None otherwise
        """
        pass

    @abstractmethod
    async def search(
        self,
        owner_id: int,
        search: Optional[str] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Client], int]:
        """
        Search an owner's clients, newest first

        Args:
            owner_id: Owner user ID
            search: Case-insensitive substring of name, email or phone
            limit: Maximum number of clients to return
            offset: Offset for pagination

        Returns:
            Tuple of (clients, total matching count)
        """
        pass

    @abstractmethod
    async def count_for_owner(self, owner_id: int) -> int:
        pass

    @abstractmethod
    async def update(self, client: Client) -> Client:
        pass

    @abstractmethod
    async def delete(self, client: Client) -> None:
        pass
