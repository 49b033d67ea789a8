"""Line Item Repository Interface

Defines the contract for line item persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence
from src.domain.line_item import LineItem


class LineItemRepository(ABC):
    """
    Repository interface for LineItem persistence

    Line items are written as a batch together with their invoice;
    an update replaces the whole set (delete all, then insert).
    """

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[LineItem]:
        """
        Retrieve all line items for an invoice ordered by sort_order

        Args:
            invoice_id: Invoice ID

        Returns:
            List of LineItem
        """
        pass

    @abstractmethod
    async def create_many(self, line_items: Sequence[LineItem]) -> List[LineItem]:
        """
        Persist a batch of line items

        Args:
            line_items: LineItem entities (invoice_id already set)

        Returns:
            Created LineItems with generated IDs
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> None:
        pass

    @abstractmethod
    async def count_by_invoice_ids(self, invoice_ids: Sequence[int]) -> Dict[int, int]:
        """
        Count line items per invoice

        Returns:
            Mapping of invoice ID to count (invoices without items are absent)
        """
        pass
