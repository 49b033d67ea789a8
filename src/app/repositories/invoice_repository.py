"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
Lookups take the owner ID as part of the predicate, so an invoice that
belongs to another user is indistinguishable from a missing one.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple
from src.domain.invoice import Invoice, InvoiceStatus

SORTABLE_FIELDS = ("invoice_date", "due_date", "total", "invoice_number", "created_at")
SORT_ORDERS = ("asc", "desc")


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    Provides access to invoice data for the invoice lifecycle use cases.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice with generated ID

        Raises:
            IntegrityError: If invoice_number is already taken
        """
        pass

    @abstractmethod
    async def get_for_owner(self, owner_id: int, invoice_id: int) -> Optional[Invoice]:
        """
        Retrieve invoice by ID if it belongs to owner

        Args:
            owner_id: Owner user ID
            invoice_id: Invoice ID

        Returns:
            Invoice if found and owned, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by invoice number (any owner)

        Args:
            invoice_number: Unique invoice number

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_latest_invoice_number(self, prefix: str) -> Optional[str]:
        """
        Invoice number of the most recently created invoice under a prefix

        Args:
            prefix: Month prefix, e.g. "INV-202503"

        Returns:
            Invoice number, or None if no invoice uses the prefix yet
        """
        pass

    @abstractmethod
    async def update(self, invoice: Invoice) -> Invoice:
        """
        Update an existing invoice

        Args:
            invoice: Invoice entity with updated values

        Returns:
            Updated Invoice
        """
        pass

    @abstractmethod
    async def delete(self, invoice: Invoice) -> None:
        pass

    @abstractmethod
    async def search(
        self,
        owner_id: int,
        search: Optional[str] = None,
        status: Optional[InvoiceStatus] = None,
        client_id: Optional[int] = None,
        sort_by: str = "invoice_date",
        sort_order: str = "desc",
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[Invoice], int]:
        """
        Search an owner's invoices

        Args:
            owner_id: Owner user ID
            search: Case-insensitive substring of invoice number or client name
            status: Optional exact status filter
            client_id: Optional exact client filter
            sort_by: One of SORTABLE_FIELDS
            sort_order: "asc" or "desc"
            limit: Maximum number of invoices to return
            offset: Offset for pagination

        Returns:
            Tuple of (invoices, total matching count)

        Raises:
            ValueError: If sort_by or sort_order is not allowed
        """
        pass

    @abstractmethod
    async def get_recent_for_client(
        self, owner_id: int, client_id: int, limit: int = 10
    ) -> List[Invoice]:
        """Most recent invoices (by invoice_date) of one client"""
        pass

    @abstractmethod
    async def count_by_client_ids(
        self, owner_id: int, client_ids: Sequence[int]
    ) -> Dict[int, int]:
        """Number of invoices per client"""
        pass

    @abstractmethod
    async def detach_client(self, owner_id: int, client_id: int) -> None:
        """Set client_id to NULL on every invoice of the client"""
        pass

    @abstractmethod
    async def sum_total(self, owner_id: int, status: Optional[InvoiceStatus] = None) -> Decimal:
        """Sum of invoice totals (optionally only one status)"""
        pass

    @abstractmethod
    async def average_total(self, owner_id: int) -> Decimal:
        """Average invoice total over all of the owner's invoices (0 if none)"""
        pass

    @abstractmethod
    async def count_by_status(self, owner_id: int) -> Dict[InvoiceStatus, int]:
        """Number of invoices per status (statuses without invoices are absent)"""
        pass

    @abstractmethod
    async def get_overdue_candidates(self, today: date) -> List[Invoice]:
        """
        Sent invoices of any owner whose due_date is before today

        Used by the overdue invoice worker.
        """
        pass
