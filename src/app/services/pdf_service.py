"""PDF Generation Service Interface

Defines the contract for PDF generation operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.client import Client
from src.domain.invoice import Invoice
from src.domain.line_item import LineItem
from src.domain.user import User


class PdfService(ABC):
    """
    Service interface for PDF generation

    Renders a complete invoice aggregate into a document.
    """

    @abstractmethod
    def generate_invoice(
        self,
        invoice: Invoice,
        line_items: List[LineItem],
        client: Optional[Client],
        issuer: User,
    ) -> bytes:
        """
        Generate an invoice PDF

        Args:
            invoice: Invoice entity with totals populated
            line_items: Line items in display order
            client: Billed client (None if the invoice has no client)
            issuer: Invoice owner, printed as the issuing company

        Returns:
            PDF document as bytes
        """
        pass
