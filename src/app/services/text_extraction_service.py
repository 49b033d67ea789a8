"""Free-Text Extraction Service Interface

Turns a natural-language request ("Invoice Acme for 5 hours at $100")
into a raw invoice payload.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class ExtractionError(Exception):
    """External extraction (language model or OCR) failed"""
    pass


class TextExtractionService(ABC):
    """Service interface for free-text invoice extraction"""

    @abstractmethod
    async def extract(self, text: str) -> Dict[str, Any]:
        """
        Extract invoice fields from free text

        Args:
            text: User-provided description of the invoice

        Returns:
            Raw payload with keys client_name, invoice_date, due_date,
            currency, payment_terms, notes and line_items (list of dicts with
            description, quantity, unit_price, tax_rate)

        Raises:
            ExtractionError: If the external service fails or returns
                something that is not a JSON object
        """
        pass
