"""Payment Repository Interface

Defines the contract for payment persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """Repository interface for Payment persistence"""

    @abstractmethod
    async def get_by_invoice_id(self, invoice_id: int) -> List[Payment]:
        """
        Retrieve payments for an invoice, most recent payment_date first

        Args:
            invoice_id: Invoice ID

        Returns:
            List of Payment
        """
        pass

    @abstractmethod
    async def delete_by_invoice_id(self, invoice_id: int) -> None:
        pass

    @abstractmethod
    async def count_by_invoice_ids(self, invoice_ids: Sequence[int]) -> Dict[int, int]:
        pass
