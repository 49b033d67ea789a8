"""DeleteInvoice Use Case

Hard-deletes an invoice together with its line items and payments.
"""

import logging

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.payment_repository import PaymentRepository
from .dtos import DeleteResponseDTO
from .mappers import invoice_not_found

logger = logging.getLogger(__name__)


class DeleteInvoice:
    """
    Use Case: Delete invoice

    Business Rules:
    1. Ownership checked
    2. Line items, payments and invoice are removed in one transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.payment_repo = payment_repo

    async def execute(self, owner_id: int, invoice_id: int) -> Result[DeleteResponseDTO]:
        try:
            invoice = await self.invoice_repo.get_for_owner(owner_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            invoice_number = invoice.invoice_number

            await self.line_item_repo.delete_by_invoice_id(invoice.id)
            await self.payment_repo.delete_by_invoice_id(invoice.id)
            await self.invoice_repo.delete(invoice)

            await self.uow.commit()

            logger.info(f"Deleted invoice {invoice_number} for user {owner_id}")

            return Return.ok(
                DeleteResponseDTO(id=invoice_id, message="Invoice deleted successfully")
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_INVOICE_FAILED",
                    message="Failed to delete invoice",
                    reason=str(e),
                )
            )
