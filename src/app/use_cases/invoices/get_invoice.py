"""GetInvoice Use Case

Returns one invoice with its client, line items and payments.
"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.payment_repository import PaymentRepository
from .dtos import InvoiceDetailDTO
from .mappers import invoice_not_found, to_client_summary, to_invoice_detail


class GetInvoice:
    """
    Use Case: Get invoice details

    Business Rules:
    1. Ownership is part of the lookup (foreign invoices are "not found")
    2. Line items ordered by sort_order, payments by payment_date desc
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        payment_repo: PaymentRepository,
        client_repo: ClientRepository,
    ):
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.payment_repo = payment_repo
        self.client_repo = client_repo

    async def execute(self, owner_id: int, invoice_id: int) -> Result[InvoiceDetailDTO]:
        try:
            invoice = await self.invoice_repo.get_for_owner(owner_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            client = None
            if invoice.client_id is not None:
                client = await self.client_repo.get_for_owner(owner_id, invoice.client_id)

            line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)
            payments = await self.payment_repo.get_by_invoice_id(invoice.id)

            return Return.ok(
                to_invoice_detail(invoice, line_items, payments, to_client_summary(client))
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_FAILED",
                    message="Failed to get invoice",
                    reason=str(e),
                )
            )
