"""UpdateInvoiceStatus Use Case

Moves an invoice through its status lifecycle.
"""

import logging

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.invoice import InvoiceStatus, can_transition
from .dtos import InvoiceDetailDTO
from .mappers import (
    enum_value,
    invalid_transition,
    invoice_not_found,
    to_client_summary,
    to_invoice_detail,
)

logger = logging.getLogger(__name__)


class UpdateInvoiceStatus:
    """
    Use Case: Change invoice status

    Business Rules:
    1. Status must be one of draft, sent, paid, overdue, cancelled
    2. Unknown status leaves the stored status untouched
    3. Ownership checked
    4. Transition must be allowed (paid and cancelled are final)

    Flow:
    1. Parse status
    2. Load invoice for owner
    3. Validate transition
    4. Update status and commit
    5. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        payment_repo: PaymentRepository,
        client_repo: ClientRepository,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.payment_repo = payment_repo
        self.client_repo = client_repo

    async def execute(self, owner_id: int, invoice_id: int, status: str) -> Result[InvoiceDetailDTO]:
        # Step 1: Parse status
        try:
            target = InvoiceStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in InvoiceStatus)
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message=f"Invalid status: {status}",
                    reason=f"Status must be one of: {allowed}",
                    details=[{"field": "status", "message": f"Must be one of: {allowed}"}],
                )
            )

        try:
            # Step 2: Load invoice for owner
            invoice = await self.invoice_repo.get_for_owner(owner_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            # Step 3: Validate transition
            current = invoice.status
            if not can_transition(current, target):
                return Return.err(invalid_transition(current, target))

            # Step 4: Update status and commit
            if current != target:
                invoice.status = target
                invoice = await self.invoice_repo.update(invoice)

            client = None
            if invoice.client_id is not None:
                client = await self.client_repo.get_for_owner(owner_id, invoice.client_id)
            line_items = await self.line_item_repo.get_by_invoice_id(invoice.id)
            payments = await self.payment_repo.get_by_invoice_id(invoice.id)

            await self.uow.commit()

            if current != target:
                logger.info(
                    f"Invoice {invoice.invoice_number} status "
                    f"{enum_value(current)} -> {target.value}"
                )

            # Step 5: Build response
            return Return.ok(
                to_invoice_detail(invoice, line_items, payments, to_client_summary(client))
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_STATUS_FAILED",
                    message="Failed to update invoice status",
                    reason=str(e),
                )
            )
