"""UpdateInvoice Use Case

Replaces an invoice's header fields and line items, recomputing totals.
"""

import logging

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.invoice import can_transition
from src.domain.invoice_totals import calculate_invoice_totals
from .dtos import InvoiceDraftDTO, InvoiceDetailDTO
from .mappers import (
    build_line_items,
    client_not_found,
    invalid_transition,
    invoice_not_found,
    to_client_summary,
    to_invoice_detail,
)
from .validation import validate_invoice_draft, validation_error

logger = logging.getLogger(__name__)


class UpdateInvoice:
    """
    Use Case: Update invoice from a draft

    Business Rules:
    1. Ownership checked before anything else
    2. Same validation and client check as creation
    3. Line items are replaced as a whole (delete all, insert new)
    4. invoice_number and source never change
    5. Omitted status keeps the current one; a new status must be a valid transition
    6. All writes happen in one transaction

    Flow:
    1. Load invoice for owner
    2. Validate draft
    3. Verify client ownership
    4. Validate status transition
    5. Recompute totals
    6. Replace line items and rewrite header fields
    7. Commit transaction
    8. Return response
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

    async def execute(
        self, owner_id: int, invoice_id: int, draft: InvoiceDraftDTO
    ) -> Result[InvoiceDetailDTO]:
        try:
            # Step 1: Load invoice for owner
            invoice = await self.invoice_repo.get_for_owner(owner_id, invoice_id)
            if not invoice:
                return Return.err(invoice_not_found(invoice_id))

            # Step 2: Validate draft
            details = validate_invoice_draft(draft)
            if details:
                return Return.err(validation_error(details))

            # Step 3: Verify client ownership
            client_summary = None
            if draft.client_id is not None:
                client = await self.client_repo.get_for_owner(owner_id, draft.client_id)
                if not client:
                    return Return.err(client_not_found(draft.client_id))
                client_summary = to_client_summary(client)

            # Step 4: Validate status transition
            status = invoice.status
            if draft.status is not None and draft.status != invoice.status:
                if not can_transition(invoice.status, draft.status):
                    return Return.err(invalid_transition(invoice.status, draft.status))
                status = draft.status

            # Step 5: Recompute totals
            totals = calculate_invoice_totals(draft.line_items)

            # Step 6: Replace line items and rewrite header fields
            await self.line_item_repo.delete_by_invoice_id(invoice.id)
            line_items = await self.line_item_repo.create_many(
                build_line_items(invoice.id, totals)
            )

            invoice.client_id = draft.client_id
            invoice.invoice_date = draft.invoice_date
            invoice.due_date = draft.due_date
            invoice.currency = draft.currency
            invoice.payment_terms = draft.payment_terms
            invoice.notes = draft.notes
            invoice.status = status
            invoice.subtotal = totals.subtotal
            invoice.total_tax = totals.total_tax
            invoice.total = totals.total
            invoice = await self.invoice_repo.update(invoice)

            payments = await self.payment_repo.get_by_invoice_id(invoice.id)

            # Step 7: Commit transaction
            await self.uow.commit()

            logger.info(f"Updated invoice {invoice.invoice_number} for user {owner_id}")

            # Step 8: Build response
            return Return.ok(to_invoice_detail(invoice, line_items, payments, client_summary))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_INVOICE_FAILED",
                    message="Failed to update invoice",
                    reason=str(e),
                )
            )
