"""CreateInvoice Use Case

Creates an invoice with its line items from a draft, assigning the next
invoice number of the current month.
"""

import logging
from datetime import datetime
from typing import Callable

from sqlalchemy.exc import IntegrityError

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.line_item_repository import LineItemRepository
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_number import invoice_number_prefix, next_invoice_number
from src.domain.invoice_totals import calculate_invoice_totals
from .dtos import InvoiceDraftDTO, InvoiceDetailDTO
from .mappers import build_line_items, client_not_found, to_client_summary, to_invoice_detail
from .validation import validate_invoice_draft, validation_error

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class CreateInvoice:
    """
    Use Case: Create invoice from a draft

    Business Rules:
    1. Draft must have at least one valid line item
    2. client_id, when given, must belong to the owner
    3. Totals are computed from line items, never taken from the caller
    4. Invoice number is INV-YYYYMM-NNNN, unique across all invoices
    5. Invoice and line items are written in one transaction
    6. Status defaults to draft

    Flow:
    1. Validate draft (field-level errors)
    2. Verify client ownership
    3. Compute totals
    4. Generate invoice number from the latest one of the month
    5. Insert invoice + line items and commit
    6. On a number collision, roll back and retry with a fresh number
    7. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        line_item_repo: LineItemRepository,
        client_repo: ClientRepository,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.line_item_repo = line_item_repo
        self.client_repo = client_repo
        self.max_attempts = max_attempts
        self.clock = clock

    async def execute(self, owner_id: int, draft: InvoiceDraftDTO) -> Result[InvoiceDetailDTO]:
        """
        Execute invoice creation

        Args:
            owner_id: Authenticated user ID
            draft: InvoiceDraftDTO with header fields and line items

        Returns:
            Result[InvoiceDetailDTO]: Success with the created invoice or error
        """
        # Step 1: Validate draft
        details = validate_invoice_draft(draft)
        if details:
            return Return.err(validation_error(details))

        try:
            # Step 2: Verify client ownership
            client_summary = None
            if draft.client_id is not None:
                client = await self.client_repo.get_for_owner(owner_id, draft.client_id)
                if not client:
                    return Return.err(client_not_found(draft.client_id))
                client_summary = to_client_summary(client)

            # Step 3: Compute totals
            totals = calculate_invoice_totals(draft.line_items)

            # Step 4-6: Generate number, insert, commit (retry on collision)
            for attempt in range(1, self.max_attempts + 1):
                prefix = invoice_number_prefix(self.clock())
                latest = await self.invoice_repo.get_latest_invoice_number(prefix)
                invoice_number = next_invoice_number(prefix, latest)

                try:
                    invoice = await self.invoice_repo.create(
                        Invoice(
                            user_id=owner_id,
                            client_id=draft.client_id,
                            invoice_number=invoice_number,
                            invoice_date=draft.invoice_date,
                            due_date=draft.due_date,
                            currency=draft.currency,
                            subtotal=totals.subtotal,
                            total_tax=totals.total_tax,
                            total=totals.total,
                            status=draft.status or InvoiceStatus.DRAFT,
                            source=draft.source,
                            confidence_score=draft.confidence_score,
                            payment_terms=draft.payment_terms,
                            notes=draft.notes,
                        )
                    )
                    line_items = await self.line_item_repo.create_many(
                        build_line_items(invoice.id, totals)
                    )
                    await self.uow.commit()
                except IntegrityError:
                    await self.uow.rollback()
                    if not await self.invoice_repo.get_by_invoice_number(invoice_number):
                        raise
                    logger.warning(
                        f"Invoice number {invoice_number} already taken "
                        f"(attempt {attempt}/{self.max_attempts}), retrying"
                    )
                    continue

                logger.info(f"Created invoice {invoice.invoice_number} for user {owner_id}")

                # Step 7: Build response
                return Return.ok(to_invoice_detail(invoice, line_items, [], client_summary))

            return Return.err(
                Error(
                    code="INVOICE_NUMBER_CONFLICT",
                    message="Could not allocate a unique invoice number",
                    reason=f"Invoice number collided {self.max_attempts} times",
                )
            )

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_INVOICE_FAILED",
                    message="Failed to create invoice",
                    reason=str(e),
                )
            )
