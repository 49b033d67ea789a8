"""ListInvoices Use Case

Searches, filters, sorts and paginates an owner's invoices.
"""

import math

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository, SORTABLE_FIELDS, SORT_ORDERS
from src.app.repositories.line_item_repository import LineItemRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.invoice import InvoiceStatus
from .dtos import ListInvoicesQueryDTO, ListInvoicesResponseDTO, PaginationDTO
from .mappers import to_client_summary, to_invoice_summary
from .validation import validation_error

MAX_PAGE_SIZE = 100


class ListInvoices:
    """
    Use Case: List invoices with search, filters, sorting and pagination

    Business Rules:
    1. Only the owner's invoices are visible
    2. search matches invoice number or client name (case-insensitive substring)
    3. status and client_id are exact filters
    4. page >= 1, 1 <= limit <= 100
    5. sort_by is allow-listed, sort_order is asc or desc

    Flow:
    1. Validate query
    2. Search invoices (page + total count)
    3. Load clients and line item / payment counts for the page
    4. Build response with pagination metadata
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

    @staticmethod
    def _validate(query: ListInvoicesQueryDTO):
        details = []
        if query.page < 1:
            details.append({"field": "page", "message": "Page must be at least 1"})
        if query.limit < 1 or query.limit > MAX_PAGE_SIZE:
            details.append({"field": "limit", "message": f"Limit must be between 1 and {MAX_PAGE_SIZE}"})
        if query.sort_by not in SORTABLE_FIELDS:
            details.append({"field": "sort_by", "message": f"Must be one of: {', '.join(SORTABLE_FIELDS)}"})
        if query.sort_order not in SORT_ORDERS:
            details.append({"field": "sort_order", "message": "Must be asc or desc"})
        if query.status is not None and query.status not in {s.value for s in InvoiceStatus}:
            details.append({
                "field": "status",
                "message": f"Must be one of: {', '.join(s.value for s in InvoiceStatus)}",
            })
        return details

    async def execute(self, owner_id: int, query: ListInvoicesQueryDTO) -> Result[ListInvoicesResponseDTO]:
        # Step 1: Validate query
        details = self._validate(query)
        if details:
            return Return.err(validation_error(details, message="Invalid invoice query"))

        try:
            # Step 2: Search invoices
            invoices, total = await self.invoice_repo.search(
                owner_id=owner_id,
                search=query.search.strip() if query.search and query.search.strip() else None,
                status=InvoiceStatus(query.status) if query.status else None,
                client_id=query.client_id,
                sort_by=query.sort_by,
                sort_order=query.sort_order,
                limit=query.limit,
                offset=(query.page - 1) * query.limit,
            )

            # Step 3: Load clients and counts for the page
            invoice_ids = [invoice.id for invoice in invoices]
            client_ids = sorted({invoice.client_id for invoice in invoices if invoice.client_id is not None})

            clients = await self.client_repo.get_many_for_owner(owner_id, client_ids) if client_ids else {}
            line_item_counts = await self.line_item_repo.count_by_invoice_ids(invoice_ids) if invoice_ids else {}
            payment_counts = await self.payment_repo.count_by_invoice_ids(invoice_ids) if invoice_ids else {}

            # Step 4: Build response
            summaries = [
                to_invoice_summary(
                    invoice,
                    to_client_summary(clients.get(invoice.client_id)),
                    line_item_count=line_item_counts.get(invoice.id, 0),
                    payment_count=payment_counts.get(invoice.id, 0),
                )
                for invoice in invoices
            ]

            return Return.ok(
                ListInvoicesResponseDTO(
                    invoices=summaries,
                    pagination=PaginationDTO(
                        total=total,
                        page=query.page,
                        limit=query.limit,
                        total_pages=math.ceil(total / query.limit),
                    ),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_INVOICES_FAILED",
                    message="Failed to list invoices",
                    reason=str(e),
                )
            )
