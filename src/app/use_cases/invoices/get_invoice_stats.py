"""GetInvoiceStats Use Case

Dashboard aggregates over an owner's invoices and clients.
"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain import money
from src.domain.invoice import InvoiceStatus
from .dtos import InvoiceStatsDTO


class GetInvoiceStats:
    """
    Use Case: Invoice statistics

    Business Rules:
    1. total_revenue is the sum of totals of paid invoices
    2. avg_invoice_value averages totals over all invoices (0 when none)
    3. Counts are per owner
    """

    def __init__(
        self,
        invoice_repo: InvoiceRepository,
        client_repo: ClientRepository,
    ):
        self.invoice_repo = invoice_repo
        self.client_repo = client_repo

    async def execute(self, owner_id: int) -> Result[InvoiceStatsDTO]:
        try:
            revenue = await self.invoice_repo.sum_total(owner_id, status=InvoiceStatus.PAID)
            average = await self.invoice_repo.average_total(owner_id)
            status_counts = await self.invoice_repo.count_by_status(owner_id)
            client_count = await self.client_repo.count_for_owner(owner_id)

            return Return.ok(
                InvoiceStatsDTO(
                    total_revenue=money.round_currency(revenue),
                    avg_invoice_value=money.round_currency(average),
                    client_count=client_count,
                    total_invoices_count=sum(status_counts.values()),
                    draft_invoices_count=status_counts.get(InvoiceStatus.DRAFT, 0),
                    paid_invoices_count=status_counts.get(InvoiceStatus.PAID, 0),
                    overdue_invoices_count=status_counts.get(InvoiceStatus.OVERDUE, 0),
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_INVOICE_STATS_FAILED",
                    message="Failed to get invoice statistics",
                    reason=str(e),
                )
            )
