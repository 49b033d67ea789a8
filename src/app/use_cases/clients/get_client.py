"""GetClient Use Case"""

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.invoices.mappers import client_not_found
from .dtos import ClientDetailDTO
from .mappers import to_client_dto, to_client_invoice_dto

RECENT_INVOICES_LIMIT = 10


class GetClient:
    """
    Use Case: Get client with its 10 most recent invoices and total invoice count
    """

    def __init__(self, client_repo: ClientRepository, invoice_repo: InvoiceRepository):
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo

    async def execute(self, owner_id: int, client_id: int) -> Result[ClientDetailDTO]:
        try:
            client = await self.client_repo.get_for_owner(owner_id, client_id)
            if not client:
                return Return.err(client_not_found(client_id))

            recent = await self.invoice_repo.get_recent_for_client(
                owner_id, client.id, limit=RECENT_INVOICES_LIMIT
            )
            counts = await self.invoice_repo.count_by_client_ids(owner_id, [client.id])

            base = to_client_dto(client, counts.get(client.id, 0))
            return Return.ok(
                ClientDetailDTO(
                    **base.model_dump(),
                    recent_invoices=[to_client_invoice_dto(i) for i in recent],
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="GET_CLIENT_FAILED",
                    message="Failed to get client",
                    reason=str(e),
                )
            )
