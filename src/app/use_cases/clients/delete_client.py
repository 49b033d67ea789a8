"""DeleteClient Use Case"""

import logging

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.invoices.dtos import DeleteResponseDTO
from src.app.use_cases.invoices.mappers import client_not_found

logger = logging.getLogger(__name__)


class DeleteClient:
    """
    Use Case: Delete a client

    Business Rules:
    1. Ownership checked
    2. The client's invoices are kept, with client_id set to NULL
    """

    def __init__(
        self,
        uow: UnitOfWork,
        client_repo: ClientRepository,
        invoice_repo: InvoiceRepository,
    ):
        self.uow = uow
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo

    async def execute(self, owner_id: int, client_id: int) -> Result[DeleteResponseDTO]:
        try:
            client = await self.client_repo.get_for_owner(owner_id, client_id)
            if not client:
                return Return.err(client_not_found(client_id))

            await self.invoice_repo.detach_client(owner_id, client.id)
            await self.client_repo.delete(client)
            await self.uow.commit()

            logger.info(f"Deleted client {client_id} for user {owner_id}")

            return Return.ok(DeleteResponseDTO(id=client_id, message="Client deleted successfully"))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DELETE_CLIENT_FAILED",
                    message="Failed to delete client",
                    reason=str(e),
                )
            )
