"""UpdateClient Use Case"""

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.invoices.mappers import client_not_found
from src.app.use_cases.invoices.validation import validation_error
from .dtos import ClientCommandDTO, ClientDTO
from .mappers import clean, to_client_dto, validate_client_command


class UpdateClient:
    """
    Use Case: Replace a client's details

    Business Rules:
    1. Ownership checked
    2. Same validation as creation
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

    async def execute(self, owner_id: int, client_id: int, command: ClientCommandDTO) -> Result[ClientDTO]:
        try:
            client = await self.client_repo.get_for_owner(owner_id, client_id)
            if not client:
                return Return.err(client_not_found(client_id))

            details = validate_client_command(command)
            if details:
                return Return.err(validation_error(details, message="Client validation failed"))

            client.client_name = clean(command.client_name)
            client.client_email = clean(command.client_email)
            client.client_address = clean(command.client_address)
            client.client_phone = clean(command.client_phone)
            client.tax_id = clean(command.tax_id)

            client = await self.client_repo.update(client)
            counts = await self.invoice_repo.count_by_client_ids(owner_id, [client.id])

            await self.uow.commit()

            return Return.ok(to_client_dto(client, counts.get(client.id, 0)))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_CLIENT_FAILED",
                    message="Failed to update client",
                    reason=str(e),
                )
            )
