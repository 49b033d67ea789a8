"""CreateClient Use Case"""

import logging

from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.client_repository import ClientRepository
from src.app.use_cases.invoices.validation import validation_error
from src.domain.client import Client
from .dtos import ClientCommandDTO, ClientDTO
from .mappers import clean, to_client_dto, validate_client_command

logger = logging.getLogger(__name__)


class CreateClient:
    """
    Use Case: Register a client for the owner

    Business Rules:
    1. client_name is required
    2. Blank optional fields are stored as NULL
    """

    def __init__(self, uow: UnitOfWork, client_repo: ClientRepository):
        self.uow = uow
        self.client_repo = client_repo

    async def execute(self, owner_id: int, command: ClientCommandDTO) -> Result[ClientDTO]:
        details = validate_client_command(command)
        if details:
            return Return.err(validation_error(details, message="Client validation failed"))

        try:
            client = await self.client_repo.create(
                Client(
                    user_id=owner_id,
                    client_name=clean(command.client_name),
                    client_email=clean(command.client_email),
                    client_address=clean(command.client_address),
                    client_phone=clean(command.client_phone),
                    tax_id=clean(command.tax_id),
                )
            )
            await self.uow.commit()

            logger.info(f"Created client {client.id} for user {owner_id}")

            return Return.ok(to_client_dto(client))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CREATE_CLIENT_FAILED",
                    message="Failed to create client",
                    reason=str(e),
                )
            )
