"""ListClients Use Case"""

import math

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.invoices.dtos import PaginationDTO
from src.app.use_cases.invoices.list_invoices import MAX_PAGE_SIZE
from src.app.use_cases.invoices.validation import validation_error
from .dtos import ListClientsQueryDTO, ListClientsResponseDTO
from .mappers import to_client_dto


class ListClients:
    """
    Use Case: List the owner's clients

    Business Rules:
    1. search matches name, email or phone (case-insensitive substring)
    2. Newest clients first
    3. Each row carries its invoice count
    """

    def __init__(self, client_repo: ClientRepository, invoice_repo: InvoiceRepository):
        self.client_repo = client_repo
        self.invoice_repo = invoice_repo

    async def execute(self, owner_id: int, query: ListClientsQueryDTO) -> Result[ListClientsResponseDTO]:
        details = []
        if query.page < 1:
            details.append({"field": "page", "message": "Page must be at least 1"})
        if query.limit < 1 or query.limit > MAX_PAGE_SIZE:
            details.append({"field": "limit", "message": f"Limit must be between 1 and {MAX_PAGE_SIZE}"})
        if details:
            return Return.err(validation_error(details, message="Invalid client query"))

        try:
            clients, total = await self.client_repo.search(
                owner_id=owner_id,
                search=query.search.strip() if query.search and query.search.strip() else None,
                limit=query.limit,
                offset=(query.page - 1) * query.limit,
            )

            client_ids = [client.id for client in clients]
            counts = await self.invoice_repo.count_by_client_ids(owner_id, client_ids) if client_ids else {}

            return Return.ok(
                ListClientsResponseDTO(
                    clients=[to_client_dto(c, counts.get(c.id, 0)) for c in clients],
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
                    code="LIST_CLIENTS_FAILED",
                    message="Failed to list clients",
                    reason=str(e),
                )
            )
