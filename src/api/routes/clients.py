"""Client API Routes

CRUD for the caller's client directory. Deleting a client keeps its
invoices and clears their client reference.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.api.schemas.client_request import ClientRequestSchema
from src.app.use_cases.clients import (
    CreateClient,
    ListClients,
    GetClient,
    UpdateClient,
    DeleteClient,
    ClientDTO,
    ClientDetailDTO,
    ListClientsQueryDTO,
    ListClientsResponseDTO,
)
from src.app.use_cases.invoices.dtos import DeleteResponseDTO
from src.adapter.repositories import SqlAlchemyClientRepository, SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session

router = APIRouter(prefix="/clients", tags=["Clients"])

NOT_FOUND_RESPONSE = {
    "description": "Client not found (or owned by another user)",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "CLIENT_NOT_FOUND",
                    "message": "Client 7 not found"
                }
            }
        }
    }
}


@router.post("", response_model=ClientDTO, status_code=status.HTTP_201_CREATED)
async def create_client(
    request: ClientRequestSchema,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Add a client to the caller's directory."""
    use_case = CreateClient(
        uow=SqlAlchemyUnitOfWork(session),
        client_repo=SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(owner_id, request.to_command())

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get("", response_model=ListClientsResponseDTO, status_code=status.HTTP_200_OK)
async def list_clients(
    page: int = Query(1, description="Page number (>= 1)"),
    limit: int = Query(10, description="Page size (1-100)"),
    search: Optional[str] = Query(None, description="Name, email or phone substring"),
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """List clients, newest first, with their invoice counts."""
    use_case = ListClients(
        client_repo=SqlAlchemyClientRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(
        owner_id, ListClientsQueryDTO(page=page, limit=limit, search=search)
    )

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{client_id}",
    response_model=ClientDetailDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE}
)
async def get_client(
    client_id: int,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Get a client with its most recent invoices."""
    use_case = GetClient(
        client_repo=SqlAlchemyClientRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(owner_id, client_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.put(
    "/{client_id}",
    response_model=ClientDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE}
)
async def update_client(
    client_id: int,
    request: ClientRequestSchema,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Replace a client's details."""
    use_case = UpdateClient(
        uow=SqlAlchemyUnitOfWork(session),
        client_repo=SqlAlchemyClientRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(owner_id, client_id, request.to_command())

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.delete(
    "/{client_id}",
    response_model=DeleteResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE}
)
async def delete_client(
    client_id: int,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Delete a client. Its invoices remain, without a client."""
    use_case = DeleteClient(
        uow=SqlAlchemyUnitOfWork(session),
        client_repo=SqlAlchemyClientRepository(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
    )
    result = await use_case.execute(owner_id, client_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
