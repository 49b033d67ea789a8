"""Invoice API Routes

FastAPI routes for the invoice lifecycle: create, read, update, status
changes, delete, listing, statistics and PDF download.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.api.schemas.invoice_request import InvoiceRequestSchema, InvoiceStatusRequestSchema
from src.app.services.pdf_service import PdfService
from src.app.use_cases.invoices import (
    CreateInvoice,
    GetInvoice,
    UpdateInvoice,
    UpdateInvoiceStatus,
    DeleteInvoice,
    ListInvoices,
    GetInvoiceStats,
    GenerateInvoicePdf,
)
from src.app.use_cases.invoices.dtos import (
    InvoiceDetailDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    InvoiceStatsDTO,
    DeleteResponseDTO,
)
from src.adapter.repositories import (
    SqlAlchemyClientRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyLineItemRepository,
    SqlAlchemyPaymentRepository,
    SqlAlchemyUserRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, get_pdf_service

router = APIRouter(prefix="/invoices", tags=["Invoices"])

NOT_FOUND_RESPONSE = {
    "description": "Invoice not found (or owned by another user)",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_FOUND",
                    "message": "Invoice 123 not found"
                }
            }
        }
    }
}

VALIDATION_RESPONSE = {
    "description": "Invalid invoice data",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invoice validation failed",
                    "details": [
                        {"field": "due_date", "message": "Due date cannot be before invoice date"}
                    ]
                }
            }
        }
    }
}


@router.post(
    "",
    response_model=InvoiceDetailDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: VALIDATION_RESPONSE,
        404: {
            "description": "Client not found",
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
        },
        409: {
            "description": "Could not allocate an invoice number",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVOICE_NUMBER_CONFLICT",
                            "message": "Could not allocate a unique invoice number"
                        }
                    }
                }
            }
        }
    }
)
async def create_invoice(
    request: InvoiceRequestSchema,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Create an invoice with its line items.

    Totals are computed from the line items and the invoice number
    (`INV-YYYYMM-NNNN`) is assigned by the server.

    **Returns:**
    - 201: Invoice created
    - 400: Validation error (details per field)
    - 404: Client not found
    - 409: Invoice number could not be allocated
    """
    use_case = CreateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyLineItemRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
        max_attempts=ApplicationConfig.INVOICE_NUMBER_MAX_ATTEMPTS,
    )
    result = await use_case.execute(owner_id, request.to_draft())

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "",
    response_model=ListInvoicesResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_RESPONSE}
)
async def list_invoices(
    page: int = Query(1, description="Page number (>= 1)"),
    limit: int = Query(10, description="Page size (1-100)"),
    search: Optional[str] = Query(None, description="Invoice number or client name substring"),
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status"),
    client_id: Optional[int] = Query(None, description="Exact client"),
    sort_by: str = Query("invoice_date", description="invoice_date, due_date, total, invoice_number or created_at"),
    sort_order: str = Query("desc", description="asc or desc"),
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """
    List the caller's invoices with search, filters, sorting and pagination.

    **Returns:**
    - 200: Page of invoices with pagination metadata
    - 400: Invalid query parameters
    """
    use_case = ListInvoices(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyLineItemRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
    )
    query = ListInvoicesQueryDTO(
        page=page,
        limit=limit,
        search=search,
        status=status_filter,
        client_id=client_id,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = await use_case.execute(owner_id, query)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/stats",
    response_model=InvoiceStatsDTO,
    status_code=status.HTTP_200_OK,
)
async def get_invoice_stats(
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Dashboard statistics: revenue from paid invoices, average invoice value
    and counts of clients and invoices by status.
    """
    use_case = GetInvoiceStats(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(owner_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceDetailDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE}
)
async def get_invoice(
    invoice_id: int,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Get an invoice with its client, line items and payments."""
    use_case = GetInvoice(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyLineItemRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(owner_id, invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.put(
    "/{invoice_id}",
    response_model=InvoiceDetailDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_RESPONSE, 404: NOT_FOUND_RESPONSE}
)
async def update_invoice(
    invoice_id: int,
    request: InvoiceRequestSchema,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """
    Replace an invoice's fields and line items.

    The invoice number and source are kept; totals are recomputed.
    """
    use_case = UpdateInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyLineItemRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(owner_id, invoice_id, request.to_draft())

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceDetailDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Unknown status or transition not allowed",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATUS_TRANSITION",
                            "message": "Cannot change status from paid to draft"
                        }
                    }
                }
            }
        },
        404: NOT_FOUND_RESPONSE
    }
)
async def update_invoice_status(
    invoice_id: int,
    request: InvoiceStatusRequestSchema,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Change an invoice's status (draft, sent, paid, overdue, cancelled)."""
    use_case = UpdateInvoiceStatus(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyLineItemRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
    )
    result = await use_case.execute(owner_id, invoice_id, request.status)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    response_model=DeleteResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE}
)
async def delete_invoice(
    invoice_id: int,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session)
):
    """Delete an invoice together with its line items and payments."""
    use_case = DeleteInvoice(
        uow=SqlAlchemyUnitOfWork(session),
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyLineItemRepository(session),
        payment_repo=SqlAlchemyPaymentRepository(session),
    )
    result = await use_case.execute(owner_id, invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: NOT_FOUND_RESPONSE
    }
)
async def download_invoice_pdf(
    invoice_id: int,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    pdf_service: PdfService = Depends(get_pdf_service)
):
    """
    Download an invoice as a PDF file.

    Returns the PDF with `Content-Disposition: attachment; filename=invoice-{number}.pdf`.
    """
    use_case = GenerateInvoicePdf(
        invoice_repo=SqlAlchemyInvoiceRepository(session),
        line_item_repo=SqlAlchemyLineItemRepository(session),
        client_repo=SqlAlchemyClientRepository(session),
        user_repo=SqlAlchemyUserRepository(session),
        pdf_service=pdf_service,
    )
    result = await use_case.execute(owner_id, invoice_id)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return Response(
        content=result.value.content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{result.value.filename}"'
        }
    )
