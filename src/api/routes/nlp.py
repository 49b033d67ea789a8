"""Free-text Invoice Extraction Route"""

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.api.schemas.extraction_request import ParseTextRequestSchema
from src.app.services.text_extraction_service import TextExtractionService
from src.app.use_cases.extraction import ParseInvoiceText, ParseTextCommandDTO, ParsedInvoiceDTO
from src.adapter.repositories import SqlAlchemyClientRepository
from src.depends import get_session, get_text_extraction_service

router = APIRouter(prefix="/nlp", tags=["Extraction"])


@router.post(
    "/parse",
    response_model=ParsedInvoiceDTO,
    status_code=status.HTTP_200_OK,
    responses={
        502: {
            "description": "Language model unavailable or returned unusable output",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "EXTRACTION_FAILED",
                            "message": "Failed to extract invoice data"
                        }
                    }
                }
            }
        }
    }
)
async def parse_invoice_text(
    request: ParseTextRequestSchema,
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    extraction_service: TextExtractionService = Depends(get_text_extraction_service)
):
    """
    Turn a free-text request into an invoice draft.

    The draft is returned for review and is not saved; submit it to
    `POST /invoices` to create the invoice.
    """
    use_case = ParseInvoiceText(
        extraction_service=extraction_service,
        client_repo=SqlAlchemyClientRepository(session),
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(owner_id, ParseTextCommandDTO(text=request.text))

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
