"""Scanned Invoice Extraction Route"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.api.auth import get_current_user_id
from src.api.error import ClientError
from src.app.services.image_extraction_service import ImageExtractionService
from src.app.use_cases.extraction import ExtractInvoiceImage, ImageExtractionResultDTO
from src.adapter.repositories import SqlAlchemyClientRepository
from src.depends import get_session, get_image_extraction_service

router = APIRouter(prefix="/ocr", tags=["Extraction"])


@router.post(
    "/process",
    response_model=ImageExtractionResultDTO,
    status_code=status.HTTP_200_OK,
    responses={
        400: {
            "description": "Missing, oversized or unsupported upload",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "VALIDATION_ERROR",
                            "message": "Unsupported file type: application/pdf",
                            "details": [
                                {"field": "image", "message": "Unsupported file type: application/pdf"}
                            ]
                        }
                    }
                }
            }
        }
    }
)
async def process_invoice_image(
    image: UploadFile = File(..., description="Scanned invoice (PNG, JPEG, TIFF, ...)"),
    owner_id: int = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_session),
    extraction_service: ImageExtractionService = Depends(get_image_extraction_service)
):
    """
    Read a scanned invoice with OCR and return an invoice draft.

    The draft is not saved. It carries the OCR confidence and the
    recognized text for review.
    """
    image_bytes = await image.read()

    use_case = ExtractInvoiceImage(
        extraction_service=extraction_service,
        client_repo=SqlAlchemyClientRepository(session),
        default_currency=ApplicationConfig.DEFAULT_CURRENCY,
        max_upload_bytes=ApplicationConfig.OCR_MAX_UPLOAD_BYTES,
    )
    result = await use_case.execute(owner_id, image_bytes, content_type=image.content_type)

    if result.is_err():
        raise ClientError.from_error(result.error)

    return result.value
