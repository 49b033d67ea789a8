"""ExtractInvoiceImage Use Case

Reads a scanned invoice with OCR and turns the recognized text into an
invoice draft. The draft is returned for review; nothing is persisted.
"""

import logging
from datetime import date
from typing import Callable, Optional

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.services.image_extraction_service import ImageExtractionService
from src.app.services.text_extraction_service import ExtractionError
from src.app.use_cases.invoices.dtos import InvoiceDraftDTO, LineItemDraftDTO
from src.domain.invoice import InvoiceSource
from .dtos import ImageExtractionResultDTO
from .normalization import parse_date
from .ocr_text_parser import parse_ocr_text
from .parse_invoice_text import extraction_failed

logger = logging.getLogger(__name__)

SUPPORTED_CONTENT_TYPES = (
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/tiff",
    "image/bmp",
    "image/gif",
    "image/webp",
)
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def _invalid_image(message: str) -> Error:
    return Error(
        code="VALIDATION_ERROR",
        message=message,
        reason=f"image: {message}",
        details=[{"field": "image", "message": message}],
    )


class ExtractInvoiceImage:
    """
    Use Case: Extract an invoice draft from an image

    Business Rules:
    1. Upload must be a non-empty image of a supported type within the size limit
    2. Line items, dates, bill-to name and total are read from the text
    3. Unreadable dates default the invoice date to today
    4. client_id is set when a client with the bill-to name exists
    5. OCR confidence is carried on the draft

    Flow:
    1. Validate upload
    2. Run OCR
    3. Parse recognized text
    4. Build draft and resolve client
    """

    def __init__(
        self,
        extraction_service: ImageExtractionService,
        client_repo: ClientRepository,
        default_currency: str = "USD",
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        today: Callable[[], date] = date.today,
    ):
        self.extraction_service = extraction_service
        self.client_repo = client_repo
        self.default_currency = default_currency
        self.max_upload_bytes = max_upload_bytes
        self.today = today

    async def execute(
        self,
        owner_id: int,
        image_bytes: bytes,
        content_type: Optional[str] = None,
    ) -> Result[ImageExtractionResultDTO]:
        # Step 1: Validate upload
        if not image_bytes:
            return Return.err(_invalid_image("No image file provided"))
        if content_type and content_type.lower() not in SUPPORTED_CONTENT_TYPES:
            return Return.err(_invalid_image(f"Unsupported file type: {content_type}"))
        if len(image_bytes) > self.max_upload_bytes:
            return Return.err(_invalid_image(f"Image exceeds {self.max_upload_bytes} bytes"))

        try:
            # Step 2: Run OCR
            extraction = await self.extraction_service.extract(image_bytes)

            # Step 3: Parse recognized text
            fields = parse_ocr_text(extraction.text)

            # Step 4: Build draft and resolve client
            notes = None
            if fields.invoice_number:
                notes = f"Scanned invoice number: {fields.invoice_number}"

            draft = InvoiceDraftDTO(
                client_name=fields.client_name,
                invoice_date=parse_date(fields.invoice_date) or self.today(),
                due_date=parse_date(fields.due_date),
                currency=self.default_currency,
                notes=notes,
                source=InvoiceSource.OCR,
                confidence_score=extraction.confidence,
                line_items=[
                    LineItemDraftDTO(
                        description=item.description,
                        quantity=item.quantity,
                        unit_price=item.unit_price,
                        tax_rate=0,
                        sort_order=index,
                    )
                    for index, item in enumerate(fields.line_items)
                ],
            )

            if draft.client_name:
                client = await self.client_repo.find_by_name(owner_id, draft.client_name)
                if client:
                    draft.client_id = client.id

            logger.info(
                f"Extracted {len(draft.line_items)} line items from image for user {owner_id} "
                f"(confidence={extraction.confidence})"
            )

            return Return.ok(
                ImageExtractionResultDTO(
                    draft=draft,
                    raw_text=extraction.text,
                    confidence=extraction.confidence,
                    invoice_number=fields.invoice_number,
                    extracted_total=fields.total,
                )
            )

        except ExtractionError as e:
            logger.warning(f"Image extraction failed: {e}")
            return Return.err(extraction_failed(str(e)))

        except Exception as e:
            return Return.err(
                Error(
                    code="EXTRACT_INVOICE_IMAGE_FAILED",
                    message="Failed to process invoice image",
                    reason=str(e),
                )
            )
