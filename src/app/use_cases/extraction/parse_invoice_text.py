"""ParseInvoiceText Use Case

Turns a free-text request into an invoice draft using a language model.
The draft is returned for review; nothing is persisted.
"""

import logging
from datetime import date
from typing import Any, Callable, Dict

from libs.result import Result, Return, Error
from src.app.repositories.client_repository import ClientRepository
from src.app.services.text_extraction_service import TextExtractionService, ExtractionError
from src.app.use_cases.invoices.dtos import InvoiceDraftDTO, LineItemDraftDTO
from src.domain.invoice import InvoiceSource
from .dtos import ParseTextCommandDTO, ParsedInvoiceDTO
from .normalization import clean_text, parse_date, parse_decimal, pick

logger = logging.getLogger(__name__)


def extraction_failed(reason: str) -> Error:
    return Error(
        code="EXTRACTION_FAILED",
        message="Failed to extract invoice data",
        reason=reason,
    )


class ParseInvoiceText:
    """
    Use Case: Parse free text into an invoice draft

    Business Rules:
    1. Text must not be empty
    2. Missing invoice date defaults to today, currency to the default currency
    3. Quantity defaults to 1, tax rate to 0, sort order to position
    4. client_id is set when a client with the same name (case-insensitive) exists
    5. A payload without a line_items list is an extraction failure

    Flow:
    1. Validate text
    2. Call the extraction service
    3. Normalize payload into a draft
    4. Resolve client by name
    """

    def __init__(
        self,
        extraction_service: TextExtractionService,
        client_repo: ClientRepository,
        default_currency: str = "USD",
        today: Callable[[], date] = date.today,
    ):
        self.extraction_service = extraction_service
        self.client_repo = client_repo
        self.default_currency = default_currency
        self.today = today

    def _normalize(self, payload: Dict[str, Any]) -> InvoiceDraftDTO:
        raw_items = pick(payload, "line_items", "lineItems")
        if not isinstance(raw_items, list):
            raise ExtractionError("Extracted data has no line_items list")

        line_items = []
        for index, raw in enumerate(raw_items):
            if not isinstance(raw, dict):
                continue
            line_items.append(
                LineItemDraftDTO(
                    description=clean_text(raw.get("description")) or "",
                    quantity=parse_decimal(raw.get("quantity")) or 1,
                    unit_price=parse_decimal(pick(raw, "unit_price", "unitPrice")),
                    tax_rate=parse_decimal(pick(raw, "tax_rate", "taxRate")) or 0,
                    sort_order=index,
                )
            )

        return InvoiceDraftDTO(
            client_name=clean_text(pick(payload, "client_name", "clientName")),
            invoice_date=parse_date(pick(payload, "invoice_date", "invoiceDate")) or self.today(),
            due_date=parse_date(pick(payload, "due_date", "dueDate")),
            currency=clean_text(payload.get("currency")) or self.default_currency,
            payment_terms=clean_text(pick(payload, "payment_terms", "paymentTerms")),
            notes=clean_text(payload.get("notes")),
            source=InvoiceSource.NLP,
            line_items=line_items,
        )

    async def execute(self, owner_id: int, command: ParseTextCommandDTO) -> Result[ParsedInvoiceDTO]:
        # Step 1: Validate text
        text = (command.text or "").strip()
        if not text:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="Text input is required",
                    reason="text: Text input is required",
                    details=[{"field": "text", "message": "Text input is required"}],
                )
            )

        try:
            # Step 2: Call the extraction service
            payload = await self.extraction_service.extract(text)

            # Step 3: Normalize payload into a draft
            draft = self._normalize(payload)

            # Step 4: Resolve client by name
            if draft.client_name:
                client = await self.client_repo.find_by_name(owner_id, draft.client_name)
                if client:
                    draft.client_id = client.id

            logger.info(
                f"Parsed free text into draft with {len(draft.line_items)} line items "
                f"for user {owner_id}"
            )
            return Return.ok(ParsedInvoiceDTO(draft=draft))

        except ExtractionError as e:
            logger.warning(f"Free-text extraction failed: {e}")
            return Return.err(extraction_failed(str(e)))

        except Exception as e:
            return Return.err(
                Error(
                    code="PARSE_INVOICE_TEXT_FAILED",
                    message="Failed to parse invoice text",
                    reason=str(e),
                )
            )
