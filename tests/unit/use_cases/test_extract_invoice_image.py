"""Unit tests for recognized-text parsing and ExtractInvoiceImage"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.services.image_extraction_service import ImageExtraction
from src.app.services.text_extraction_service import ExtractionError
from src.app.use_cases.extraction import ExtractInvoiceImage, parse_ocr_text

SCANNED_TEXT = """ACME DESIGN STUDIO
Invoice Number: INV-2025-042
Invoice Date: March 14, 2025
Due Date: 2025-04-13
Bill To: Globex Corporation

Web design 2 $500.00 $1,000.00
Hosting 12 25.00 300.00
Subtotal 1 1,300.00 1,300.00
Total: $1,300.00
"""


class TestParseOcrText:

    def test_header_fields(self):
        fields = parse_ocr_text(SCANNED_TEXT)

        assert fields.invoice_number == "INV-2025-042"
        assert fields.invoice_date == "March 14, 2025"
        assert fields.due_date == "2025-04-13"
        assert fields.client_name == "Globex Corporation"
        assert fields.total == Decimal("1300.00")

    def test_line_items_skip_summary_rows(self):
        fields = parse_ocr_text(SCANNED_TEXT)

        assert [item.description for item in fields.line_items] == ["Web design", "Hosting"]
        assert fields.line_items[0].quantity == Decimal("2")
        assert fields.line_items[0].unit_price == Decimal("500.00")
        assert fields.line_items[0].line_total == Decimal("1000.00")
        assert fields.line_items[1].quantity == Decimal("12")

    def test_unrecognized_text(self):
        fields = parse_ocr_text("blurry photo of a cat")

        assert fields.invoice_number is None
        assert fields.total is None
        assert fields.line_items == []


@pytest.fixture
def extraction_service():
    service = MagicMock()
    service.extract = AsyncMock(return_value=ImageExtraction(text=SCANNED_TEXT, confidence=0.87))
    return service


@pytest.fixture
def client_repo():
    repo = MagicMock()
    repo.find_by_name = AsyncMock(return_value=None)
    return repo


@pytest.fixture
def use_case(extraction_service, client_repo):
    return ExtractInvoiceImage(
        extraction_service=extraction_service,
        client_repo=client_repo,
        max_upload_bytes=1024,
        today=lambda: date(2025, 3, 20),
    )


@pytest.mark.asyncio
class TestExtractInvoiceImage:

    async def test_builds_draft(self, use_case, extraction_service):
        """
        Given: A readable scanned invoice
        When: the image is processed
        Then: A draft with OCR source, confidence and parsed fields is returned
        """
        result = await use_case.execute(1, b"fake-png-bytes", content_type="image/png")

        assert result.is_ok()
        extracted = result.value
        assert extracted.confidence == 0.87
        assert extracted.invoice_number == "INV-2025-042"
        assert extracted.extracted_total == Decimal("1300.00")
        assert extracted.raw_text == SCANNED_TEXT

        draft = extracted.draft
        assert draft.source == "ocr"
        assert draft.confidence_score == 0.87
        assert draft.invoice_date == date(2025, 3, 14)
        assert draft.due_date == date(2025, 4, 13)
        assert draft.client_name == "Globex Corporation"
        assert draft.notes == "Scanned invoice number: INV-2025-042"
        assert len(draft.line_items) == 2
        assert draft.line_items[1].unit_price == Decimal("25.00")
        extraction_service.extract.assert_called_once_with(b"fake-png-bytes")

    async def test_missing_date_defaults_to_today(self, use_case, extraction_service):
        extraction_service.extract = AsyncMock(
            return_value=ImageExtraction(text="Widget 1 10.00 10.00", confidence=0.5)
        )

        result = await use_case.execute(1, b"img")

        assert result.value.draft.invoice_date == date(2025, 3, 20)
        assert result.value.draft.notes is None

    async def test_known_client_is_linked(self, use_case, client_repo, sample_client):
        client_repo.find_by_name = AsyncMock(return_value=sample_client)

        result = await use_case.execute(1, b"img", content_type="image/jpeg")

        assert result.value.draft.client_id == 3

    @pytest.mark.parametrize(
        "payload,content_type",
        [
            (b"", "image/png"),
            (b"%PDF-1.4", "application/pdf"),
            (b"x" * 2048, "image/png"),
        ],
    )
    async def test_rejected_uploads(self, use_case, extraction_service, payload, content_type):
        result = await use_case.execute(1, payload, content_type=content_type)

        assert result.error.code == "VALIDATION_ERROR"
        assert result.error.details[0]["field"] == "image"
        extraction_service.extract.assert_not_called()

    async def test_ocr_failure(self, use_case, extraction_service):
        extraction_service.extract = AsyncMock(side_effect=ExtractionError("tesseract is not installed"))

        result = await use_case.execute(1, b"img")

        assert result.error.code == "EXTRACTION_FAILED"
