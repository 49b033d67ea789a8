"""Data Transfer Objects for Extraction Use Cases"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field

from src.app.use_cases.invoices.dtos import InvoiceDraftDTO


class ParseTextCommandDTO(BaseModel):
    text: str = Field(..., description="Free-text invoice request")

    class Config:
        json_schema_extra = {
            "example": {"text": "Invoice Acme Corp for 5 hours of design at $100/hr, 10% tax"}
        }


class ParsedInvoiceDTO(BaseModel):
    """Draft produced from free text, for the caller to review and submit"""

    draft: InvoiceDraftDTO


class ImageExtractionResultDTO(BaseModel):
    """Draft produced from a scanned invoice plus what was read from it"""

    draft: InvoiceDraftDTO
    raw_text: str = Field(..., description="Full recognized text")
    confidence: Optional[float] = Field(default=None, description="OCR confidence between 0 and 1")
    invoice_number: Optional[str] = Field(default=None, description="Number printed on the scanned invoice")
    extracted_total: Optional[Decimal] = Field(default=None, description="Total printed on the scanned invoice")
