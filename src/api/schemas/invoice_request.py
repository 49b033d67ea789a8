"""Request schemas for Invoice API

Pydantic models for validating incoming HTTP requests. Cross-field rules
(due date, totals) are enforced by the use cases.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from src.app.use_cases.invoices.dtos import InvoiceDraftDTO
from src.domain.invoice import InvoiceSource, InvoiceStatus


class LineItemRequestSchema(BaseModel):
    """One billable row; derived amounts are never accepted"""

    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="What is billed (required)"
    )

    quantity: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Quantity (defaults to 1)"
    )

    unit_price: Decimal = Field(
        ...,
        ge=0,
        description="Price per unit (required, >= 0)"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        ge=0,
        le=100,
        description="Tax rate percentage 0-100 (defaults to 0)"
    )

    sort_order: Optional[int] = Field(
        default=None,
        ge=0,
        description="Display order (defaults to position)"
    )


class InvoiceRequestSchema(BaseModel):
    """
    Request schema for creating or replacing an invoice

    Used for POST /invoices and PUT /invoices/{id}.
    """

    client_id: Optional[int] = Field(default=None, description="Client to bill")
    invoice_date: date = Field(..., description="Issue date")
    due_date: Optional[date] = Field(default=None, description="Not before invoice_date")
    currency: str = Field(default="USD", min_length=3, max_length=3, description="ISO 4217 code")
    payment_terms: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None)
    status: Optional[InvoiceStatus] = Field(default=None)
    source: InvoiceSource = Field(default=InvoiceSource.MANUAL)
    confidence_score: Optional[float] = Field(default=None, ge=0, le=1)
    line_items: List[LineItemRequestSchema] = Field(
        ...,
        min_length=1,
        description="At least one line item"
    )

    @field_validator("currency")
    @classmethod
    def validate_currency(cls, v):
        """Currency must be letters; normalized to upper case"""
        if not v.isalpha():
            raise ValueError("Currency must be a 3-letter ISO code")
        return v.upper()

    def to_draft(self) -> InvoiceDraftDTO:
        return InvoiceDraftDTO(**self.model_dump())

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 3,
                "invoice_date": "2025-03-14",
                "due_date": "2025-04-13",
                "currency": "USD",
                "payment_terms": "Net 30",
                "notes": "Thank you!",
                "line_items": [
                    {"description": "Design", "quantity": 5, "unit_price": 100, "tax_rate": 10},
                    {"description": "Hosting", "unit_price": 50}
                ]
            }
        }


class InvoiceStatusRequestSchema(BaseModel):
    """
    Request schema for PATCH /invoices/{id}/status

    status is a plain string so unknown values reach the use case and come
    back as VALIDATION_ERROR.
    """

    status: str = Field(..., description="draft, sent, paid, overdue or cancelled")
