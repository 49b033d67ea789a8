"""Data Transfer Objects for Invoice Use Cases

Pydantic models for command inputs and response outputs.
InvoiceDraftDTO is the single draft shape produced by manual entry,
free-text extraction and image extraction alike.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from src.domain.invoice import InvoiceStatus, InvoiceSource


class LineItemDraftDTO(BaseModel):
    """
    Raw line item as entered or extracted

    Derived amounts are never accepted from the caller.
    """

    description: str = Field(
        default="",
        description="What is billed"
    )

    quantity: Optional[Decimal] = Field(
        default=None,
        description="Quantity (defaults to 1 when absent or zero)"
    )

    unit_price: Optional[Decimal] = Field(
        default=None,
        description="Price per unit (required, >= 0)"
    )

    tax_rate: Optional[Decimal] = Field(
        default=None,
        description="Tax rate percentage 0-100 (defaults to 0)"
    )

    sort_order: Optional[int] = Field(
        default=None,
        description="Display order (defaults to position in the list)"
    )


class InvoiceDraftDTO(BaseModel):
    """
    Command DTO for creating or updating an invoice

    Used as input to CreateInvoice and UpdateInvoice, and returned by
    ParseInvoiceText / ExtractInvoiceImage for the caller to review.
    """

    client_id: Optional[int] = Field(
        default=None,
        description="Client to bill (must belong to the caller)"
    )

    client_name: Optional[str] = Field(
        default=None,
        description="Client name as extracted (informational)"
    )

    invoice_date: date = Field(
        ...,
        description="Issue date"
    )

    due_date: Optional[date] = Field(
        default=None,
        description="Payment due date (not before invoice_date)"
    )

    currency: str = Field(
        default="USD",
        description="ISO 4217 currency code"
    )

    payment_terms: Optional[str] = Field(default=None)

    notes: Optional[str] = Field(default=None)

    status: Optional[InvoiceStatus] = Field(
        default=None,
        description="Initial/new status (create defaults to draft, update keeps current)"
    )

    source: InvoiceSource = Field(
        default=InvoiceSource.MANUAL,
        description="Provenance of the draft"
    )

    confidence_score: Optional[float] = Field(
        default=None,
        description="Extraction confidence (OCR only, informational)"
    )

    line_items: List[LineItemDraftDTO] = Field(
        default_factory=list,
        description="Billable rows (at least one required)"
    )

    @field_validator("currency")
    @classmethod
    def normalize_currency(cls, v):
        """Upper-case and strip the currency code"""
        return v.strip().upper() if v else v

    class Config:
        json_schema_extra = {
            "example": {
                "client_id": 3,
                "invoice_date": "2025-03-14",
                "due_date": "2025-04-13",
                "currency": "USD",
                "payment_terms": "Net 30",
                "line_items": [
                    {"description": "Design", "quantity": "5", "unit_price": "100", "tax_rate": "10"}
                ]
            }
        }


class ClientSummaryDTO(BaseModel):
    """Client fields embedded in invoice responses"""

    id: int
    client_name: str
    client_email: Optional[str] = None
    client_address: Optional[str] = None
    client_phone: Optional[str] = None


class LineItemDTO(BaseModel):
    """Persisted line item with derived amounts"""

    id: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    line_total: Decimal
    sort_order: int


class PaymentDTO(BaseModel):
    """Payment recorded against an invoice"""

    id: int
    amount: Decimal
    payment_date: date
    payment_method: Optional[str] = None
    reference_number: Optional[str] = None
    notes: Optional[str] = None


class InvoiceDetailDTO(BaseModel):
    """
    Response DTO for a single invoice with its line items and payments

    Returned by CreateInvoice, GetInvoice, UpdateInvoice and UpdateInvoiceStatus.
    """

    id: int
    invoice_number: str
    client_id: Optional[int] = None
    client: Optional[ClientSummaryDTO] = None
    invoice_date: date
    due_date: Optional[date] = None
    currency: str
    subtotal: Decimal
    total_tax: Decimal
    total: Decimal
    status: str
    source: str
    confidence_score: Optional[float] = None
    payment_terms: Optional[str] = None
    notes: Optional[str] = None
    line_items: List[LineItemDTO] = Field(default_factory=list)
    payments: List[PaymentDTO] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_number": "INV-202503-0001",
                "client_id": 3,
                "client": {"id": 3, "client_name": "Acme Corp"},
                "invoice_date": "2025-03-14",
                "due_date": "2025-04-13",
                "currency": "USD",
                "subtotal": "500.00",
                "total_tax": "50.00",
                "total": "550.00",
                "status": "draft",
                "source": "manual",
                "line_items": [
                    {
                        "id": 1,
                        "description": "Design",
                        "quantity": "5.000000",
                        "unit_price": "100.000000",
                        "tax_rate": "10.00",
                        "tax_amount": "50.000000",
                        "line_total": "500.000000",
                        "sort_order": 0
                    }
                ],
                "payments": [],
                "created_at": "2025-03-14T09:00:00Z",
                "updated_at": "2025-03-14T09:00:00Z"
            }
        }


class InvoiceSummaryDTO(BaseModel):
    """Invoice row in listings"""

    id: int
    invoice_number: str
    client_id: Optional[int] = None
    client: Optional[ClientSummaryDTO] = None
    invoice_date: date
    due_date: Optional[date] = None
    currency: str
    subtotal: Decimal
    total_tax: Decimal
    total: Decimal
    status: str
    source: str
    line_item_count: int = 0
    payment_count: int = 0
    created_at: datetime


class PaginationDTO(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class ListInvoicesQueryDTO(BaseModel):
    """
    Query DTO for ListInvoices

    Values are validated by the use case (allow-listed sort fields,
    bounded pagination) so bad input yields a VALIDATION_ERROR result.
    """

    page: int = 1
    limit: int = 10
    search: Optional[str] = None
    status: Optional[str] = None
    client_id: Optional[int] = None
    sort_by: str = "invoice_date"
    sort_order: str = "desc"


class ListInvoicesResponseDTO(BaseModel):
    invoices: List[InvoiceSummaryDTO]
    pagination: PaginationDTO


class InvoiceStatsDTO(BaseModel):
    """Dashboard aggregates for one owner"""

    total_revenue: Decimal = Field(..., description="Sum of totals of paid invoices")
    avg_invoice_value: Decimal = Field(..., description="Average total over all invoices")
    client_count: int
    total_invoices_count: int
    draft_invoices_count: int
    paid_invoices_count: int
    overdue_invoices_count: int


class DeleteResponseDTO(BaseModel):
    id: int
    message: str


class InvoicePdfDTO(BaseModel):
    """Rendered invoice document"""

    invoice_id: int
    invoice_number: str
    filename: str
    content: bytes


class OverdueScanResultDTO(BaseModel):
    """Summary of one overdue-invoice scan"""

    scanned_date: date
    candidates: int
    marked_overdue: int
    failed: int
    execution_time_ms: int
