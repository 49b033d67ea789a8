"""Invoice Domain Entity

Billable document owned by a user, optionally addressed to a client.
"""

from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Text, Date, Float
from src.domain.base import BaseModel, BigIntegerId


class InvoiceStatus(str, Enum):
    """Invoice status types"""
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class InvoiceSource(str, Enum):
    """How the invoice data was produced"""
    MANUAL = "manual"  # Entered by hand
    OCR = "ocr"        # Extracted from a scanned image
    NLP = "nlp"        # Extracted from free text by a language model


ALLOWED_STATUS_TRANSITIONS = {
    InvoiceStatus.DRAFT: {InvoiceStatus.SENT, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED},
    InvoiceStatus.SENT: {InvoiceStatus.PAID, InvoiceStatus.OVERDUE, InvoiceStatus.CANCELLED},
    InvoiceStatus.OVERDUE: {InvoiceStatus.PAID, InvoiceStatus.CANCELLED},
    InvoiceStatus.PAID: set(),
    InvoiceStatus.CANCELLED: set(),
}


def can_transition(current: InvoiceStatus, target: InvoiceStatus) -> bool:
    """Whether `current -> target` is allowed (re-setting the same status is)"""
    return current == target or target in ALLOWED_STATUS_TRANSITIONS[current]


class Invoice(BaseModel, table=True):
    """
    Invoice - Billable document

    Domain Rules:
    - invoice_number is unique and never changes after creation
    - subtotal = sum(line_items.line_total), total_tax = sum(line_items.tax_amount)
    - total = subtotal + total_tax; monetary fields are derived, never set by callers
    - due_date, when present, is not before invoice_date
    - Status transitions: draft -> sent -> paid, draft|sent -> overdue|cancelled,
      overdue -> paid|cancelled
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_user_id', 'user_id'),
        Index('ix_invoices_status', 'status'),
        Index('ix_invoices_client_id', 'client_id'),
        Index('ix_invoices_invoice_number', 'invoice_number', unique=True),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique invoice identifier (auto-increment)"
    )

    user_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        description="Owner user ID"
    )

    client_id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True),
        description="Billed client (NULL if none or deleted)"
    )

    invoice_number: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Unique invoice number (e.g., INV-202503-0001)"
    )

    invoice_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Issue date"
    )

    due_date: Optional[date] = Field(
        default=None,
        sa_column=Column(Date, nullable=True),
        description="Payment due date"
    )

    currency: str = Field(
        default="USD",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    subtotal: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Sum of line totals before tax"
    )

    total_tax: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Sum of line tax amounts"
    )

    total: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="subtotal + total_tax"
    )

    status: InvoiceStatus = Field(
        default=InvoiceStatus.DRAFT,
        description="Invoice status (draft, sent, paid, overdue, cancelled)"
    )

    source: InvoiceSource = Field(
        default=InvoiceSource.MANUAL,
        description="Provenance (manual, ocr, nlp)"
    )

    confidence_score: Optional[float] = Field(
        default=None,
        sa_column=Column(Float, nullable=True),
        description="Extraction confidence reported by OCR (informational)"
    )

    payment_terms: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "user_id": 1,
                "client_id": 3,
                "invoice_number": "INV-202503-0001",
                "invoice_date": "2025-03-14",
                "due_date": "2025-04-13",
                "currency": "USD",
                "subtotal": "500.00",
                "total_tax": "50.00",
                "total": "550.00",
                "status": "draft",
                "source": "manual",
                "confidence_score": None,
                "payment_terms": "Net 30",
                "notes": None,
                "created_at": "2025-03-14T09:00:00Z",
                "updated_at": "2025-03-14T09:00:00Z"
            }
        }
