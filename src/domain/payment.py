"""Payment Domain Entity

Payment received against an invoice.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Numeric, String, Text, Date
from src.domain.base import BaseModel, BigIntegerId


class Payment(BaseModel, table=True):
    """
    Payment - Money received for an invoice

    Domain Rules:
    - Each payment belongs to exactly one invoice and is deleted with it
    """

    __tablename__ = "payments"
    __table_args__ = (
        Index('ix_payments_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
    )

    invoice_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    amount: Decimal = Field(
        sa_column=Column(Numeric(18, 2), nullable=False),
        description="Amount received"
    )

    payment_date: date = Field(
        sa_column=Column(Date, nullable=False),
    )

    payment_method: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="e.g. bank_transfer, card, cash"
    )

    reference_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
    )
