"""Line Item Domain Entity

One billable row of an invoice.
"""

from decimal import Decimal
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String
from typing import Optional
from src.domain.base import BaseModel, BigIntegerId


class LineItem(BaseModel, table=True):
    """
    Line Item - Billable row within an invoice

    Domain Rules:
    - Each line item belongs to exactly one invoice and is deleted with it
    - line_total = quantity * unit_price
    - tax_amount = line_total * tax_rate / 100
    - The whole set is replaced when the invoice is updated
    - sort_order fixes display order (not unique)
    """

    __tablename__ = "line_items"
    __table_args__ = (
        Index('ix_line_items_invoice_id', 'invoice_id'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique line item identifier (auto-increment)"
    )

    invoice_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    description: str = Field(
        sa_column=Column(String(500), nullable=False),
        description="Line item description (e.g., 'Website design')"
    )

    quantity: Decimal = Field(
        default=Decimal("1"),
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Quantity (hours, units, ...)"
    )

    unit_price: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="Price per unit"
    )

    tax_rate: Decimal = Field(
        default=Decimal("0"),
        sa_column=Column(Numeric(9, 6), nullable=False),
        description="Tax rate percentage (0-100)"
    )

    tax_amount: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="line_total * tax_rate / 100"
    )

    line_total: Decimal = Field(
        sa_column=Column(Numeric(18, 6), nullable=False),
        description="quantity * unit_price"
    )

    sort_order: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Display order within the invoice"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "invoice_id": 1,
                "description": "Design",
                "quantity": "5.000000",
                "unit_price": "100.000000",
                "tax_rate": "10.00",
                "tax_amount": "50.000000",
                "line_total": "500.000000",
                "sort_order": 0
            }
        }
