"""Line Item Totals Engine

Pure computation from raw line-item inputs to per-line amounts and
invoice-level subtotal, tax and total. No I/O.
"""

from decimal import Decimal
from typing import Any, Iterable, List, Optional
from pydantic import BaseModel

from src.domain import money


class ComputedLineItem(BaseModel):
    """Line item with derived amounts (unrounded)"""

    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    line_total: Decimal
    tax_amount: Decimal
    sort_order: int


class InvoiceTotals(BaseModel):
    """
    Result of a totals calculation

    line_items keep exact amounts; subtotal/total_tax/total are rounded to
    the currency minor unit, with total = subtotal + total_tax.
    """

    line_items: List[ComputedLineItem]
    subtotal: Decimal
    total_tax: Decimal
    total: Decimal


def calculate_line_item(item: Any, index: int = 0) -> ComputedLineItem:
    """
    Derive line_total and tax_amount for one raw item

    The item needs description, quantity, unit_price, tax_rate and
    sort_order attributes (missing optional ones are treated as None).

    Raises:
        ValueError: If unit_price is missing
    """
    unit_price = getattr(item, "unit_price", None)
    if unit_price is None:
        raise ValueError(f"Line item {index}: unit_price is required")

    # Inputs are taken at storage precision so a saved line recomputes to the same amounts
    raw_quantity = getattr(item, "quantity", None)
    quantity = money.round_storage(raw_quantity) if raw_quantity else money.ONE
    raw_tax_rate = getattr(item, "tax_rate", None)
    tax_rate = money.round_storage(raw_tax_rate) if raw_tax_rate else money.ZERO
    unit_price = money.round_storage(unit_price)

    line_total = money.multiply(quantity, unit_price)
    tax_amount = money.percentage(line_total, tax_rate)

    sort_order: Optional[int] = getattr(item, "sort_order", None)

    return ComputedLineItem(
        description=getattr(item, "description", ""),
        quantity=quantity,
        unit_price=unit_price,
        tax_rate=tax_rate,
        line_total=line_total,
        tax_amount=tax_amount,
        sort_order=index if sort_order is None else sort_order,
    )


def calculate_invoice_totals(items: Iterable[Any]) -> InvoiceTotals:
    """
    Compute all line items and aggregate them in input order

    An empty input yields zero totals; rejecting it is the caller's job.
    """
    computed = [calculate_line_item(item, index) for index, item in enumerate(items)]

    subtotal = money.ZERO
    total_tax = money.ZERO
    for line in computed:
        subtotal = money.add(subtotal, line.line_total)
        total_tax = money.add(total_tax, line.tax_amount)

    subtotal = money.round_currency(subtotal)
    total_tax = money.round_currency(total_tax)

    return InvoiceTotals(
        line_items=computed,
        subtotal=subtotal,
        total_tax=total_tax,
        total=money.add(subtotal, total_tax),
    )
