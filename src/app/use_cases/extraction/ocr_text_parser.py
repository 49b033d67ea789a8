"""Recognized-text parser for scanned invoices

Pattern based; fields that are not found are simply left empty.
"""

import re
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field

from .normalization import parse_decimal

INVOICE_NUMBER_PATTERN = re.compile(r"invoice\s*(?:number|no\.|no\b|#)[:\s#]*([A-Za-z0-9][\w\-/]*)", re.IGNORECASE)
DATE_VALUE = r"(\w+\s+\d{1,2},\s+\d{4}|\d{4}-\d{2}-\d{2}|\d{1,2}/\d{1,2}/\d{4})"
INVOICE_DATE_PATTERN = re.compile(r"invoice\s+date[:\s]+" + DATE_VALUE, re.IGNORECASE)
DUE_DATE_PATTERN = re.compile(r"due\s+date[:\s]+" + DATE_VALUE, re.IGNORECASE)
TOTAL_PATTERN = re.compile(r"^\s*(?:grand\s+)?total(?:\s+due)?[:\s]+\$?\s*([\d,]+\.\d{2})", re.IGNORECASE | re.MULTILINE)
BILL_TO_PATTERN = re.compile(r"bill\s+to[:\s]+([^\n]+)", re.IGNORECASE)
# description, quantity, unit price, line total
LINE_ITEM_PATTERN = re.compile(
    r"^\s*([A-Za-z][\w .,&'()/-]*?)[ \t]+(\d+(?:\.\d+)?)[ \t]+\$?([\d,]+\.\d{2})[ \t]+\$?([\d,]+\.\d{2})[ \t]*$",
    re.MULTILINE,
)


class OcrLineItem(BaseModel):
    description: str
    quantity: Decimal
    unit_price: Decimal
    line_total: Decimal


class OcrFields(BaseModel):
    """Fields recognized in an invoice image's text"""

    invoice_number: Optional[str] = None
    invoice_date: Optional[str] = None
    due_date: Optional[str] = None
    total: Optional[Decimal] = None
    client_name: Optional[str] = None
    line_items: List[OcrLineItem] = Field(default_factory=list)


def _search(pattern: re.Pattern, text: str) -> Optional[str]:
    match = pattern.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return None


def parse_ocr_text(text: str) -> OcrFields:
    """
    Extract invoice fields from recognized text

    Line rows look like "Web design  2  $500.00  $1,000.00".
    Dates are returned as written; callers parse them.
    """
    line_items = []
    for match in LINE_ITEM_PATTERN.finditer(text):
        description = match.group(1).strip()
        if description.lower().startswith(("total", "subtotal", "tax")):
            continue
        line_items.append(
            OcrLineItem(
                description=description,
                quantity=parse_decimal(match.group(2)),
                unit_price=parse_decimal(match.group(3)),
                line_total=parse_decimal(match.group(4)),
            )
        )

    total = _search(TOTAL_PATTERN, text)

    return OcrFields(
        invoice_number=_search(INVOICE_NUMBER_PATTERN, text),
        invoice_date=_search(INVOICE_DATE_PATTERN, text),
        due_date=_search(DUE_DATE_PATTERN, text),
        total=parse_decimal(total) if total else None,
        client_name=_search(BILL_TO_PATTERN, text),
        line_items=line_items,
    )

