"""Invoice draft validation

Field-level checks shared by CreateInvoice and UpdateInvoice. Problems are
collected rather than raised so the caller gets every issue at once.
"""

import re
from typing import Any, Dict, List

from libs.result import Error
from src.domain import money
from .dtos import InvoiceDraftDTO

CURRENCY_PATTERN = re.compile(r"^[A-Z]{3}$")
MAX_TAX_RATE = money.HUNDRED


def validate_invoice_draft(draft: InvoiceDraftDTO) -> List[Dict[str, Any]]:
    """
    Check a draft before any totals are computed

    Returns:
        List of {"field": ..., "message": ...} entries (empty if valid)
    """
    details = []

    if not draft.line_items:
        details.append({"field": "line_items", "message": "At least one line item is required"})

    if draft.due_date is not None and draft.due_date < draft.invoice_date:
        details.append({"field": "due_date", "message": "Due date cannot be before invoice date"})

    if not draft.currency or not CURRENCY_PATTERN.match(draft.currency):
        details.append({"field": "currency", "message": "Currency must be a 3-letter ISO code"})

    for index, item in enumerate(draft.line_items):
        prefix = f"line_items[{index}]"

        if not item.description or not item.description.strip():
            details.append({"field": f"{prefix}.description", "message": "Description is required"})

        if item.unit_price is None:
            details.append({"field": f"{prefix}.unit_price", "message": "Unit price is required"})
        elif item.unit_price < 0:
            details.append({"field": f"{prefix}.unit_price", "message": "Unit price cannot be negative"})

        if item.quantity is not None and item.quantity < 0:
            details.append({"field": f"{prefix}.quantity", "message": "Quantity cannot be negative"})

        if item.tax_rate is not None and not (money.ZERO <= item.tax_rate <= MAX_TAX_RATE):
            details.append({"field": f"{prefix}.tax_rate", "message": "Tax rate must be between 0 and 100"})

    return details


def validation_error(details: List[Dict[str, Any]], message: str = "Invoice validation failed") -> Error:
    """Build the VALIDATION_ERROR returned for field-level problems"""
    return Error(
        code="VALIDATION_ERROR",
        message=message,
        reason="; ".join(f"{d['field']}: {d['message']}" for d in details),
        details=details,
    )
