"""Invoice number rules

Format: INV-{YYYY}{MM}-{NNNN}, e.g. INV-202503-0001.
The sequence restarts at 1 for every calendar month prefix.
"""

from datetime import datetime
from typing import Optional

INVOICE_NUMBER_PREFIX = "INV"
SEQUENCE_WIDTH = 4


def invoice_number_prefix(moment: datetime) -> str:
    """Month prefix shared by all invoices created in the same month"""
    return f"{INVOICE_NUMBER_PREFIX}-{moment.year}{moment.month:02d}"


def parse_sequence(invoice_number: Optional[str]) -> int:
    """
    Parse the trailing sequence segment of an invoice number

    A missing or non-numeric segment parses as 0.
    """
    if not invoice_number:
        return 0
    segment = invoice_number.rsplit("-", 1)[-1]
    try:
        return int(segment)
    except ValueError:
        return 0


def format_invoice_number(prefix: str, sequence: int) -> str:
    return f"{prefix}-{sequence:0{SEQUENCE_WIDTH}d}"


def next_invoice_number(prefix: str, latest_invoice_number: Optional[str]) -> str:
    """Number following the latest one issued under `prefix` (or the first)"""
    return format_invoice_number(prefix, parse_sequence(latest_invoice_number) + 1)
