"""Helpers turning loosely typed extracted values into draft fields"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from src.domain import money

DATE_FORMATS = ("%Y-%m-%d", "%B %d, %Y", "%b %d, %Y", "%d/%m/%Y", "%m/%d/%Y")


def pick(payload: Dict[str, Any], *keys: str) -> Any:
    """First non-empty value among snake_case / camelCase spellings"""
    for key in keys:
        value = payload.get(key)
        if value not in (None, ""):
            return value
    return None


def parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def parse_decimal(value: Any) -> Optional[Decimal]:
    """Decimal from numbers or strings like "$1,250.00"; None if unreadable or not finite"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace(",", "").replace("$", "").replace("%", "").strip()
        if not value:
            return None
    try:
        result = money.to_decimal(value)
    except ValueError:
        return None
    if not result.is_finite():
        return None
    return result


def clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None
