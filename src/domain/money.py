"""Money and quantity arithmetic

All amounts are decimal.Decimal. Values coming from JSON, forms or floats are
converted through str() so binary floating point error never enters a total.
Rounding happens only when a value is persisted or displayed.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[Decimal, int, str, float]

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")

# Currency minor unit (cents) and line-level storage precision
CURRENCY_QUANTUM = Decimal("0.01")
STORAGE_QUANTUM = Decimal("0.000001")


def to_decimal(value: Number) -> Decimal:
    """
    Convert a number to Decimal without binary float drift

    Raises:
        ValueError: If value is not numeric
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric value: {value!r}")
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, AttributeError) as e:
        raise ValueError(f"Not a numeric value: {value!r}") from e


def add(a: Number, b: Number) -> Decimal:
    return to_decimal(a) + to_decimal(b)


def multiply(a: Number, b: Number) -> Decimal:
    return to_decimal(a) * to_decimal(b)


def divide(a: Number, b: Number) -> Decimal:
    return to_decimal(a) / to_decimal(b)


def percentage(amount: Number, rate: Number) -> Decimal:
    """amount * rate / 100"""
    return divide(multiply(amount, rate), HUNDRED)


def round_currency(amount: Number) -> Decimal:
    """Round to the currency minor unit (2 places, half up)"""
    return to_decimal(amount).quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)


def round_storage(amount: Number) -> Decimal:
    """Round to the line-level storage precision (6 places, half up)"""
    return to_decimal(amount).quantize(STORAGE_QUANTUM, rounding=ROUND_HALF_UP)


def to_fixed(amount: Number, places: int = 2) -> str:
    """String with exactly `places` decimals, e.g. to_fixed(5) == "5.00" """
    quantum = Decimal(1).scaleb(-places)
    return str(to_decimal(amount).quantize(quantum, rounding=ROUND_HALF_UP))


def format_money(amount: Number, currency: str) -> str:
    """Display form used on documents, e.g. "USD 1,250.00" """
    return f"{currency} {round_currency(amount):,.2f}"
