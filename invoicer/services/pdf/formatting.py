"""Number and date helpers shared by the invoice PDF modules."""
from __future__ import annotations

import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, localcontext

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_THREE_PLACES = Decimal("0.001")


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD``; a trailing time part (``T...``) is ignored."""

    return date.fromisoformat(value.strip()[:10])


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def format_amount(value: float | int) -> str:
    """Group thousands with commas and keep at most three decimals.

    ``150000`` -> ``150,000``; ``1234.5`` -> ``1,234.5``; ``0.1 + 0.2`` -> ``0.3``.
    """

    if not math.isfinite(value):
        if math.isnan(value):
            return "NaN"
        return "-\u221e" if value < 0 else "\u221e"

    amount = Decimal(str(value))
    with localcontext() as context:
        # Room for every integer digit plus the three kept decimals.
        context.prec = max(context.prec, amount.adjusted() + 4)
        quantized = amount.quantize(_THREE_PLACES, rounding=ROUND_HALF_UP)
    if quantized == 0:
        return "0"
    text = f"{quantized:,.3f}".rstrip("0").rstrip(".")
    return text


def format_quantity(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
