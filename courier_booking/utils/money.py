"""
Decimal helpers for monetary amounts.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

CENT = Decimal("0.01")
ZERO = Decimal("0")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal without picking up binary float noise."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(amount: Number) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
