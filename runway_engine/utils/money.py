"""Decimal rounding helpers for currency amounts"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

CENT = Decimal("0.01")
ZERO = Decimal("0")


def quantize(value: Decimal) -> Decimal:
    """Round to whole cents"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value: float) -> Decimal:
    """Convert a float statistic into a cent-rounded Decimal"""
    return quantize(Decimal(str(value)))


def total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)
