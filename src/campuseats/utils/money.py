"""Rounding helpers for currency amounts and loyalty points.

Amounts are stored as floats in Protean ``Float`` fields; arithmetic goes
through ``Decimal`` so that e.g. ``100 * 0.10`` is exactly ``10.00``.
"""

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def to_decimal(value) -> Decimal:
    return Decimal(str(value or 0))


def quantize(value) -> float:
    """Round to two decimals (half up) and return a float."""
    return float(to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def multiply(value, factor) -> float:
    return quantize(to_decimal(value) * to_decimal(factor))


def subtract(value, other) -> float:
    return quantize(to_decimal(value) - to_decimal(other))


def total(values) -> float:
    return quantize(sum((to_decimal(v) for v in values), Decimal("0")))
