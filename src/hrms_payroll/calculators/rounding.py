"""Monetary rounding helpers.

All amounts are rounded half-up to cents at the point they are computed,
never only at output: later steps consume the already rounded values.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str | None) -> Decimal:
    """Coerce a stored value to Decimal, treating None as zero."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (cents)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def percent_of(base: Decimal, percentage: Decimal | None) -> Decimal:
    """Return ``base * percentage / 100`` rounded to cents."""
    return round_to_cents(base * to_decimal(percentage) / Decimal(100))
