"""Decimal helpers shared by the inventory and finance models."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

Number = int | float | str | Decimal

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Convert a user-supplied number to Decimal.

    Floats go through ``str()`` so ``0.0825`` stays ``Decimal("0.0825")``.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Expected a number, got bool: {value!r}")
    if isinstance(value, float):
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError) as exc:
        raise ValueError(f"Not a number: {value!r}") from exc


def round_money(value: Decimal) -> Decimal:
    """Round half-up to 2 decimal places."""
    if not value.is_finite():
        return value
    return value.quantize(CENT, rounding=ROUND_HALF_UP)
