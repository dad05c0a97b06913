"""Conversion between whole FIL and its smallest unit."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

FIL_DECIMALS = 18


def to_fil(value: int) -> Decimal:
    """Express an amount of the smallest unit in FIL."""
    return Decimal(f"{int(value)}e-{FIL_DECIMALS}")


def from_fil(value: Decimal | int | str | float) -> int:
    """Express an amount of FIL in the smallest unit, truncating toward zero."""
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except InvalidOperation:
        raise ValueError(f"invalid decimal amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"invalid decimal amount: {value!r}")
    sign, digits, exponent = amount.as_tuple()
    return int(Decimal((sign, digits, exponent + FIL_DECIMALS)))