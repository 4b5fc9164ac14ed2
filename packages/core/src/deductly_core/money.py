"""Decimal money helpers shared by every calculator.

Allocation helpers return full-precision values. Rounding to cents happens
once per published field through round_currency, never on intermediate
values that feed further arithmetic.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    """Coerce a numeric value to Decimal.

    Floats go through their string form so 0.1 becomes Decimal("0.1")
    rather than its binary expansion.

    Raises:
        ValueError: If the value is not a finite number.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not a monetary amount: {value!r}") from exc

    if not result.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return result


def allocate(amount: Number, percent: Number) -> Decimal:
    """Return ``amount * percent / 100`` at full precision."""
    return to_decimal(amount) * (to_decimal(percent) / HUNDRED)


def percent_of(part: Number, whole: Number) -> Decimal:
    """Return ``part / whole * 100`` at full precision.

    Raises:
        ZeroDivisionError: If whole is zero.
    """
    whole_d = to_decimal(whole)
    if whole_d == 0:
        raise ZeroDivisionError("Cannot take a percentage of zero")
    return to_decimal(part) / whole_d * HUNDRED


def round_currency(amount: Number) -> Decimal:
    """Round half-up to two decimal places."""
    return to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


__all__ = [
    "Number",
    "ZERO",
    "HUNDRED",
    "CENT",
    "to_decimal",
    "allocate",
    "percent_of",
    "round_currency",
]
