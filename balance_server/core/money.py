"""Money conversion helpers using integer minor units (cents)."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from .errors import ErrorKind, ValidationError

CENTS_PER_UNIT = 100
# Upper bound for a single amount and for any balance (100 billion units).
# Keeps balances and dashboard sums inside a signed 64-bit integer column.
MAX_BALANCE_CENTS = 10**13
_UNIT_QUANT = Decimal("0.01")


class InvalidAmountError(ValidationError):
    kind = ErrorKind.INVALID_AMOUNT
    default_message = "Amount must be a positive value with at most two decimal places"


def to_cents(value: Decimal | int | str) -> int:
    """Convert a currency amount to cents without rounding.

    Floats are rejected so binary rounding never reaches the ledger.
    """
    if isinstance(value, (float, bool)):
        raise InvalidAmountError(f"Unsupported amount type: {type(value).__name__}")
    try:
        dec = Decimal(str(value).strip())
        quantized = dec.quantize(_UNIT_QUANT) if dec.is_finite() else None
    except InvalidOperation as exc:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from exc
    if quantized is None:
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if quantized != dec:
        raise InvalidAmountError(f"Amount has more than two decimal places: {value}")
    return int(dec * CENTS_PER_UNIT)


def positive_cents(value: Decimal | int | str) -> int:
    """Convert to cents and require a result in ``1..MAX_BALANCE_CENTS``."""
    cents = to_cents(value)
    if cents <= 0:
        raise InvalidAmountError(f"Amount must be greater than zero: {value}")
    if cents > MAX_BALANCE_CENTS:
        raise InvalidAmountError(f"Amount exceeds the maximum of {format_cents(MAX_BALANCE_CENTS)}: {value}")
    return cents


def cents_to_decimal(value: int) -> Decimal:
    return (Decimal(value) / CENTS_PER_UNIT).quantize(_UNIT_QUANT)


def format_cents(value: int) -> str:
    """Format cents as a plain decimal string, e.g. ``1050 -> '10.50'``."""
    return f"{cents_to_decimal(value):.2f}"
