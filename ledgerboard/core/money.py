"""Fixed-point handling of monetary amounts.

Amounts are stored as ``Numeric(15, 2)`` and travel through the API as
decimal strings. Everything here works on :class:`decimal.Decimal` so
sums never pick up binary float drift.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ledgerboard.core.errors import ValidationError

ZERO = Decimal("0")
CENT = Decimal("0.01")
MONEY_SCALE = 2
MONEY_MAX_DIGITS = 15

_IDR_STRIP_RE = re.compile(r"[^\d,-]")


def _coerce(value):
    if value is None:
        raise InvalidOperation("amount is required")
    if isinstance(value, bool):
        raise InvalidOperation("amount must be numeric")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, int):
        amount = Decimal(value)
    elif isinstance(value, float):
        # repr-based conversion keeps 0.1 as 0.1 instead of its binary expansion
        amount = Decimal(repr(value))
    else:
        text = str(value).strip()
        if not text:
            raise InvalidOperation("amount is empty")
        amount = Decimal(text)
    if not amount.is_finite():
        raise InvalidOperation("amount must be finite")
    return amount


def parse_amount(value) -> Decimal:
    """Lenient parse for display and aggregation; garbage reads as zero."""
    try:
        return _coerce(value)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def parse_amount_strict(value, *, field="amount", allow_negative=False) -> Decimal:
    """Parse an amount on a validation path that precedes persistence."""
    try:
        amount = _coerce(value)
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValidationError("{} must be a decimal number".format(field)) from exc

    if not allow_negative and amount < 0:
        raise ValidationError("{} must be non-negative".format(field))

    exponent = amount.as_tuple().exponent
    if isinstance(exponent, int) and exponent < -MONEY_SCALE:
        if amount != amount.quantize(CENT):
            raise ValidationError(
                "{} supports at most {} decimal places".format(field, MONEY_SCALE)
            )
        amount = amount.quantize(CENT)

    if amount.copy_abs() >= Decimal(10) ** (MONEY_MAX_DIGITS - MONEY_SCALE):
        raise ValidationError("{} is too large".format(field))
    return amount


def is_valid_amount(value) -> bool:
    try:
        parse_amount_strict(value, allow_negative=True)
    except ValidationError:
        return False
    return True


def quantize_percent(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_idr(amount) -> str:
    """Render an amount as Indonesian Rupiah without fraction digits."""
    value = parse_amount(amount).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    grouped = "{:,}".format(int(value.copy_abs())).replace(",", ".")
    return "{}Rp {}".format(sign, grouped)


def parse_idr(formatted) -> Decimal:
    """Inverse of :func:`format_idr`; "." groups thousands, "," is the decimal mark."""
    cleaned = _IDR_STRIP_RE.sub("", str(formatted or ""))
    return parse_amount(cleaned.replace(",", ".", 1))


__all__ = [
    "CENT",
    "ZERO",
    "format_idr",
    "is_valid_amount",
    "parse_amount",
    "parse_amount_strict",
    "parse_idr",
    "quantize_percent",
]
