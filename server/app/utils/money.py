import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

ZERO = Decimal("0")

_AMOUNT_NOISE = re.compile(r"[^\d.\-]")


def quantize_money(value: Decimal | float | int | str | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    """Coerce a numeric field from an upstream row; blanks and junk become zero."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return ZERO
    return result if result.is_finite() else ZERO


def parse_amount(value: str | None) -> Decimal:
    """Parse a display amount such as ``"SAR 1,250.00"``."""
    if value is None:
        return ZERO
    return to_decimal(_AMOUNT_NOISE.sub("", str(value)))


def to_int(value: Decimal | float | int | str | None) -> int:
    """Coerce a count field; fractional values truncate and junk becomes zero."""
    return int(to_decimal(value))
