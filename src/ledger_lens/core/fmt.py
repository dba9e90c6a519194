"""
Truncation of quoted values to significant digits.

Truncation here is always toward zero: a displayed price or amount never
overstates what the pools would actually deliver.
"""

from decimal import Decimal, Context, ROUND_DOWN

from .constants import DECIMAL_PRECISION
from .exc import InvalidAmount

_CTX = Context(prec=DECIMAL_PRECISION, rounding=ROUND_DOWN)


def truncate_significant(x: Decimal, digits: int) -> Decimal:
    """Keep at most `digits` significant digits, truncating the rest.

    truncate_significant(Decimal('19.80198019'), 6) -> Decimal('19.8019')
    """
    if digits < 1 or digits > DECIMAL_PRECISION:
        raise ValueError(f"significant digits must be in [1, {DECIMAL_PRECISION}], got {digits}")
    if x < 0:
        raise InvalidAmount("negative input not allowed for truncate_significant")
    if x == 0:
        return Decimal("0")
    exp = x.adjusted() - digits + 1
    return x.quantize(Decimal(1).scaleb(exp), rounding=ROUND_DOWN, context=_CTX)


def to_significant(x: Decimal, digits: int) -> str:
    """String form of `truncate_significant` without trailing zeros or exponent."""
    t = truncate_significant(x, digits)
    return format(t.normalize(context=_CTX), "f")


__all__ = [
    "truncate_significant",
    "to_significant",
]
