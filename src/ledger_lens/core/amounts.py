"""
Fixed-point normalizer: base-unit integers <-> Decimal.

- Contracts report quantities as non-negative integers in base units, i.e. the
  human-readable value scaled by 10**scale.
- `to_decimal` is exact: it goes through the Decimal string constructor, so no
  value ever passes through a binary float (values above 2**53 stay exact).
- `to_raw` is the exact inverse of `to_decimal`; digits finer than the scale are
  truncated toward zero (never overstate an amount).
- Non-negative domain: negative inputs are rejected, never clamped.
"""

from __future__ import annotations

from decimal import Decimal, Context, ROUND_DOWN, InvalidOperation
from typing import Union

from .constants import DECIMAL_PRECISION
from .exc import InvalidAmount

RawLike = Union[int, str]
DecimalLike = Union[Decimal, int, str]

# ----------------------------
# Input validation
# ----------------------------

def _check_scale(scale: int) -> int:
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise InvalidAmount(f"scale must be an int, got {scale!r}")
    if scale < 0:
        raise InvalidAmount(f"scale must be >= 0, got {scale}")
    return scale


def parse_raw(raw: RawLike) -> int:
    """Parse a base-unit integer as returned by a transport (int or decimal string)."""
    if isinstance(raw, bool):
        raise InvalidAmount("raw amount must be an integer, got bool")
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str):
        text = raw.strip()
        try:
            value = int(text, 16) if text[:2].lower() == "0x" else int(text, 10)
        except ValueError:
            raise InvalidAmount(f"raw amount is not an integer: {raw!r}") from None
    else:
        raise InvalidAmount(f"unsupported raw amount type: {type(raw).__name__}")
    if value < 0:
        raise InvalidAmount(f"raw amount must be >= 0, got {value}")
    return value


def as_decimal(x: DecimalLike) -> Decimal:
    """Bridge numeric-like input to a finite, non-negative Decimal."""
    if isinstance(x, bool):
        raise InvalidAmount("amount must be numeric, got bool")
    if isinstance(x, float):
        # Floats carry binary rounding noise; callers pass str or Decimal instead.
        raise InvalidAmount("float amounts are not accepted; pass a str or Decimal")
    try:
        d = x if isinstance(x, Decimal) else Decimal(str(x))
    except InvalidOperation:
        raise InvalidAmount(f"amount is not a number: {x!r}") from None
    if d.is_nan() or d.is_infinite():
        raise InvalidAmount(f"amount must be finite, got {d}")
    if d < 0:
        raise InvalidAmount(f"amount must be >= 0, got {d}")
    return d


# ----------------------------
# Normalizer
# ----------------------------

def to_decimal(raw: RawLike, scale: int) -> Decimal:
    """Convert base units to a Decimal value with `scale` fractional digits.

    >>> to_decimal(1500000000000000000, 18)
    Decimal('1.500000000000000000')
    """
    value = parse_raw(raw)
    _check_scale(scale)
    return Decimal(f"{value}E-{scale}")


def to_raw(value: DecimalLike, scale: int) -> int:
    """Convert a Decimal value back to base units (truncating below 10**-scale)."""
    d = as_decimal(value)
    _check_scale(scale)
    # Wide enough for the whole coefficient so rescaling never rounds.
    ctx = Context(prec=max(DECIMAL_PRECISION, len(d.as_tuple().digits) + scale), rounding=ROUND_DOWN)
    scaled = d.scaleb(scale, context=ctx)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def to_float(value: DecimalLike) -> float:
    """Narrow to float for consumers that explicitly want one (display, plotting)."""
    return float(as_decimal(value))


__all__ = [
    "RawLike",
    "DecimalLike",
    "parse_raw",
    "as_decimal",
    "to_decimal",
    "to_raw",
    "to_float",
]
