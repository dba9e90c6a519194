import pytest
from decimal import Decimal

from ledger_lens.core.amounts import (
    as_decimal,
    parse_raw,
    to_decimal,
    to_float,
    to_raw,
)
from ledger_lens.core.exc import InvalidAmount


# -----------------------------
# to_decimal
# -----------------------------

def test_to_decimal_scale_18():
    print("[to_decimal] 1.5e18 base units at scale 18 -> 1.5")
    d = to_decimal(1500000000000000000, 18)
    print("to_decimal ->", d)
    assert d == Decimal("1.5")


def test_to_decimal_scale_6_and_zero():
    assert to_decimal(1234567, 6) == Decimal("1.234567")
    assert to_decimal(0, 18) == Decimal(0)
    assert to_decimal(42, 0) == Decimal(42)


def test_to_decimal_exact_beyond_float_range():
    print("[to_decimal] values above 2**53 keep every digit")
    raw = 2**256 - 1
    d = to_decimal(raw, 18)
    digits = "".join(str(x) for x in d.as_tuple().digits)
    print("digits ->", digits)
    assert digits == str(raw)
    # 2**53 + 1 is not representable as a float; the Decimal keeps it
    assert to_decimal(2**53 + 1, 0) == Decimal(2**53 + 1)


def test_to_decimal_accepts_transport_strings():
    assert to_decimal("1500000000000000000", 18) == Decimal("1.5")
    assert to_decimal(" 250 ", 2) == Decimal("2.5")
    assert to_decimal("0x0de0b6b3a7640000", 18) == Decimal(1)


@pytest.mark.parametrize(
    "raw",
    [-1, "-10", "1.5", "abc", "", True, None, 1.0],
)
def test_to_decimal_rejects_out_of_domain_raw(raw):
    print(f"[to_decimal-invalid] raw={raw!r} -> expect InvalidAmount")
    with pytest.raises(InvalidAmount):
        to_decimal(raw, 18)


@pytest.mark.parametrize("scale", [-1, 1.5, "18", True])
def test_bad_scale_rejected(scale):
    with pytest.raises(InvalidAmount):
        to_decimal(1, scale)
    with pytest.raises(InvalidAmount):
        to_raw(Decimal(1), scale)


# -----------------------------
# to_raw
# -----------------------------

@pytest.mark.parametrize(
    "raw,scale",
    [
        (0, 18),
        (1, 18),
        (1500000000000000000, 18),
        (2**256 - 1, 18),
        (999999, 6),
        (10**30 + 7, 6),
        (5, 0),
        (10**80 + 1, 18),
        (10**100 + 3, 0),
    ],
)
def test_round_trip_law(raw, scale):
    assert to_raw(to_decimal(raw, scale), scale) == raw


def test_to_raw_keeps_coefficients_wider_than_default_precision():
    print("[to_raw] 90-digit value at scale 18 keeps every digit")
    wide = "1" * 90
    assert to_raw(Decimal(wide), 18) == int(wide) * 10**18
    assert to_raw(Decimal(wide + ".123456789"), 6) == int(wide + "123456")


def test_to_raw_truncates_sub_unit_digits():
    print("[to_raw] 1.2345678 at scale 6 -> 1234567 (truncated, never rounded up)")
    assert to_raw(Decimal("1.2345678"), 6) == 1234567
    assert to_raw("0.0000009", 6) == 0


def test_to_raw_rejects_negative_and_non_finite():
    for bad in (Decimal("-0.1"), Decimal("NaN"), Decimal("Infinity"), "x"):
        with pytest.raises(InvalidAmount):
            to_raw(bad, 18)


# -----------------------------
# helpers
# -----------------------------

def test_parse_raw_int_passthrough():
    assert parse_raw(7) == 7
    assert parse_raw("7") == 7


def test_as_decimal_rejects_float():
    with pytest.raises(InvalidAmount):
        as_decimal(0.1)
    assert as_decimal("0.1") == Decimal("0.1")
    assert as_decimal(3) == Decimal(3)


def test_to_float_is_explicit_narrowing():
    assert to_float(Decimal("1.5")) == 1.5
