import pytest
from decimal import Decimal

from ledger_lens.core.exc import InvalidAmount
from ledger_lens.core.constants import DECIMAL_PRECISION
from ledger_lens.core.fmt import to_significant, truncate_significant


@pytest.mark.parametrize(
    "x,digits,expected",
    [
        (Decimal("19.801980198019801980"), 6, Decimal("19.8019")),
        (Decimal("0.000123456789"), 3, Decimal("0.000123")),
        (Decimal("1234567"), 3, Decimal("1230000")),
        (Decimal("9.99999999"), 2, Decimal("9.9")),
        (Decimal("5"), 6, Decimal("5")),
    ],
)
def test_truncate_significant(x, digits, expected):
    got = truncate_significant(x, digits)
    print(f"[truncate_significant] {x} @ {digits} -> {got}")
    assert got == expected


def test_truncate_never_rounds_up():
    print("[truncate_significant] 0.9999999 @ 3 stays below 1")
    assert truncate_significant(Decimal("0.9999999"), 3) == Decimal("0.999")


def test_truncate_zero_and_invalid():
    assert truncate_significant(Decimal(0), 6) == 0
    with pytest.raises(ValueError):
        truncate_significant(Decimal(1), 0)
    with pytest.raises(InvalidAmount):
        truncate_significant(Decimal("-1"), 6)


def test_to_significant_string():
    assert to_significant(Decimal("19.80198019"), 6) == "19.8019"
    assert to_significant(Decimal("1234567"), 3) == "1230000"
    assert to_significant(Decimal("2.50000"), 6) == "2.5"


def test_truncate_rejects_digits_beyond_working_precision():
    print("[truncate_significant] digits above the working precision are refused up front")
    third = Decimal(1) / Decimal(3)
    with pytest.raises(ValueError):
        truncate_significant(third, DECIMAL_PRECISION + 22)
    got = truncate_significant(third, DECIMAL_PRECISION)
    assert got == third
    assert len(got.as_tuple().digits) <= DECIMAL_PRECISION
