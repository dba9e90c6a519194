import pytest
from decimal import Decimal

from ledger_lens.core import (
    CombinedHistory,
    CurrentBid,
    InvalidAmount,
    LegacyBid,
    LiquidityPool,
    ReserveSnapshot,
    Route,
    normalize_referrer,
)


def test_referrer_zero_address_means_none():
    assert normalize_referrer("0x" + "0" * 40) is None
    assert normalize_referrer(None) is None
    assert normalize_referrer("") is None
    ref = "0x00000000000000000000000000000000000000Bb"
    assert normalize_referrer(ref) == ref


def test_bid_records_are_tagged_not_hierarchical():
    assert LegacyBid.generation == "legacy"
    assert CurrentBid.generation == "current"
    assert not issubclass(CurrentBid, LegacyBid)


@pytest.mark.parametrize(
    "build",
    [
        lambda: LegacyBid(-1, Decimal(1)),
        lambda: LegacyBid(1, Decimal("-0.1")),
        lambda: CurrentBid(1, Decimal(1), auto_stake_days=-3),
        lambda: ReserveSnapshot(Decimal("-1"), Decimal(0)),
        lambda: LiquidityPool(Decimal("-5"), Decimal(1)),
    ],
)
def test_negative_fields_rejected(build):
    with pytest.raises(InvalidAmount):
        build()


def test_route_hop_bounds():
    p = LiquidityPool(Decimal(1), Decimal(1))
    assert Route((p,)).hops == 1
    assert Route([p, p]).hops == 2
    with pytest.raises(ValueError):
        Route(())
    with pytest.raises(ValueError):
        Route((p, p, p))


def test_pool_zero_reserve_is_representable_but_not_tradable():
    p = LiquidityPool(Decimal(0), Decimal(10))
    assert not p.is_tradable()
    assert p.reversed() == LiquidityPool(Decimal(10), Decimal(0))


def test_combined_history_views():
    h = CombinedHistory((LegacyBid(3, Decimal(1)), CurrentBid(1, Decimal(2))))
    assert len(h) == 2
    assert [type(r) for r in h.legacy()] == [LegacyBid]
    assert [r.auction_id for r in h.current()] == [1]
    assert h.for_auction(9) == []
