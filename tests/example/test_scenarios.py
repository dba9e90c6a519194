# tests/example/test_scenarios.py
# Story-style, end-to-end checks: a wallet's auction history and the token price
# as a dashboard would read them, each going through the public query functions.

from decimal import Decimal

import pytest

from ledger_lens import CurrentBid, MissingParameter, Route, LiquidityPool, ledger, quote, to_decimal
from ledger_lens.core import WETH, USDT

from fakes import ACCOUNT, PRIMARY, ZERO, FakeReader, pair_reader


def _fmt(x: Decimal) -> str:
    return format(x, "f")


# A: a raw 1.5 ETH deposit comes back from the node as base units.
def test_scenario_a_normalize_raw_deposit():
    d = to_decimal(1500000000000000000, 18)
    print("[A] 1500000000000000000 @18 ->", _fmt(d))
    assert d == Decimal("1.5")


# B: Alice bid 2 ETH in round 1 on the legacy auction; the same round was
# migrated to the current auction and withdrawn. Only the current record remains.
@pytest.mark.asyncio
async def test_scenario_b_alice_migrated_bid():
    legacy = FakeReader({
        "auctionsOf_": [1],
        ("auctionBidOf", 1, ACCOUNT): (2 * 10**18, ZERO),
    })
    current = FakeReader({"getUserAuctions": [(1, 0, ZERO, 0, True)]})
    hist = await ledger.combined_bids(legacy, current, ACCOUNT)
    print("[B] combined ->", list(hist))
    assert len(hist) == 1
    (only,) = hist
    assert isinstance(only, CurrentBid)
    assert only.auction_id == 1
    assert only.deposit_amount == 0
    assert only.withdrawn is True


# C: 10 units into a 1000/2000 pool.
def test_scenario_c_single_hop_quote():
    route = Route((LiquidityPool(Decimal("1000"), Decimal("2000")),))
    out = quote(route, Decimal("10"), significant_digits=6)
    print("[C] 10 into 1000/2000 ->", _fmt(out))
    assert out == Decimal("19.8019")


# D: an event query with no start block never reaches the node.
@pytest.mark.asyncio
async def test_scenario_d_missing_start_block():
    auction = FakeReader(logs={"Bid": [{"n": 1}]})
    with pytest.raises(MissingParameter):
        await ledger.past_bid_events(auction, None)
    assert auction.calls == []


# Dashboard view: Bob checks the primary token price in ETH and USDT and its market cap.
@pytest.mark.asyncio
async def test_dashboard_price_and_market_cap():
    primary_eth = pair_reader(PRIMARY, WETH, 50_000_000 * 10**18, 400 * 10**18)
    eth_usdt = pair_reader(WETH, USDT, 10_000 * 10**18, 25_000_000 * 10**6)
    token = FakeReader({"totalSupply": 10_000_000_000 * 10**18})

    in_eth = await ledger.primary_price_in_eth(primary_eth, PRIMARY)
    in_usdt = await ledger.primary_price_in_reference(primary_eth, eth_usdt, PRIMARY)
    cap = await ledger.market_cap(token, primary_eth, eth_usdt, PRIMARY)
    print(f"[dashboard] PRIM per ETH={_fmt(in_eth)} | USDT per PRIM={_fmt(in_usdt)} | cap={_fmt(cap)}")

    assert in_eth == Decimal("124688")
    assert cap == in_usdt * Decimal(10_000_000_000)
    # ~2500 USDT/ETH over ~125k PRIM/ETH
    assert Decimal("0.0199") < in_usdt < Decimal("0.0201")
