"""Offline demo: normalization, two-generation reconciliation and route pricing.

No chain access: every scenario runs on in-memory values and in-memory readers.

Scenarios covered:
N1) Normalize base units at scale 18 and scale 6
R1) Reconcile legacy + current bids (current wins per auction id)
Q1) Single-hop quote (exact input, truncated to significant digits)
Q2) Two-hop quote primary -> WETH -> USDT with mixed scales, both price sides
F1) Facade: combined bids and market cap over in-memory readers
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from decimal import Decimal
from typing import Callable, List

from ledger_lens import (
    Asset,
    CurrentBid,
    LegacyBid,
    LiquidityPool,
    MemoryContractReader,
    PriceSide,
    QuoteConfig,
    Route,
    USDT,
    WETH,
    build_route,
    execution_price,
    ledger,
    make_pair,
    quote,
    reconcile,
    to_decimal,
    to_raw,
)
from ledger_lens.amm import fee_from_bps

PRIMARY = Asset("PRIM", "0x7D85e23014F84E6E21d5663aCD8751bEF3562352", 18)

# ---------- pretty printers ----------

def print_history(title: str, history) -> None:
    print(f"\n=== {title} ===")
    for r in history:
        extra = ""
        if isinstance(r, CurrentBid):
            extra = f" auto_stake_days={r.auto_stake_days} withdrawn={r.withdrawn}"
        print(f"  • [{r.generation:7s}] auction={r.auction_id} deposit={r.deposit_amount}{extra}")


# ---------- scenarios ----------

def s_n1() -> None:
    print("\n=== N1) Normalize base units ===")
    for raw, scale in [(1500000000000000000, 18), (2**200, 18), (1234567, 6)]:
        d = to_decimal(raw, scale)
        print(f"  raw={raw} scale={scale} -> {d} -> back={to_raw(d, scale)}")


def s_r1() -> None:
    legacy = [
        LegacyBid(1, Decimal("2.0")),
        LegacyBid(3, Decimal("0.5")),
        LegacyBid(4, Decimal("0")),
    ]
    current = [
        CurrentBid(1, Decimal("0"), withdrawn=True),
        CurrentBid(5, Decimal("1.25"), auto_stake_days=30),
    ]
    hist = reconcile(legacy, current)
    print_history("R1) Reconciled (merge order)", hist)
    print_history("R1) Reconciled (sorted by auction)", hist.sorted_by_auction())


def s_q1(fee: Decimal, digits: int) -> None:
    route = Route((LiquidityPool(Decimal("1000"), Decimal("2000")),))
    out = quote(route, Decimal("10"), fee=fee, significant_digits=digits)
    print("\n=== Q1) Single hop 1000/2000, in=10 ===")
    print(f"  out={out} (fee={fee}, digits={digits})")


def s_q2(fee: Decimal, digits: int) -> None:
    primary_eth = make_pair(PRIMARY, WETH, 50_000_000 * 10**18, 400 * 10**18)
    eth_usdt = make_pair(WETH, USDT, 10_000 * 10**18, 25_000_000 * 10**6)
    route = build_route([PRIMARY, WETH, USDT], [primary_eth, eth_usdt])
    print("\n=== Q2) Two hops PRIM -> WETH -> USDT ===")
    for side in PriceSide:
        p = execution_price(route, Decimal("1"), side, fee=fee, significant_digits=digits)
        print(f"  {side.value}: {p}")


def s_f1(fee: Decimal, digits: int) -> None:
    primary_eth = make_pair(PRIMARY, WETH, 50_000_000 * 10**18, 400 * 10**18)
    eth_usdt = make_pair(WETH, USDT, 10_000 * 10**18, 25_000_000 * 10**6)
    acct = "0x00000000000000000000000000000000000000aa"
    legacy_auction = MemoryContractReader({
        "auctionsOf_": [1, 2],
        ("auctionBidOf", 1, acct): (2 * 10**18, "0x" + "0" * 40),
        ("auctionBidOf", 2, acct): (10**17, "0x" + "0" * 40),
    })
    current_auction = MemoryContractReader({
        "getUserAuctions": [(1, 0, "0x" + "0" * 40, 0, True)],
    })
    token = MemoryContractReader({"totalSupply": 10_000_000_000 * 10**18})
    p0 = MemoryContractReader({"getReserves": (primary_eth.reserve0, primary_eth.reserve1, 0)})
    p1 = MemoryContractReader({"getReserves": (eth_usdt.reserve0, eth_usdt.reserve1, 0)})
    cfg = QuoteConfig(fee=fee, significant_digits=digits)

    async def run():
        hist = await ledger.combined_bids(legacy_auction, current_auction, acct)
        cap = await ledger.market_cap(token, p0, p1, PRIMARY, cfg)
        return hist, cap

    hist, cap = asyncio.run(run())
    print_history("F1) Facade combined bids", hist)
    print(f"  market cap (USDT) = {cap}")


class Scenario:
    def __init__(self, sid: str, fn: Callable[[], None]):
        self.sid = sid
        self.fn = fn

scenarios: List[Scenario] = []

def add(sid: str, fn: Callable[[], None]) -> None:
    scenarios.append(Scenario(sid, fn))

# ---------- run scenarios ----------
if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="ledger_lens offline demo")
    parser.add_argument("--only", type=str, default=None, help="Comma-separated scenario ids to run (e.g., R1,Q2)")
    parser.add_argument("--skip", type=str, default=None, help="Comma-separated scenario ids to skip")
    parser.add_argument("--fee-bps", type=int, default=0, help="Pool fee in basis points applied on each hop's input")
    parser.add_argument("--digits", type=int, default=6, help="Significant digits kept in quoted values")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show library debug logs")
    args = parser.parse_args(sys.argv[1:])

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    fee = fee_from_bps(args.fee_bps)

    add("N1", s_n1)
    add("R1", s_r1)
    add("Q1", lambda: s_q1(fee, args.digits))
    add("Q2", lambda: s_q2(fee, args.digits))
    add("F1", lambda: s_f1(fee, args.digits))

    only = {s.strip() for s in args.only.split(",")} if args.only else None
    skip = {s.strip() for s in args.skip.split(",")} if args.skip else set()
    for sc in scenarios:
        if only is not None and sc.sid not in only:
            continue
        if sc.sid in skip:
            continue
        sc.fn()
