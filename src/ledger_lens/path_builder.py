"""Path building: orient pair reserves along an asset path and emit a Route.

Pairs follow Uniswap-V2 conventions: token0 is the address that sorts first
(case-insensitive hex compare) and `getReserves()` reports (reserve0, reserve1).
Each side is normalized with its own asset's scale before it enters a pool, so
a WETH/USDT hop mixes scale 18 and scale 6 correctly.
"""
from __future__ import annotations

from typing import List, Sequence

from .core import Asset, LiquidityPool, PairReserves, Route, to_decimal


def sorts_before(a: str, b: str) -> bool:
    """True if address `a` would be token0 in a pair with `b`."""
    if a.lower() == b.lower():
        raise ValueError(f"identical addresses: {a}")
    return a.lower() < b.lower()


def make_pair(asset_a: Asset, asset_b: Asset, reserve_a: int, reserve_b: int) -> PairReserves:
    """Build PairReserves from reserves listed in (asset_a, asset_b) order."""
    if sorts_before(asset_a.address, asset_b.address):
        return PairReserves(asset_a.address, asset_b.address, reserve_a, reserve_b)
    return PairReserves(asset_b.address, asset_a.address, reserve_b, reserve_a)


def pool_for(pair: PairReserves, token_in: Asset, token_out: Asset) -> LiquidityPool:
    """Orient `pair` as token_in -> token_out and normalize both reserves."""
    t0, t1 = pair.token0.lower(), pair.token1.lower()
    a_in, a_out = token_in.address.lower(), token_out.address.lower()
    if (a_in, a_out) == (t0, t1):
        raw_in, raw_out = pair.reserve0, pair.reserve1
    elif (a_in, a_out) == (t1, t0):
        raw_in, raw_out = pair.reserve1, pair.reserve0
    else:
        raise ValueError(
            f"pair {pair.token0}/{pair.token1} does not connect {token_in.symbol} -> {token_out.symbol}"
        )
    return LiquidityPool(to_decimal(raw_in, token_in.scale), to_decimal(raw_out, token_out.scale))


def build_route(path: Sequence[Asset], pairs: Sequence[PairReserves]) -> Route:
    """Build a Route for `path` (2 or 3 assets) using one pair per hop."""
    if len(path) < 2:
        raise ValueError(f"path needs at least 2 assets, got {len(path)}")
    if len(pairs) != len(path) - 1:
        raise ValueError(f"expected {len(path) - 1} pairs for a {len(path)}-asset path, got {len(pairs)}")
    pools: List[LiquidityPool] = [
        pool_for(pair, path[i], path[i + 1]) for i, pair in enumerate(pairs)
    ]
    return Route(tuple(pools))


__all__ = ["sorts_before", "make_pair", "pool_for", "build_route"]
