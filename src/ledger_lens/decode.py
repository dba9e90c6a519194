"""Decoders from raw contract call results to normalized read models.

Transports differ in how they hand back a struct: web3.py returns a tuple
(or a list of tuples for struct arrays), JSON-style transports return a mapping
keyed by output name, often with positional keys ("0", "1", ...) as well.
`field()` accepts any of these.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Optional

from .core import (
    ETH_SCALE,
    PRIMARY_SCALE,
    CurrentBid,
    InvalidAmount,
    LegacyBid,
    PairReserves,
    ReserveSnapshot,
    normalize_referrer,
    parse_raw,
    to_decimal,
)


def field(raw: Any, name: str, index: int) -> Any:
    """Fetch output `name` (mapping) or position `index` (sequence) from a raw result."""
    if isinstance(raw, Mapping):
        if name in raw:
            return raw[name]
        if str(index) in raw:
            return raw[str(index)]
        if index in raw:
            return raw[index]
        raise InvalidAmount(f"raw result has no field {name!r}")
    if isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        if index < len(raw):
            return raw[index]
        raise InvalidAmount(f"raw result has no position {index} (len={len(raw)})")
    raise InvalidAmount(f"cannot read field {name!r} from {type(raw).__name__}")


def _price(raw: Any, scale: int) -> Optional[Decimal]:
    # The auction reports 0 until the first trade is observed.
    value = parse_raw(raw)
    return None if value == 0 else to_decimal(value, scale)


def _as_int(raw: Any, name: str) -> int:
    try:
        return parse_raw(raw)
    except InvalidAmount as e:
        raise InvalidAmount(f"{name}: {e}") from None


def _as_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.strip().lower() in ("true", "1")
    return bool(raw)


# ---------------------------------------------------------------------------
# Auction
# ---------------------------------------------------------------------------

def reserve_snapshot_from_raw(raw: Any, scale: int = PRIMARY_SCALE) -> ReserveSnapshot:
    """reservesOf(id) -> (eth, token, uniswapLastPrice, uniswapMiddlePrice)."""
    return ReserveSnapshot(
        eth_reserve=to_decimal(field(raw, "eth", 0), ETH_SCALE),
        asset_reserve=to_decimal(field(raw, "token", 1), scale),
        last_price=_price(field(raw, "uniswapLastPrice", 2), scale),
        rolling_average_price=_price(field(raw, "uniswapMiddlePrice", 3), scale),
    )


def legacy_bid_from_raw(auction_id: Any, raw: Any, scale: int = ETH_SCALE) -> LegacyBid:
    """auctionBidOf(id, account) -> (eth, ref)."""
    return LegacyBid(
        auction_id=_as_int(auction_id, "auction_id"),
        deposit_amount=to_decimal(field(raw, "eth", 0), scale),
        referrer=normalize_referrer(field(raw, "ref", 1)),
    )


def current_bid_from_raw(raw: Any, scale: int = ETH_SCALE) -> CurrentBid:
    """getUserAuctions(account)[i] -> (auctionId, eth, ref, autoStakeDays, withdrawn)."""
    return CurrentBid(
        auction_id=_as_int(field(raw, "auctionId", 0), "auction_id"),
        deposit_amount=to_decimal(field(raw, "eth", 1), scale),
        referrer=normalize_referrer(field(raw, "ref", 2)),
        auto_stake_days=_as_int(field(raw, "autoStakeDays", 3), "auto_stake_days"),
        withdrawn=_as_bool(field(raw, "withdrawn", 4)),
    )


# ---------------------------------------------------------------------------
# Pairs
# ---------------------------------------------------------------------------

def pair_reserves_from_raw(raw: Any, token0: str, token1: str) -> PairReserves:
    """getReserves() -> (reserve0, reserve1, blockTimestampLast)."""
    return PairReserves(
        token0=token0,
        token1=token1,
        reserve0=_as_int(field(raw, "reserve0", 0), "reserve0"),
        reserve1=_as_int(field(raw, "reserve1", 1), "reserve1"),
    )


__all__ = [
    "field",
    "reserve_snapshot_from_raw",
    "legacy_bid_from_raw",
    "current_bid_from_raw",
    "pair_reserves_from_raw",
]
