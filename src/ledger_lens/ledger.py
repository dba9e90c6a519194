"""Ledger query facade: async queries over the token, staking, auction,
distribution-pool and pair contracts, returning normalized read models.

Every function is stateless and takes its collaborators explicitly. Required
identifiers are validated before any read is issued. Independent reads that
feed one query are issued concurrently (`asyncio.gather`); if any of them
fails the whole query fails, with the failure tagged `UpstreamReadFailure`.
Nothing is retried or cached here.
"""
from __future__ import annotations

import asyncio
import logging
import time
from decimal import Context, Decimal, ROUND_DOWN
from typing import Any, AsyncIterator, List, Optional, Sequence

from . import decode
from .amm import QuoteConfig, quote_with_config
from .core import (
    E_BID,
    E_STAKE,
    E_UNSTAKE,
    E_WITHDRAW,
    DECIMAL_PRECISION,
    ETH_SCALE,
    LATEST,
    M_CLOSEST_POOL_AMOUNT,
    M_CURRENT_AUCTION_ID,
    M_GET_RESERVES,
    M_LEGACY_AUCTION_BID_OF,
    M_LEGACY_AUCTIONS_OF,
    M_NEXT_WEEKLY_AUCTION_ID,
    M_POOL_YEAR_AMOUNTS,
    M_RESERVES_OF,
    M_SEVEN_DAY_PRICE,
    M_SHARE_RATE,
    M_TOTAL_SHARES,
    M_TOTAL_SUPPLY,
    M_USER_AUCTIONS,
    PRIMARY_SCALE,
    STAKING_SCALE,
    USDT,
    WETH,
    Asset,
    CombinedHistory,
    CurrentBid,
    InvalidBlockRange,
    LedgerError,
    LegacyBid,
    MissingParameter,
    ReserveSnapshot,
    UpstreamReadFailure,
    parse_raw,
    to_decimal,
)
from .path_builder import build_route, sorts_before
from .readers import BlockRef, ChainReader, ContractReader
from .reconcile import reconcile

logger = logging.getLogger(__name__)

_CTX = Context(prec=DECIMAL_PRECISION, rounding=ROUND_DOWN)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def _require(value: Any, name: str) -> Any:
    # 0 is a valid auction id / block number; only absence is rejected.
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingParameter(name)
    return value


def _block_bound(value: Any, start: Any, end: Any) -> Optional[int]:
    """Return the integer bound, or None for the 'latest' sentinel."""
    if isinstance(value, str) and value == LATEST:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidBlockRange(start, end, f"block bound must be an int or {LATEST!r}, got {value!r}")
    if value < 0:
        raise InvalidBlockRange(start, end, f"block bound must be >= 0, got {value}")
    return value


def check_block_range(start: Optional[BlockRef], end: Optional[BlockRef] = LATEST) -> tuple:
    """Validate a historical log range; `end` defaults to the latest block."""
    if start is None:
        raise MissingParameter("a start block")
    if end is None:
        end = LATEST
    s = _block_bound(start, start, end)
    e = _block_bound(end, start, end)
    if s is None and e is not None:
        raise InvalidBlockRange(start, end, "start is 'latest' but end is a fixed block")
    if s is not None and e is not None and s > e:
        raise InvalidBlockRange(start, end, f"start {s} is after end {e}")
    return start, end


# ---------------------------------------------------------------------------
# Tagged reads
# ---------------------------------------------------------------------------

async def _read(reader: ContractReader, method: str, *args: Any) -> Any:
    t0 = time.perf_counter()
    try:
        result = await reader.invoke(method, list(args))
    except LedgerError:
        raise
    except Exception as exc:
        logger.warning("read %s%r failed: %r", method, tuple(args), exc)
        raise UpstreamReadFailure(method, exc) from exc
    logger.debug("read %s%r (%.0fms)", method, tuple(args), (time.perf_counter() - t0) * 1000)
    return result


async def _logs(reader: ContractReader, event: str, start: BlockRef, end: BlockRef) -> List[Any]:
    try:
        logs = await reader.query_logs(event, start, end)
    except LedgerError:
        raise
    except Exception as exc:
        logger.warning("log query %s[%s..%s] failed: %r", event, start, end, exc)
        raise UpstreamReadFailure(event, exc) from exc
    logger.debug("log query %s[%s..%s] -> %d records", event, start, end, len(logs))
    return list(logs)


async def _read_amount(reader: ContractReader, method: str, scale: int, *args: Any) -> Decimal:
    return to_decimal(await _read(reader, method, *args), scale)


# ---------------------------------------------------------------------------
# Auction
# ---------------------------------------------------------------------------

async def auction_reserves(auction: ContractReader, auction_id: int) -> ReserveSnapshot:
    """Reserves of one auction round, all four fields normalized with scale 18."""
    _require(auction_id, "the id of the auction")
    raw = await _read(auction, M_RESERVES_OF, auction_id)
    return decode.reserve_snapshot_from_raw(raw, PRIMARY_SCALE)


async def current_auction_id(auction: ContractReader) -> int:
    return parse_raw(await _read(auction, M_CURRENT_AUCTION_ID))


async def next_weekly_auction_id(auction: ContractReader) -> int:
    return parse_raw(await _read(auction, M_NEXT_WEEKLY_AUCTION_ID))


async def current_auction_bid(auction: ContractReader) -> Decimal:
    """Seven-day average pool price the current auction bids at (asset per ETH)."""
    return await _read_amount(auction, M_SEVEN_DAY_PRICE, PRIMARY_SCALE)


async def legacy_bids(auction: ContractReader, account: str) -> List[LegacyBid]:
    """All legacy-generation bids of `account`; per-round reads run concurrently."""
    _require(account, "an account address")
    ids = await _read(auction, M_LEGACY_AUCTIONS_OF, account)
    auction_ids = [parse_raw(i) for i in ids]
    raws = await asyncio.gather(
        *(_read(auction, M_LEGACY_AUCTION_BID_OF, i, account) for i in auction_ids)
    )
    return [decode.legacy_bid_from_raw(i, raw, ETH_SCALE) for i, raw in zip(auction_ids, raws)]


async def current_bids(auction: ContractReader, account: str) -> List[CurrentBid]:
    """All current-generation bids of `account`, in contract order."""
    _require(account, "an account address")
    raws = await _read(auction, M_USER_AUCTIONS, account)
    return [decode.current_bid_from_raw(raw, ETH_SCALE) for raw in raws]


async def combined_bids(
    legacy_auction: ContractReader,
    current_auction: ContractReader,
    account: str,
) -> CombinedHistory:
    """Bids of `account` across both generations, reconciled (current wins per id)."""
    _require(account, "an account address")
    legacy, current = await asyncio.gather(
        legacy_bids(legacy_auction, account),
        current_bids(current_auction, account),
    )
    return reconcile(legacy, current)


# ---------------------------------------------------------------------------
# Staking / distribution pool / token
# ---------------------------------------------------------------------------

async def share_rate(staking: ContractReader) -> Decimal:
    return await _read_amount(staking, M_SHARE_RATE, STAKING_SCALE)


async def total_shares(staking: ContractReader) -> Decimal:
    return await _read_amount(staking, M_TOTAL_SHARES, STAKING_SCALE)


async def next_big_payday_amount(bpd: ContractReader) -> Decimal:
    return await _read_amount(bpd, M_CLOSEST_POOL_AMOUNT, PRIMARY_SCALE)


async def big_payday_amounts(bpd: ContractReader) -> List[Decimal]:
    """Amount held for each yearly distribution, in pool order."""
    raw = await _read(bpd, M_POOL_YEAR_AMOUNTS)
    return [to_decimal(r, PRIMARY_SCALE) for r in raw]


async def total_supply(token: ContractReader) -> Decimal:
    return await _read_amount(token, M_TOTAL_SUPPLY, PRIMARY_SCALE)


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------

async def _pair_reserves(pair: ContractReader, asset_a: Asset, asset_b: Asset):
    token0, token1 = (asset_a, asset_b) if sorts_before(asset_a.address, asset_b.address) else (asset_b, asset_a)
    raw = await _read(pair, M_GET_RESERVES)
    return decode.pair_reserves_from_raw(raw, token0.address, token1.address)


async def spot_price(
    pairs: Sequence[ContractReader],
    path: Sequence[Asset],
    config: QuoteConfig = QuoteConfig(),
) -> Decimal:
    """Price of `path[0]` in units of `path[-1]` (output per input), via 1 or 2 hops.

    `pairs[i]` must be the pair contract joining `path[i]` and `path[i + 1]`.
    """
    if len(pairs) != len(path) - 1:
        raise ValueError(f"expected {len(path) - 1} pairs for a {len(path)}-asset path, got {len(pairs)}")
    for i, pair in enumerate(pairs):
        _require(pair, f"the pair contract for hop {i}")
    reserves = await asyncio.gather(
        *(_pair_reserves(pair, path[i], path[i + 1]) for i, pair in enumerate(pairs))
    )
    route = build_route(path, reserves)
    return quote_with_config(route, config)


async def primary_price_in_eth(
    pair: ContractReader,
    primary: Asset,
    config: QuoteConfig = QuoteConfig(),
) -> Decimal:
    """Amount of the primary asset one ETH buys (single hop, ETH -> primary)."""
    return await spot_price([pair], [WETH, primary], config)


async def primary_price_in_reference(
    primary_eth_pair: ContractReader,
    eth_reference_pair: ContractReader,
    primary: Asset,
    config: QuoteConfig = QuoteConfig(),
    reference: Asset = USDT,
) -> Decimal:
    """Price of one primary unit in the reference asset (primary -> WETH -> reference)."""
    return await spot_price([primary_eth_pair, eth_reference_pair], [primary, WETH, reference], config)


async def market_cap(
    token: ContractReader,
    primary_eth_pair: ContractReader,
    eth_reference_pair: ContractReader,
    primary: Asset,
    config: QuoteConfig = QuoteConfig(),
    reference: Asset = USDT,
) -> Decimal:
    """Spot price (reference units) times normalized total supply."""
    price, supply = await asyncio.gather(
        primary_price_in_reference(primary_eth_pair, eth_reference_pair, primary, config, reference),
        total_supply(token),
    )
    return _CTX.multiply(price, supply)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

async def past_events(
    reader: ContractReader,
    event: str,
    start: Optional[BlockRef],
    end: Optional[BlockRef] = LATEST,
) -> List[Any]:
    """Historical `event` logs in [start, end]; `end` defaults to the latest block."""
    _require(event, "an event name")
    start, end = check_block_range(start, end)
    return await _logs(reader, event, start, end)


async def past_bid_events(auction: ContractReader, start: Optional[BlockRef], end: Optional[BlockRef] = LATEST) -> List[Any]:
    return await past_events(auction, E_BID, start, end)


async def past_withdraw_events(auction: ContractReader, start: Optional[BlockRef], end: Optional[BlockRef] = LATEST) -> List[Any]:
    return await past_events(auction, E_WITHDRAW, start, end)


async def past_stake_events(staking: ContractReader, start: Optional[BlockRef], end: Optional[BlockRef] = LATEST) -> List[Any]:
    return await past_events(staking, E_STAKE, start, end)


async def past_unstake_events(staking: ContractReader, start: Optional[BlockRef], end: Optional[BlockRef] = LATEST) -> List[Any]:
    return await past_events(staking, E_UNSTAKE, start, end)


def subscribe(reader: ContractReader, event: str) -> AsyncIterator[Any]:
    """Live `event` stream, passed through from the collaborator untouched."""
    _require(event, "an event name")
    return reader.subscribe(event)


def subscribe_to_bid_events(auction: ContractReader) -> AsyncIterator[Any]:
    return subscribe(auction, E_BID)


def subscribe_to_withdraw_events(auction: ContractReader) -> AsyncIterator[Any]:
    return subscribe(auction, E_WITHDRAW)


def subscribe_to_stake_events(staking: ContractReader) -> AsyncIterator[Any]:
    return subscribe(staking, E_STAKE)


def subscribe_to_unstake_events(staking: ContractReader) -> AsyncIterator[Any]:
    return subscribe(staking, E_UNSTAKE)


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------

async def current_block(chain: ChainReader) -> int:
    try:
        return await chain.block_number()
    except LedgerError:
        raise
    except Exception as exc:
        raise UpstreamReadFailure("block_number", exc) from exc


__all__ = [
    "check_block_range",
    "auction_reserves",
    "current_auction_id",
    "next_weekly_auction_id",
    "current_auction_bid",
    "legacy_bids",
    "current_bids",
    "combined_bids",
    "share_rate",
    "total_shares",
    "next_big_payday_amount",
    "big_payday_amounts",
    "total_supply",
    "spot_price",
    "primary_price_in_eth",
    "primary_price_in_reference",
    "market_cap",
    "past_events",
    "past_bid_events",
    "past_withdraw_events",
    "past_stake_events",
    "past_unstake_events",
    "subscribe",
    "subscribe_to_bid_events",
    "subscribe_to_withdraw_events",
    "subscribe_to_stake_events",
    "subscribe_to_unstake_events",
    "current_block",
]
