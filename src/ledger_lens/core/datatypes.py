"""
Read models shared by the reconciler, the route engine and the query facade.

These datatypes are immutable and built fresh for every query; nothing here
is cached or mutated after construction.

Notes:
- Monetary fields are Decimals that have already been normalized from base units.
- Bid records are a tagged union (LegacyBid | CurrentBid), not a class
  hierarchy: the two generations are distinct shapes merged by `reconcile`.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Tuple, Union

from .constants import ETH_SCALE, REFERENCE_SCALE, ZERO_ADDRESS
from .exc import InvalidAmount


def normalize_referrer(ref: Optional[str]) -> Optional[str]:
    """Map the zero-address sentinel (and empty values) to None."""
    if not ref:
        return None
    if ref.lower() == ZERO_ADDRESS:
        return None
    return ref


def _check_non_negative(name: str, value: Optional[Decimal]) -> None:
    if value is not None and value < 0:
        raise InvalidAmount(f"{name} must be >= 0, got {value}")


# ---------------------------------------------------------------------------
# Bid records (legacy / current generation)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LegacyBid:
    """One account's entry into one auction round on the legacy generation.

    Legacy records are immutable history. A zero `deposit_amount` usually means
    the position was withdrawn or migrated; it is kept as-is.
    """

    generation: ClassVar[str] = "legacy"

    auction_id: int
    deposit_amount: Decimal
    referrer: Optional[str] = None

    def __post_init__(self):
        if self.auction_id < 0:
            raise InvalidAmount(f"auction_id must be >= 0, got {self.auction_id}")
        _check_non_negative("deposit_amount", self.deposit_amount)


@dataclass(frozen=True)
class CurrentBid:
    """One account's entry into one auction round on the current generation.

    `withdrawn` moves False -> True exactly once on chain; each read reflects
    whatever the contract reports at that time.
    """

    generation: ClassVar[str] = "current"

    auction_id: int
    deposit_amount: Decimal
    referrer: Optional[str] = None
    auto_stake_days: int = 0
    withdrawn: bool = False

    def __post_init__(self):
        if self.auction_id < 0:
            raise InvalidAmount(f"auction_id must be >= 0, got {self.auction_id}")
        if self.auto_stake_days < 0:
            raise InvalidAmount(f"auto_stake_days must be >= 0, got {self.auto_stake_days}")
        _check_non_negative("deposit_amount", self.deposit_amount)


BidRecord = Union[LegacyBid, CurrentBid]


@dataclass(frozen=True)
class CombinedHistory:
    """Reconciled bid history for one account across both generations.

    Order is the reconciler's: surviving legacy records first, then current
    records as received. It is NOT globally sorted; use `sorted_by_auction()`.
    """

    records: Tuple[BidRecord, ...] = ()

    def __iter__(self) -> Iterator[BidRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __getitem__(self, i: int) -> BidRecord:
        return self.records[i]

    def sorted_by_auction(self) -> "CombinedHistory":
        """Return a copy ordered by auction id (stable for equal ids)."""
        return CombinedHistory(tuple(sorted(self.records, key=lambda r: r.auction_id)))

    def for_auction(self, auction_id: int) -> List[BidRecord]:
        return [r for r in self.records if r.auction_id == auction_id]

    def legacy(self) -> List[LegacyBid]:
        return [r for r in self.records if isinstance(r, LegacyBid)]

    def current(self) -> List[CurrentBid]:
        return [r for r in self.records if isinstance(r, CurrentBid)]

    def auction_ids(self) -> List[int]:
        return [r.auction_id for r in self.records]


# ---------------------------------------------------------------------------
# Auction reserves
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReserveSnapshot:
    """Point-in-time liquidity tracking of one auction round.

    Fields:
    - eth_reserve: ETH held in the round's reserve.
    - asset_reserve: primary asset held in the round's reserve.
    - last_price: last pool price observed (asset per ETH), None before any trade.
    - rolling_average_price: rolling average pool price, None before any trade.
    """

    eth_reserve: Decimal
    asset_reserve: Decimal
    last_price: Optional[Decimal] = None
    rolling_average_price: Optional[Decimal] = None

    def __post_init__(self):
        _check_non_negative("eth_reserve", self.eth_reserve)
        _check_non_negative("asset_reserve", self.asset_reserve)
        _check_non_negative("last_price", self.last_price)
        _check_non_negative("rolling_average_price", self.rolling_average_price)


# ---------------------------------------------------------------------------
# Pools and routes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LiquidityPool:
    """Reserve pair for one trading pair, oriented input -> output.

    Zero reserves are representable (a drained pair is still a valid read) but
    the route engine refuses to quote through them.
    """

    reserve_in: Decimal
    reserve_out: Decimal

    def __post_init__(self):
        _check_non_negative("reserve_in", self.reserve_in)
        _check_non_negative("reserve_out", self.reserve_out)

    def is_tradable(self) -> bool:
        return self.reserve_in > 0 and self.reserve_out > 0

    def reversed(self) -> "LiquidityPool":
        return LiquidityPool(self.reserve_out, self.reserve_in)


@dataclass(frozen=True)
class Route:
    """Ordered path of one or two pools from an input asset to an output asset."""

    pools: Tuple[LiquidityPool, ...]

    MAX_HOPS: ClassVar[int] = 2

    def __post_init__(self):
        pools = tuple(self.pools)
        if not 1 <= len(pools) <= self.MAX_HOPS:
            raise ValueError(f"route must have 1..{self.MAX_HOPS} pools, got {len(pools)}")
        object.__setattr__(self, "pools", pools)

    @property
    def hops(self) -> int:
        return len(self.pools)


class TradeDirection(Enum):
    EXACT_INPUT = "EXACT_INPUT"


class PriceSide(Enum):
    """Which way an execution price is denominated."""

    #: output units received per unit of input (e.g. USDT per token)
    OUTPUT_PER_INPUT = "OUTPUT_PER_INPUT"
    #: input units paid per unit of output (e.g. tokens per USDT)
    INPUT_PER_OUTPUT = "INPUT_PER_OUTPUT"


# ---------------------------------------------------------------------------
# Assets and pair reserves
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Asset:
    """Token identity plus the scale its contract uses for base units."""

    symbol: str
    address: str
    scale: int


@dataclass(frozen=True)
class PairReserves:
    """Raw reserves of a Uniswap-V2-style pair (token0 sorts before token1)."""

    token0: str
    token1: str
    reserve0: int
    reserve1: int


WETH = Asset("WETH", "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2", ETH_SCALE)
USDT = Asset("USDT", "0xdAC17F958D2ee523a2206206994597C13D831ec7", REFERENCE_SCALE)


__all__ = [
    "normalize_referrer",
    "LegacyBid",
    "CurrentBid",
    "BidRecord",
    "CombinedHistory",
    "ReserveSnapshot",
    "LiquidityPool",
    "Route",
    "TradeDirection",
    "PriceSide",
    "Asset",
    "PairReserves",
    "WETH",
    "USDT",
]
