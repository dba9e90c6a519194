"""
Ledger Lens Core
================

Unified exports for the fixed-point normalizer, read models, formatting helpers
and error kinds. Everything in `core` is pure: no module here performs I/O.
"""

# NOTE:
#   All monetary arithmetic is Decimal-based with a local 78-digit context so that
#   uint256 base-unit values convert without loss. Floats appear only through
#   `to_float`, at the consumer's request.

from .constants import (
    PRIMARY_SCALE,
    STAKING_SCALE,
    ETH_SCALE,
    REFERENCE_SCALE,
    DECIMAL_PRECISION,
    DEFAULT_POOL_FEE,
    DEFAULT_SIGNIFICANT_DIGITS,
    DEFAULT_QUOTE_AMOUNT,
    BPS_DENOMINATOR,
    ZERO_ADDRESS,
    LATEST,
    M_TOTAL_SUPPLY,
    M_RESERVES_OF,
    M_CURRENT_AUCTION_ID,
    M_NEXT_WEEKLY_AUCTION_ID,
    M_SEVEN_DAY_PRICE,
    M_LEGACY_AUCTIONS_OF,
    M_LEGACY_AUCTION_BID_OF,
    M_USER_AUCTIONS,
    M_SHARE_RATE,
    M_TOTAL_SHARES,
    M_CLOSEST_POOL_AMOUNT,
    M_POOL_YEAR_AMOUNTS,
    M_GET_RESERVES,
    E_BID,
    E_WITHDRAW,
    E_STAKE,
    E_UNSTAKE,
)

# Normalizer
from .amounts import (
    RawLike,
    DecimalLike,
    parse_raw,
    as_decimal,
    to_decimal,
    to_raw,
    to_float,
)

# Formatting / truncation
from .fmt import (
    truncate_significant,
    to_significant,
)

# Read models
from .datatypes import (
    normalize_referrer,
    LegacyBid,
    CurrentBid,
    BidRecord,
    CombinedHistory,
    ReserveSnapshot,
    LiquidityPool,
    Route,
    TradeDirection,
    PriceSide,
    Asset,
    PairReserves,
    WETH,
    USDT,
)

# Error kinds
from .exc import (
    LedgerError,
    MissingParameter,
    InvalidBlockRange,
    InvalidAmount,
    IlliquidRoute,
    UpstreamReadFailure,
)

__all__ = [
    # constants
    "PRIMARY_SCALE",
    "STAKING_SCALE",
    "ETH_SCALE",
    "REFERENCE_SCALE",
    "DECIMAL_PRECISION",
    "DEFAULT_POOL_FEE",
    "DEFAULT_SIGNIFICANT_DIGITS",
    "DEFAULT_QUOTE_AMOUNT",
    "BPS_DENOMINATOR",
    "ZERO_ADDRESS",
    "LATEST",
    "M_TOTAL_SUPPLY",
    "M_RESERVES_OF",
    "M_CURRENT_AUCTION_ID",
    "M_NEXT_WEEKLY_AUCTION_ID",
    "M_SEVEN_DAY_PRICE",
    "M_LEGACY_AUCTIONS_OF",
    "M_LEGACY_AUCTION_BID_OF",
    "M_USER_AUCTIONS",
    "M_SHARE_RATE",
    "M_TOTAL_SHARES",
    "M_CLOSEST_POOL_AMOUNT",
    "M_POOL_YEAR_AMOUNTS",
    "M_GET_RESERVES",
    "E_BID",
    "E_WITHDRAW",
    "E_STAKE",
    "E_UNSTAKE",
    # normalizer
    "RawLike",
    "DecimalLike",
    "parse_raw",
    "as_decimal",
    "to_decimal",
    "to_raw",
    "to_float",
    # fmt
    "truncate_significant",
    "to_significant",
    # datatypes
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
    # exceptions
    "LedgerError",
    "MissingParameter",
    "InvalidBlockRange",
    "InvalidAmount",
    "IlliquidRoute",
    "UpstreamReadFailure",
]
