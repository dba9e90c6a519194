"""
Ledger Lens Core Constants
==========================

Static configuration shared by the normalizer, the route engine and the query
facade. Contract addresses and ABIs are not kept here; callers bind them when
building readers.
"""

# NOTE: Scales are the number of base-10 fractional digits a contract uses for an
# asset's base-unit integers (10**-scale of one human-readable unit).

from decimal import Decimal

# ---------------------------------------------------------------------------
# Asset scales
# ---------------------------------------------------------------------------

#: Primary token (auction asset, distribution pool amounts).
PRIMARY_SCALE: int = 18

#: Staking ledger shares and share rate.
STAKING_SCALE: int = 18

#: Native ETH / WETH reserves.
ETH_SCALE: int = 18

#: Stable-value reference asset used for price quotes (USDT).
REFERENCE_SCALE: int = 6


# ---------------------------------------------------------------------------
# Decimal arithmetic and quoting defaults
# ---------------------------------------------------------------------------

#: Significant digits for internal Decimal arithmetic; covers any uint256 value.
DECIMAL_PRECISION: int = 78

#: Protocol fee netted from the input side of each hop (fraction, not bps).
DEFAULT_POOL_FEE: Decimal = Decimal(0)

#: Significant digits kept when a quoted price is truncated for output.
DEFAULT_SIGNIFICANT_DIGITS: int = 6

#: Input size used for spot prices: one whole unit of the input asset.
DEFAULT_QUOTE_AMOUNT: Decimal = Decimal(1)

BPS_DENOMINATOR: int = 10_000


# ---------------------------------------------------------------------------
# Chain sentinels
# ---------------------------------------------------------------------------

ZERO_ADDRESS: str = "0x" + "0" * 40

#: Open-ended upper bound for historical log queries.
LATEST: str = "latest"


# ---------------------------------------------------------------------------
# Contract method names
# ---------------------------------------------------------------------------

# token
M_TOTAL_SUPPLY = "totalSupply"

# auction (both generations)
M_RESERVES_OF = "reservesOf"
M_CURRENT_AUCTION_ID = "calculateStepsFromStart"
M_NEXT_WEEKLY_AUCTION_ID = "calculateNearestWeeklyAuction"
M_SEVEN_DAY_PRICE = "getUniswapMiddlePriceForSevenDays"

# auction, legacy generation
M_LEGACY_AUCTIONS_OF = "auctionsOf_"
M_LEGACY_AUCTION_BID_OF = "auctionBidOf"

# auction, current generation
M_USER_AUCTIONS = "getUserAuctions"

# staking
M_SHARE_RATE = "shareRate"
M_TOTAL_SHARES = "sharesTotalSupply"

# big payday distribution pool
M_CLOSEST_POOL_AMOUNT = "getClosestPoolAmount"
M_POOL_YEAR_AMOUNTS = "getPoolYearAmounts"

# Uniswap-V2-style pair
M_GET_RESERVES = "getReserves"


# ---------------------------------------------------------------------------
# Contract event names
# ---------------------------------------------------------------------------

E_BID = "Bid"
# Spelled as emitted by the auction contract.
E_WITHDRAW = "Withdraval"
E_STAKE = "Stake"
E_UNSTAKE = "Unstake"


__all__ = [
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
]
