# Top-level API for ledger_lens (read-only, Decimal-domain).
"""
Top-level API for ledger_lens.

This module exposes the stable interface for reading a two-generation
(legacy / current) contract family:
  - core: fixed-point normalizer, read models, error kinds
  - reconcile: merge legacy and current bid records into one history
  - amm: constant-product route pricing (1 or 2 hops, exact input)
  - ledger: async query facade over injected ContractReader collaborators

The library never writes chain state; it has no wallet, signing or
transaction support.
"""

from __future__ import annotations

from .core import (
    PRIMARY_SCALE,
    REFERENCE_SCALE,
    LATEST,
    to_decimal,
    to_raw,
    to_float,
    truncate_significant,
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
    LedgerError,
    MissingParameter,
    InvalidBlockRange,
    InvalidAmount,
    IlliquidRoute,
    UpstreamReadFailure,
)
from .reconcile import reconcile
from .amm import QuoteConfig, quote, execution_price, swap_out_given_in
from .path_builder import build_route, make_pair
from .readers import ContractReader, ChainReader, MemoryContractReader, Web3ContractReader, Web3ChainReader
from . import ledger

__version__ = "0.3.0"

__all__ = [
    # normalizer
    "PRIMARY_SCALE",
    "REFERENCE_SCALE",
    "LATEST",
    "to_decimal",
    "to_raw",
    "to_float",
    "truncate_significant",
    # read models
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
    # errors
    "LedgerError",
    "MissingParameter",
    "InvalidBlockRange",
    "InvalidAmount",
    "IlliquidRoute",
    "UpstreamReadFailure",
    # engines
    "reconcile",
    "QuoteConfig",
    "quote",
    "execution_price",
    "swap_out_given_in",
    "build_route",
    "make_pair",
    # collaborators
    "ContractReader",
    "ChainReader",
    "Web3ContractReader",
    "Web3ChainReader",
    "MemoryContractReader",
    # facade
    "ledger",
]
