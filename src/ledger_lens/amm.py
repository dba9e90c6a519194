"""
Route price engine (constant product, fee on input): pool math only.

Pure functions over `LiquidityPool`/`Route` values: nothing here fetches
reserves, so every quote is reproducible from its inputs alone.

Single hop:   out = in' * R_out / (R_in + in'),  in' = in * (1 - fee)
Two hops:     the first hop's output is the second hop's input.

Only exact-input quoting is supported.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, Context, ROUND_DOWN
from typing import List, Optional

from .core import (
    BPS_DENOMINATOR,
    DECIMAL_PRECISION,
    DEFAULT_POOL_FEE,
    DEFAULT_QUOTE_AMOUNT,
    DEFAULT_SIGNIFICANT_DIGITS,
    DecimalLike,
    IlliquidRoute,
    InvalidAmount,
    LiquidityPool,
    PriceSide,
    Route,
    TradeDirection,
    as_decimal,
    to_significant,
    truncate_significant,
)

logger = logging.getLogger(__name__)

# Division rounds toward zero so intermediate hops never over-credit output.
_CTX = Context(prec=DECIMAL_PRECISION, rounding=ROUND_DOWN)


def _dbg(msg: str) -> None:
    logger.debug("[AMM] %s", msg)


@dataclass(frozen=True)
class QuoteConfig:
    """Quoting configuration.

    fee: fraction of each hop's input kept by the pool (0 <= fee < 1). Defaults
    to zero, i.e. reserves are taken as already net of protocol fees.
    significant_digits: output truncation; None keeps full precision.
    amount_in: input size (in whole units of the input asset) for spot prices.
    """
    fee: Decimal = DEFAULT_POOL_FEE
    significant_digits: Optional[int] = DEFAULT_SIGNIFICANT_DIGITS
    amount_in: Decimal = DEFAULT_QUOTE_AMOUNT


def fee_from_bps(bps: int) -> Decimal:
    """30 -> Decimal('0.003')."""
    if bps < 0 or bps >= BPS_DENOMINATOR:
        raise InvalidAmount(f"fee bps must be in [0, {BPS_DENOMINATOR}), got {bps}")
    return Decimal(bps) / Decimal(BPS_DENOMINATOR)


def _check_fee(fee: DecimalLike) -> Decimal:
    f = as_decimal(fee)
    if f >= 1:
        raise InvalidAmount(f"fee must be in [0, 1), got {f}")
    return f


def check_route(route: Route) -> None:
    """Reject a route containing a pool with a zero reserve (before any arithmetic)."""
    for i, pool in enumerate(route.pools):
        if not pool.is_tradable():
            raise IlliquidRoute(i, pool)


# ---------------------------------------------------------------------------
# Single-pool math
# ---------------------------------------------------------------------------

def swap_out_given_in(pool: LiquidityPool, amount_in: DecimalLike, fee: DecimalLike = DEFAULT_POOL_FEE) -> Decimal:
    """Constant-product OUT for a given IN on one pool (truncated toward zero)."""
    if not pool.is_tradable():
        raise IlliquidRoute(0, pool)
    dx = as_decimal(amount_in)
    f = _check_fee(fee)
    if dx == 0:
        return Decimal(0)
    dx_eff = _CTX.multiply(dx, _CTX.subtract(Decimal(1), f))
    num = _CTX.multiply(dx_eff, pool.reserve_out)
    den = _CTX.add(pool.reserve_in, dx_eff)
    return _CTX.divide(num, den)


def small_trade_price(pool: LiquidityPool, fee: DecimalLike = DEFAULT_POOL_FEE) -> Decimal:
    """Marginal OUT/IN at zero size: (R_out / R_in) * (1 - fee). Upper bound for any fill."""
    if not pool.is_tradable():
        raise IlliquidRoute(0, pool)
    f = _check_fee(fee)
    return _CTX.multiply(_CTX.divide(pool.reserve_out, pool.reserve_in), _CTX.subtract(Decimal(1), f))


# ---------------------------------------------------------------------------
# Route quoting
# ---------------------------------------------------------------------------

def hop_outputs(route: Route, input_amount: DecimalLike, fee: DecimalLike = DEFAULT_POOL_FEE) -> List[Decimal]:
    """Return the output of each hop in order; the last entry is the final output."""
    check_route(route)
    amount = as_decimal(input_amount)
    f = _check_fee(fee)
    outs: List[Decimal] = []
    for pool in route.pools:
        amount = swap_out_given_in(pool, amount, f)
        outs.append(amount)
    shown = ", ".join(to_significant(o, DEFAULT_SIGNIFICANT_DIGITS) for o in outs)
    _dbg(f"hops={route.hops} in={input_amount} outs=[{shown}]")
    return outs


def _check_direction(trade_direction: TradeDirection) -> None:
    if trade_direction is not TradeDirection.EXACT_INPUT:
        raise ValueError(f"unsupported trade direction: {trade_direction!r}")


def quote(
    route: Route,
    input_amount: DecimalLike,
    trade_direction: TradeDirection = TradeDirection.EXACT_INPUT,
    *,
    fee: DecimalLike = DEFAULT_POOL_FEE,
    significant_digits: Optional[int] = None,
) -> Decimal:
    """Final output of routing `input_amount` through `route` (exact input).

    With `significant_digits`, the result is truncated (never rounded up).
    """
    _check_direction(trade_direction)
    out = hop_outputs(route, input_amount, fee)[-1]
    if significant_digits is not None:
        out = truncate_significant(out, significant_digits)
    return out


def execution_price(
    route: Route,
    input_amount: DecimalLike,
    side: PriceSide = PriceSide.OUTPUT_PER_INPUT,
    trade_direction: TradeDirection = TradeDirection.EXACT_INPUT,
    *,
    fee: DecimalLike = DEFAULT_POOL_FEE,
    significant_digits: Optional[int] = None,
) -> Decimal:
    """Average execution price of an exact-input trade, in the requested denomination.

    Both sides are derived from the exact (untruncated) final output; truncation
    is applied last, to the requested side only.
    """
    _check_direction(trade_direction)
    dx = as_decimal(input_amount)
    if dx == 0:
        raise InvalidAmount("input amount must be > 0 to derive an execution price")
    out = hop_outputs(route, dx, fee)[-1]
    if out == 0:
        raise IlliquidRoute(route.hops - 1, route.pools[-1])
    if side is PriceSide.OUTPUT_PER_INPUT:
        price = _CTX.divide(out, dx)
    elif side is PriceSide.INPUT_PER_OUTPUT:
        price = _CTX.divide(dx, out)
    else:
        raise ValueError(f"unsupported price side: {side!r}")
    if significant_digits is not None:
        price = truncate_significant(price, significant_digits)
    return price


def quote_with_config(route: Route, config: QuoteConfig, side: PriceSide = PriceSide.OUTPUT_PER_INPUT) -> Decimal:
    """`execution_price` driven by a QuoteConfig (used by the query facade)."""
    return execution_price(
        route,
        config.amount_in,
        side,
        fee=config.fee,
        significant_digits=config.significant_digits,
    )


__all__ = [
    "QuoteConfig",
    "fee_from_bps",
    "check_route",
    "swap_out_given_in",
    "small_trade_price",
    "hop_outputs",
    "quote",
    "execution_price",
    "quote_with_config",
]
