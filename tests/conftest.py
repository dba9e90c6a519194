from __future__ import annotations
from decimal import Decimal

import pytest

from ledger_lens.core import LiquidityPool, Route, WETH, USDT

from fakes import FakeReader, PRIMARY, pair_reader


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def pool_1000_2000() -> LiquidityPool:
    return LiquidityPool(Decimal("1000"), Decimal("2000"))


@pytest.fixture()
def single_hop_route(pool_1000_2000) -> Route:
    return Route((pool_1000_2000,))


@pytest.fixture()
def primary_eth_pair() -> FakeReader:
    # 50M PRIM / 400 ETH
    return pair_reader(PRIMARY, WETH, 50_000_000 * 10**18, 400 * 10**18)


@pytest.fixture()
def eth_usdt_pair() -> FakeReader:
    # 10k ETH / 25M USDT (scale 6)
    return pair_reader(WETH, USDT, 10_000 * 10**18, 25_000_000 * 10**6)
