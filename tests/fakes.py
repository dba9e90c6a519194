"""In-memory collaborators shared by the test suite."""
from __future__ import annotations
from typing import Any, List, Sequence, Tuple

from ledger_lens.core import Asset
from ledger_lens.path_builder import make_pair
from ledger_lens.readers import MemoryContractReader


# -----------------------------
# Test helpers (fakes)
# -----------------------------


class FakeReader(MemoryContractReader):
    """MemoryContractReader that also records every call in `calls`."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    async def invoke(self, method: str, args: Sequence[Any] = ()) -> Any:
        self.calls.append((method, tuple(args)))
        return await super().invoke(method, args)

    async def query_logs(self, event: str, from_block, to_block="latest") -> List[Any]:
        self.calls.append((event, (from_block, to_block)))
        return await super().query_logs(event, from_block, to_block)

    async def subscribe(self, event: str):
        self.calls.append((event, ()))
        async for rec in super().subscribe(event):
            yield rec


class FakeChain:
    def __init__(self, height: int | BaseException) -> None:
        self.height = height

    async def block_number(self) -> int:
        if isinstance(self.height, BaseException):
            raise self.height
        return self.height


PRIMARY = Asset("PRIM", "0x7D85e23014F84E6E21d5663aCD8751bEF3562352", 18)
ACCOUNT = "0x00000000000000000000000000000000000000aa"
ZERO = "0x" + "0" * 40


def pair_reader(asset_a: Asset, asset_b: Asset, raw_a: int, raw_b: int) -> FakeReader:
    """Pair contract answering getReserves() in token0/token1 order."""
    p = make_pair(asset_a, asset_b, raw_a, raw_b)
    return FakeReader({"getReserves": (p.reserve0, p.reserve1, 1_700_000_000)})
