"""Read collaborators: the transport boundary the query facade talks to.

The facade only needs three operations per contract (`invoke`, `query_logs`,
`subscribe`) and one per chain (`block_number`). They are expressed as
`typing.Protocol`s so tests can pass in-memory fakes; the web3.py adapters
below are the production implementations.

Transient-failure handling (retries, timeouts, provider failover) belongs to
the web3 provider, not to this module.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Protocol, Sequence, Union, runtime_checkable

from .core import LATEST

logger = logging.getLogger(__name__)

BlockRef = Union[int, str]

#: Seconds between filter polls for live subscriptions.
DEFAULT_POLL_INTERVAL: float = 2.0


@runtime_checkable
class ContractReader(Protocol):
    """Read-only access to one deployed contract."""

    async def invoke(self, method: str, args: Sequence[Any] = ()) -> Any:
        ...

    async def query_logs(self, event: str, from_block: BlockRef, to_block: BlockRef = LATEST) -> List[Any]:
        ...

    def subscribe(self, event: str) -> AsyncIterator[Any]:
        ...


@runtime_checkable
class ChainReader(Protocol):
    """Chain-level reads that are not bound to a contract."""

    async def block_number(self) -> int:
        ...


class Web3ContractReader:
    """ContractReader over a web3.py `AsyncContract`.

    Usage:
        w3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(url))
        auction = Web3ContractReader.from_abi(w3, AUCTION_ADDRESS, AUCTION_ABI)
        raw = await auction.invoke("reservesOf", [42])
    """

    def __init__(self, contract: Any, *, poll_interval: float = DEFAULT_POLL_INTERVAL):
        self.contract = contract
        self.poll_interval = poll_interval

    @classmethod
    def from_abi(cls, w3: Any, address: str, abi: Sequence[dict], **kwargs) -> "Web3ContractReader":
        from web3 import AsyncWeb3

        contract = w3.eth.contract(address=AsyncWeb3.to_checksum_address(address), abi=abi)
        return cls(contract, **kwargs)

    @property
    def address(self) -> str:
        return self.contract.address

    async def invoke(self, method: str, args: Sequence[Any] = ()) -> Any:
        fn = getattr(self.contract.functions, method)
        return await fn(*args).call()

    async def query_logs(self, event: str, from_block: BlockRef, to_block: BlockRef = LATEST) -> List[Any]:
        ev = getattr(self.contract.events, event)
        return list(await ev.get_logs(from_block=from_block, to_block=to_block))

    async def subscribe(self, event: str) -> AsyncIterator[Any]:
        """Yield new `event` logs as the node reports them, in arrival order."""
        ev = getattr(self.contract.events, event)
        log_filter = await ev.create_filter(from_block=LATEST)
        logger.debug("subscribed to %s on %s", event, self.contract.address)
        try:
            while True:
                for entry in await log_filter.get_new_entries():
                    yield entry
                await asyncio.sleep(self.poll_interval)
        finally:
            await self.contract.w3.eth.uninstall_filter(log_filter.filter_id)
            logger.debug("unsubscribed from %s on %s", event, self.contract.address)


class MemoryContractReader:
    """ContractReader answering from in-memory tables, for offline replay and demos.

    - results: method -> value, or (method, *args) -> value for per-argument answers.
    - logs: event -> list of log records returned by `query_logs`.
    - stream: event -> list of records yielded by `subscribe`.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(
        self,
        results: Optional[Dict[Any, Any]] = None,
        logs: Optional[Dict[str, Any]] = None,
        stream: Optional[Dict[str, List[Any]]] = None,
    ):
        self.results = dict(results or {})
        self.logs = dict(logs or {})
        self.stream = dict(stream or {})

    async def invoke(self, method: str, args: Sequence[Any] = ()) -> Any:
        key = (method, *args)
        value = self.results[key] if key in self.results else self.results[method]
        if isinstance(value, BaseException):
            raise value
        return value

    async def query_logs(self, event: str, from_block: BlockRef, to_block: BlockRef = LATEST) -> List[Any]:
        value = self.logs.get(event, [])
        if isinstance(value, BaseException):
            raise value
        return list(value)

    async def subscribe(self, event: str) -> AsyncIterator[Any]:
        for rec in self.stream.get(event, []):
            yield rec


class Web3ChainReader:
    """ChainReader over an `AsyncWeb3` instance."""

    def __init__(self, w3: Any):
        self.w3 = w3

    async def block_number(self) -> int:
        return await self.w3.eth.block_number


__all__ = [
    "BlockRef",
    "DEFAULT_POLL_INTERVAL",
    "ContractReader",
    "ChainReader",
    "Web3ContractReader",
    "Web3ChainReader",
    "MemoryContractReader",
]
