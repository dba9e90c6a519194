"""
Core exception types for ledger_lens.

These are dependency-free and may be imported by all modules. Every error the
library raises on its own account derives from `LedgerError`.
"""

__all__ = [
    "LedgerError",
    "MissingParameter",
    "InvalidBlockRange",
    "InvalidAmount",
    "IlliquidRoute",
    "UpstreamReadFailure",
]


class LedgerError(Exception):
    """Base class for ledger_lens errors."""
    pass


class MissingParameter(LedgerError):
    """Raised before any read when a required identifier or range bound is absent."""

    def __init__(self, name: str, detail: str = ""):
        msg = f"Missing parameter: you must provide {name}"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)
        self.name = name


class InvalidBlockRange(MissingParameter):
    """Raised when a log range bound is unusable (negative, non-integer, start > end)."""

    def __init__(self, start, end, detail: str = ""):
        super().__init__("a valid block range", detail or f"start={start!r}, end={end!r}")
        self.start = start
        self.end = end


class InvalidAmount(LedgerError):
    """Raised when a raw or decimal value falls outside the non-negative domain."""
    pass


class IlliquidRoute(LedgerError):
    """Raised when a pool in a route has a zero reserve.

    Attributes
    ----------
    hop : int
        Zero-based index of the first offending pool in the route.
    pool : Any
        The offending pool, for context.
    """

    def __init__(self, hop: int, pool):
        super().__init__(f"Route is not tradable: pool at hop {hop} has a zero reserve ({pool})")
        self.hop = hop
        self.pool = pool


class UpstreamReadFailure(LedgerError):
    """Raised when an external read collaborator fails.

    The original exception is kept as `cause` and chained via `raise ... from`.
    """

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"Upstream read failed for {operation}: {cause!r}")
        self.operation = operation
        self.cause = cause
