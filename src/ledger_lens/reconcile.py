"""Layer reconciliation: merge legacy and current bid records into one history.

Policy (current generation wins):
  - A legacy record survives only if no current record carries the same
    auction id. Presence on the current generation means the position was
    migrated forward, and the current record is canonical for withdrawal state
    and auto-stake metadata.
  - Matching is by auction id alone. Two genuinely distinct participations that
    share an id across generations still collapse to the current one.
  - Output order is surviving legacy records (input order) followed by every
    current record (input order). No global sort is applied.
  - Amounts are not interpreted: a zero legacy deposit passes through.
"""
from __future__ import annotations

import logging
from typing import Iterable, List

from .core import CombinedHistory, CurrentBid, LegacyBid

logger = logging.getLogger(__name__)


def _dbg(msg: str, *args) -> None:
    logger.debug("[reconcile] " + msg, *args)


def _expect(records: Iterable, kind: type, label: str) -> List:
    out = list(records)
    for r in out:
        if not isinstance(r, kind):
            raise TypeError(f"{label} records must be {kind.__name__}, got {type(r).__name__}")
    return out


def reconcile(legacy_records: Iterable[LegacyBid], current_records: Iterable[CurrentBid]) -> CombinedHistory:
    """Merge both generations into a CombinedHistory (pure; no hidden state)."""
    legacy = _expect(legacy_records, LegacyBid, "legacy")
    current = _expect(current_records, CurrentBid, "current")

    current_ids = {r.auction_id for r in current}
    kept = [r for r in legacy if r.auction_id not in current_ids]

    if len(kept) != len(legacy):
        dropped = sorted({r.auction_id for r in legacy if r.auction_id in current_ids})
        _dbg("superseded legacy auction ids %s", dropped)
    _dbg("legacy=%d kept=%d current=%d", len(legacy), len(kept), len(current))

    return CombinedHistory(tuple(kept) + tuple(current))


__all__ = ["reconcile"]
