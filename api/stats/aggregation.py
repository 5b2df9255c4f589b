"""
Aggregation over ledger records.

Pure functions: each takes the records a read fetched from the store and
derives one view. Nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Iterable

from ledger.models import PurchaseRecord

LEADERBOARD_SIZE = 10
DEFAULT_RECENT_LIMIT = 200
MAX_RECENT_LIMIT = 1000


def _token_totals(records: Iterable[PurchaseRecord]) -> dict[str, float]:
    totals: dict[str, float] = {}
    for record in records:
        totals[record.address] = totals.get(record.address, 0.0) + record.tokens
    return totals


def compute_balances(records: Iterable[PurchaseRecord]) -> dict[str, float]:
    """
    Total tokens per address. Addresses whose total is zero are left out.
    """
    return {address: total for address, total in _token_totals(records).items() if total != 0}


def compute_leaderboard(
    records: Iterable[PurchaseRecord],
    *,
    limit: int = LEADERBOARD_SIZE,
) -> list[dict[str, float | str]]:
    """
    Top addresses by total tokens, highest first.

    Equal totals are ordered by address so the result is deterministic.
    """
    ranked = sorted(compute_balances(records).items(), key=lambda item: (-item[1], item[0]))
    return [{"address": address, "tokens": tokens} for address, tokens in ranked[:limit]]


def clamp_recent_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_RECENT_LIMIT
    return max(0, min(int(limit), MAX_RECENT_LIMIT))


def list_recent(records: Iterable[PurchaseRecord], limit: int | None = None) -> list[PurchaseRecord]:
    ordered = sorted(records, key=lambda r: (r.recorded_at, r.id), reverse=True)
    return ordered[: clamp_recent_limit(limit)]


def compute_stats(records: Iterable[PurchaseRecord]) -> dict[str, float | int]:
    """
    Totals across the whole ledger. An empty ledger yields all zeros.
    """
    raised = 0.0
    tokens = 0.0
    buyers: set[str] = set()
    for record in records:
        raised += record.usd_amount
        tokens += record.tokens
        buyers.add(record.address)
    return {"raised": raised, "tokens": tokens, "buyers": len(buyers)}
