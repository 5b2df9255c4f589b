"""
Aggregate read models.

Each call fetches from the store handle it is given and recomputes the view,
so results always include the latest appended purchase.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from ledger.store import LedgerStore

from . import aggregation
from .schemas import LeaderboardRange

DAILY_WINDOW = timedelta(hours=24)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


async def balances(store: LedgerStore) -> dict[str, float]:
    records = await store.query_all()
    return aggregation.compute_balances(records)


async def leaderboard(
    store: LedgerStore,
    range_: LeaderboardRange = LeaderboardRange.ALL,
    *,
    now: datetime | None = None,
) -> list[dict]:
    if range_ is LeaderboardRange.DAILY:
        since = (now or _utc_now()) - DAILY_WINDOW
        records = await store.query_by_time_window(since)
    else:
        records = await store.query_all()
    return aggregation.compute_leaderboard(records)


async def stats(store: LedgerStore) -> dict[str, float | int]:
    records = await store.query_all()
    return aggregation.compute_stats(records)
