"""
Process-local ledger store.

Used for local development (`LEDGER_BACKEND=memory`) and tests. Appends are
serialized by an asyncio lock; reads work on a copy of the list.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Callable

from .models import PurchaseDraft, PurchaseRecord
from .store import LedgerStore


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MemoryLedgerStore(LedgerStore):
    def __init__(self, *, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._records: list[PurchaseRecord] = []
        self._lock = asyncio.Lock()

    async def append(self, draft: PurchaseDraft) -> PurchaseRecord:
        async with self._lock:
            recorded_at = self._clock()
            # Keep timestamps non-decreasing even if the wall clock steps back.
            if self._records and recorded_at < self._records[-1].recorded_at:
                recorded_at = self._records[-1].recorded_at
            record = PurchaseRecord(
                id=len(self._records) + 1,
                address=draft.address,
                tokens=draft.tokens,
                usd_amount=draft.usd_amount,
                network=draft.network,
                recorded_at=recorded_at,
            )
            self._records.append(record)
            return record

    async def query_all(self, since: datetime | None = None) -> list[PurchaseRecord]:
        records = list(self._records)
        if since is None:
            return records
        return [r for r in records if r.recorded_at >= since]

    async def query_recent(self, limit: int) -> list[PurchaseRecord]:
        if limit <= 0:
            return []
        records = list(self._records)
        return records[::-1][:limit]
