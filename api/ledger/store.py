"""
Ledger store contract.

The ledger is insert-only: the contract has no update or delete operations,
so there is nothing to guard at runtime.
"""

from __future__ import annotations

import abc
from datetime import datetime

from .models import PurchaseDraft, PurchaseRecord


class LedgerStore(abc.ABC):
    @abc.abstractmethod
    async def append(self, draft: PurchaseDraft) -> PurchaseRecord:
        """
        Persist one purchase atomically and return it with `id` and
        `recorded_at` assigned by the store.

        Raises StorageError when the medium is unreachable or unwritable.
        """

    @abc.abstractmethod
    async def query_all(self, since: datetime | None = None) -> list[PurchaseRecord]:
        """
        Return every record, or only those with `recorded_at >= since`.
        Order is unspecified.
        """

    @abc.abstractmethod
    async def query_recent(self, limit: int) -> list[PurchaseRecord]:
        """
        Return at most `limit` records, newest first.
        """

    async def query_by_time_window(self, since: datetime) -> list[PurchaseRecord]:
        return await self.query_all(since=since)

    async def close(self) -> None:
        return None
