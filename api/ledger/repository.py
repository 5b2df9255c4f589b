"""
Ledger persistence (raw SQL over asyncpg).

Table `purchases` comes from the dbmate migration in `db/migrations/`.
Rows are only ever inserted; `created_at` is assigned by Postgres.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import asyncpg

from core.db import Database
from core.errors import StorageError

from .models import Network, PurchaseDraft, PurchaseRecord
from .store import LedgerStore

_COLUMNS = "id, address, tokens, usd, network, created_at"

# Failures that mean the database itself is unusable for this request.
_STORAGE_FAILURES = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


def _row_to_record(row: dict[str, Any]) -> PurchaseRecord:
    return PurchaseRecord(
        id=int(row["id"]),
        address=str(row["address"]),
        tokens=float(row["tokens"]),
        usd_amount=float(row["usd"]),
        network=Network(str(row["network"])),
        recorded_at=row["created_at"],
    )


class PostgresLedgerStore(LedgerStore):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def append(self, draft: PurchaseDraft) -> PurchaseRecord:
        try:
            row = await self._db.fetch_one(
                f"""
                INSERT INTO purchases (address, tokens, usd, network)
                VALUES ($1, $2, $3, $4)
                RETURNING {_COLUMNS}
                """,
                draft.address,
                draft.tokens,
                draft.usd_amount,
                draft.network.value,
            )
        except _STORAGE_FAILURES as exc:
            raise StorageError("Failed to insert purchase.") from exc
        if row is None:
            raise StorageError("Failed to insert purchase.")
        return _row_to_record(row)

    async def query_all(self, since: datetime | None = None) -> list[PurchaseRecord]:
        try:
            if since is None:
                rows = await self._db.fetch_all(f"SELECT {_COLUMNS} FROM purchases")
            else:
                rows = await self._db.fetch_all(
                    f"""
                    SELECT {_COLUMNS}
                    FROM purchases
                    WHERE created_at >= $1
                    """,
                    since,
                )
        except _STORAGE_FAILURES as exc:
            raise StorageError("Failed to query purchases.") from exc
        return [_row_to_record(r) for r in rows]

    async def query_recent(self, limit: int) -> list[PurchaseRecord]:
        if limit <= 0:
            return []
        try:
            rows = await self._db.fetch_all(
                f"""
                SELECT {_COLUMNS}
                FROM purchases
                ORDER BY created_at DESC, id DESC
                LIMIT $1
                """,
                limit,
            )
        except _STORAGE_FAILURES as exc:
            raise StorageError("Failed to query recent purchases.") from exc
        return [_row_to_record(r) for r in rows]

    async def close(self) -> None:
        await self._db.close()
