"""
Tests for the Postgres ledger store, with the database handle faked out.
"""

import asyncio
from datetime import datetime, timezone

import pytest

from core.errors import StorageError
from ledger.models import Network, build_draft
from ledger.repository import PostgresLedgerStore

CREATED = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


class FakeDatabase:
    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []
        self.closed = False

    async def fetch_one(self, sql, *args):
        self.calls.append((sql, args))
        if self.error:
            raise self.error
        return self.rows[0] if self.rows else None

    async def fetch_all(self, sql, *args):
        self.calls.append((sql, args))
        if self.error:
            raise self.error
        return list(self.rows)

    async def close(self):
        self.closed = True


def _row(**overrides):
    row = {
        "id": 7,
        "address": "0xabc",
        "tokens": 12.0,
        "usd": 3.0,
        "network": "bsc",
        "created_at": CREATED,
    }
    row.update(overrides)
    return row


def test_append_inserts_normalized_values():
    db = FakeDatabase(rows=[_row()])
    store = PostgresLedgerStore(db)

    record = asyncio.run(store.append(build_draft(address=" 0xABC", tokens=12, usd=3, network="bsc")))

    sql, args = db.calls[0]
    assert "INSERT INTO purchases" in sql
    assert args == ("0xabc", 12.0, 3.0, "bsc")
    assert record.id == 7
    assert record.network is Network.BSC
    assert record.recorded_at == CREATED


def test_append_without_returned_row_fails():
    store = PostgresLedgerStore(FakeDatabase(rows=[]))

    with pytest.raises(StorageError):
        asyncio.run(store.append(build_draft(address="0xa", tokens=1, usd=1)))


def test_query_all_with_window_passes_since():
    db = FakeDatabase(rows=[_row(), _row(id=8, address="0xdef")])
    store = PostgresLedgerStore(db)

    records = asyncio.run(store.query_by_time_window(CREATED))

    sql, args = db.calls[0]
    assert "created_at >= $1" in sql
    assert args == (CREATED,)
    assert [r.address for r in records] == ["0xabc", "0xdef"]


def test_query_recent_orders_newest_first():
    db = FakeDatabase(rows=[_row()])
    store = PostgresLedgerStore(db)

    asyncio.run(store.query_recent(5))

    sql, args = db.calls[0]
    assert "ORDER BY created_at DESC, id DESC" in sql
    assert args == (5,)


def test_query_recent_zero_skips_database():
    db = FakeDatabase()
    assert asyncio.run(PostgresLedgerStore(db).query_recent(0)) == []
    assert db.calls == []


@pytest.mark.parametrize(
    "method,args",
    [
        ("query_all", ()),
        ("query_recent", (10,)),
        ("append", (build_draft(address="0xa", tokens=1, usd=1),)),
    ],
)
def test_connection_failures_become_storage_errors(method, args):
    store = PostgresLedgerStore(FakeDatabase(error=ConnectionRefusedError("refused")))

    with pytest.raises(StorageError) as excinfo:
        asyncio.run(getattr(store, method)(*args))

    assert isinstance(excinfo.value.__cause__, ConnectionRefusedError)


def test_close_closes_database():
    db = FakeDatabase()
    asyncio.run(PostgresLedgerStore(db).close())
    assert db.closed
