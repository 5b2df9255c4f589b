"""
Tests for the in-process ledger store.
"""

import asyncio

from ledger.memory import MemoryLedgerStore
from ledger.models import build_draft


def _draft(address="0xa", tokens=1, usd=1):
    return build_draft(address=address, tokens=tokens, usd=usd)


class TestAppend:
    def test_assigns_id_and_timestamp(self, store, clock):
        record = asyncio.run(store.append(_draft(address="0xA", tokens=3, usd=2)))

        assert record.id == 1
        assert record.address == "0xa"
        assert record.recorded_at == clock.now

    def test_timestamps_never_go_backwards(self, store, clock):
        async def scenario():
            first = await store.append(_draft())
            clock.advance(seconds=-30)
            second = await store.append(_draft())
            return first, second

        first, second = asyncio.run(scenario())

        assert second.recorded_at >= first.recorded_at
        assert second.id > first.id

    def test_concurrent_appends_are_all_kept(self):
        store = MemoryLedgerStore()

        async def scenario():
            await asyncio.gather(*(store.append(_draft(tokens=i)) for i in range(50)))
            return await store.query_all()

        records = asyncio.run(scenario())

        assert len(records) == 50
        assert len({r.id for r in records}) == 50
        assert sorted(r.tokens for r in records) == [float(i) for i in range(50)]


class TestQueries:
    def test_time_window_is_inclusive(self, store, clock):
        async def scenario():
            await store.append(_draft(address="0xold"))
            cutoff = clock.advance(hours=1)
            await store.append(_draft(address="0xnew"))
            return await store.query_by_time_window(cutoff)

        records = asyncio.run(scenario())

        assert [r.address for r in records] == ["0xnew"]

    def test_recent_is_newest_first(self, store, clock):
        async def scenario():
            for address in ("0x1", "0x2", "0x3"):
                await store.append(_draft(address=address))
                clock.advance(seconds=1)
            return await store.query_recent(2)

        records = asyncio.run(scenario())

        assert [r.address for r in records] == ["0x3", "0x2"]

    def test_recent_with_non_positive_limit(self, store):
        asyncio.run(store.append(_draft()))
        assert asyncio.run(store.query_recent(0)) == []

    def test_query_returns_a_snapshot(self, store):
        async def scenario():
            await store.append(_draft())
            snapshot = await store.query_all()
            await store.append(_draft())
            return snapshot

        assert len(asyncio.run(scenario())) == 1
