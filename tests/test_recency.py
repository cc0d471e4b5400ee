"""
Personal Logger — Recency Query Tests
======================================

What:  Tests for list_recent ordering and limit handling, plus the pure
       helpers in services/recency.py.

What we test:
    ✅ Newest first; equal timestamps → higher id first
    ✅ Timestamp order wins over id order when the clock moved backwards
    ✅ Exactly min(limit, stored) results
    ✅ Missing / non-positive / non-integer limits fall back to the default
    ✅ Empty store → empty list
"""

from datetime import datetime, timedelta, timezone

import pytest

from personal_logger.schemas.entry import EntryCreate, EntryType
from personal_logger.services.recency import normalize_limit, recent_entries_query
from personal_logger.services.storage_engine import StorageEngine
from tests.conftest import START, FakeClock


async def _append_many(storage, count, entry_type="note"):
    return [
        await storage.append(EntryCreate(type=entry_type, content=f"entry {i}"))
        for i in range(count)
    ]


class TestListRecent:
    """Tests for StorageEngine.list_recent against a real store."""

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, storage):
        assert await storage.list_recent(10) == []

    @pytest.mark.asyncio
    async def test_limit_two_of_three(self, storage):
        for entry_type in ("issue", "task", "note"):
            await storage.append(EntryCreate(type=entry_type, content=f"a {entry_type}"))

        recent = await storage.list_recent(2)

        assert [e.type for e in recent] == [EntryType.NOTE, EntryType.TASK]

    @pytest.mark.asyncio
    async def test_returns_all_when_fewer_than_limit(self, storage):
        await _append_many(storage, 3)

        assert len(await storage.list_recent(100)) == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [None, 0, -1, -50])
    async def test_unusable_limit_uses_default(self, storage, limit):
        await _append_many(storage, 12)

        recent = await storage.list_recent(limit)

        assert len(recent) == 10
        assert recent[0].content == "entry 11"

    @pytest.mark.asyncio
    async def test_default_limit_is_configurable(self, database_url, clock):
        engine = StorageEngine(database_url, clock=clock, default_limit=3)
        await engine.initialize()
        try:
            await _append_many(engine, 5)
            assert len(await engine.list_recent()) == 3
        finally:
            await engine.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("default_limit", [-1, 0])
    async def test_unusable_configured_default_never_returns_all(self, database_url, clock, default_limit):
        engine = StorageEngine(database_url, clock=clock, default_limit=default_limit)
        await engine.initialize()
        try:
            await _append_many(engine, 25)
            assert engine.default_limit == 10
            assert len(await engine.list_recent()) == 10
        finally:
            await engine.close()

    @pytest.mark.asyncio
    async def test_order_is_non_increasing_by_timestamp(self, storage):
        await _append_many(storage, 6)

        timestamps = [e.timestamp for e in await storage.list_recent(6)]

        assert timestamps == sorted(timestamps, reverse=True)

    @pytest.mark.asyncio
    async def test_equal_timestamps_break_ties_by_id(self, database_url):
        frozen = FakeClock(START, step=timedelta(0))
        engine = StorageEngine(database_url, clock=frozen)
        await engine.initialize()
        try:
            saved = await _append_many(engine, 4)
            recent = await engine.list_recent(4)

            assert len({e.timestamp for e in recent}) == 1
            assert [e.id for e in recent] == [e.id for e in reversed(saved)]
        finally:
            await engine.close()

    @pytest.mark.asyncio
    async def test_clock_moving_backwards_orders_by_timestamp(self, database_url):
        readings = iter([
            datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc),
            datetime(2026, 10, 18, 8, 0, tzinfo=timezone.utc),
        ])
        engine = StorageEngine(database_url, clock=lambda: next(readings))
        await engine.initialize()
        try:
            later = await engine.append(EntryCreate(type="issue", content="saved first"))
            earlier = await engine.append(EntryCreate(type="issue", content="saved second"))

            recent = await engine.list_recent()

            assert earlier.id > later.id
            assert recent == [later, earlier]
        finally:
            await engine.close()


class TestNormalizeLimit:
    """Tests for the limit policy helper."""

    def test_positive_integer_kept(self):
        assert normalize_limit(5, default=10) == 5
        assert normalize_limit(1, default=10) == 1

    @pytest.mark.parametrize("limit", [None, 0, -1, True, False, "5", 2.5])
    def test_unusable_values_fall_back(self, limit):
        assert normalize_limit(limit, default=10) == 10

    def test_settings_default_used_without_explicit_default(self):
        assert normalize_limit(None) == 10


class TestRecentEntriesQuery:
    """The generated SQL walks timestamp then id, newest first."""

    def test_order_and_limit(self):
        sql = str(recent_entries_query(3).compile(compile_kwargs={"literal_binds": True}))

        assert "ORDER BY entries.timestamp DESC, entries.id DESC" in sql
        assert "LIMIT 3" in sql
