"""Unit tests for the geocoding cache layer against an in-memory SQLite database."""

from unittest.mock import AsyncMock, MagicMock

from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from event_logistics.lib.geocoder.cache import cache_lookup, cache_upsert
from event_logistics.models.geocoding_cache import GeocodingCache


class TestCacheLookup:
    """Tests for cache_lookup()."""

    async def test_miss_returns_none(self, async_session) -> None:
        assert await cache_lookup(async_session, "221B Baker Street") is None

    async def test_hit_after_upsert(self, async_session) -> None:
        assert await cache_upsert(async_session, "221B Baker Street", (51.5237, -0.1585)) is True
        assert await cache_lookup(async_session, "221B Baker Street") == (51.5237, -0.1585)

    async def test_exact_match_only(self, async_session) -> None:
        await cache_upsert(async_session, "221B Baker Street", (51.5, -0.1))
        assert await cache_lookup(async_session, "221b baker street") is None
        assert await cache_lookup(async_session, " 221B Baker Street") is None
        assert await cache_lookup(async_session, "221B Baker Street ") is None

    async def test_zero_coordinates_are_a_hit(self, async_session) -> None:
        await cache_upsert(async_session, "Null Island", (0.0, 0.0))
        assert await cache_lookup(async_session, "Null Island") == (0.0, 0.0)

    async def test_database_fault_degrades_to_miss(self) -> None:
        session = MagicMock()
        session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("db down")))
        session.rollback = AsyncMock()

        assert await cache_lookup(session, "221B Baker Street") is None
        session.rollback.assert_awaited_once()

    async def test_unreachable_server_degrades_to_miss(self) -> None:
        session = MagicMock()
        session.execute = AsyncMock(side_effect=ConnectionRefusedError(111, "Connect call failed"))
        session.rollback = AsyncMock(side_effect=ConnectionRefusedError(111, "Connect call failed"))

        assert await cache_lookup(session, "221B Baker Street") is None

    async def test_read_leaves_no_open_transaction(self, async_session) -> None:
        await cache_upsert(async_session, "Colosseum", (41.89, 12.49))

        assert await cache_lookup(async_session, "Piazza Navona") is None
        assert not async_session.in_transaction()
        assert await cache_lookup(async_session, "Colosseum") == (41.89, 12.49)
        assert not async_session.in_transaction()


class TestCacheUpsert:
    """Tests for cache_upsert()."""

    async def test_update_existing_key(self, async_session) -> None:
        await cache_upsert(async_session, "osm:way:12345", (1.0, 2.0))
        await cache_upsert(async_session, "osm:way:12345", (3.0, 4.0))

        assert await cache_lookup(async_session, "osm:way:12345") == (3.0, 4.0)
        count = await async_session.scalar(
            select(func.count()).select_from(GeocodingCache).where(GeocodingCache.address == "osm:way:12345")
        )
        assert count == 1

    async def test_sets_updated_at(self, async_session) -> None:
        await cache_upsert(async_session, "Colosseum", (41.89, 12.49))
        row = await async_session.scalar(select(GeocodingCache).where(GeocodingCache.address == "Colosseum"))
        assert row is not None
        assert row.updated_at is not None
        assert row.created_at is not None

    async def test_same_location_under_different_keys_is_not_deduplicated(self, async_session) -> None:
        for key in ("221B Baker Street", "osm:way:12345", "221B, Baker Street, London"):
            await cache_upsert(async_session, key, (51.5237, -0.1585))

        count = await async_session.scalar(select(func.count()).select_from(GeocodingCache))
        assert count == 3

    async def test_write_fault_returns_false(self) -> None:
        session = MagicMock()
        session.bind.dialect.name = "postgresql"
        session.execute = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("db down")))
        session.commit = AsyncMock()
        session.rollback = AsyncMock()

        assert await cache_upsert(session, "221B Baker Street", (51.5, -0.1)) is False
        session.commit.assert_not_awaited()
        session.rollback.assert_awaited_once()

    async def test_unreachable_server_returns_false(self) -> None:
        session = MagicMock()
        session.bind.dialect.name = "postgresql"
        session.execute = AsyncMock(side_effect=ConnectionRefusedError(111, "Connect call failed"))
        session.commit = AsyncMock()
        session.rollback = AsyncMock()

        assert await cache_upsert(session, "221B Baker Street", (51.5, -0.1)) is False
        session.commit.assert_not_awaited()

    async def test_unsupported_dialect_returns_false(self) -> None:
        session = MagicMock()
        session.bind.dialect.name = "mssql"
        session.execute = AsyncMock()

        assert await cache_upsert(session, "221B Baker Street", (51.5, -0.1)) is False
        session.execute.assert_not_awaited()
