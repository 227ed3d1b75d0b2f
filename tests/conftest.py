"""Shared test fixtures for settings, async database sessions, and lookup payloads."""

from collections.abc import AsyncGenerator
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from event_logistics.core.config import Settings
from event_logistics.models.base import Base


@pytest.fixture
def settings() -> Settings:
    """Test application settings."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        geocoder_nominatim_base_url="http://nominatim.test",
        _env_file=None,  # type: ignore[call-arg]
    )


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory async SQLite engine with the cache table."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the in-memory engine."""
    return async_sessionmaker(async_engine, expire_on_commit=False)


@pytest.fixture
async def async_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    """Create a per-test async session."""
    async with session_factory() as session:
        yield session


def _nominatim_item(**overrides: Any) -> dict[str, Any]:
    """A Nominatim search result object for 221B Baker Street."""
    item: dict[str, Any] = {
        "place_id": 98765,
        "licence": "Data © OpenStreetMap contributors, ODbL 1.0.",
        "osm_type": "way",
        "osm_id": 12345,
        "lat": "51.5237",
        "lon": "-0.1585",
        "class": "building",
        "type": "house",
        "display_name": "221B, Baker Street, London",
        "address": {
            "house_number": "221B",
            "road": "Baker Street",
            "suburb": "Marylebone",
            "city": "London",
            "postcode": "NW1 6XE",
            "country": "United Kingdom",
            "country_code": "gb",
        },
        "boundingbox": ["51.5236", "51.5238", "-0.1586", "-0.1584"],
    }
    item.update(overrides)
    return item


@pytest.fixture
def nominatim_item():
    """Factory for Nominatim result objects; keyword arguments override fields."""
    return _nominatim_item
