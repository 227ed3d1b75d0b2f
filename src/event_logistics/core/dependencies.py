"""FastAPI dependency injection for database sessions and the lookup client."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from event_logistics.core.config import Settings, get_settings
from event_logistics.core.database import get_session_factory
from event_logistics.lib.geocoder import BaseLookupClient, get_lookup_client


async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Yield an async database session with per-request lifecycle."""
    factory = get_session_factory()
    async with factory() as session:
        yield session


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Return the session factory, for handlers that open one session per concurrent task."""
    return get_session_factory()


def get_geocoding_client(
    settings: Annotated[Settings, Depends(get_settings)],
) -> BaseLookupClient:
    """Build the lookup client from application settings."""
    return get_lookup_client(settings)
