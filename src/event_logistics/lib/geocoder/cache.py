"""Best-effort database cache for resolved coordinates.

Reads degrade to a miss and writes degrade to ``False`` on any database
fault.  Each write is its own transaction, so a failing key never rolls
back coordinates already stored under another key.
"""

from datetime import UTC, datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from event_logistics.lib.geocoder.base import Coordinates
from event_logistics.models.geocoding_cache import GeocodingCache

_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}

# asyncpg raises bare OSError subclasses (ConnectionRefusedError, socket.gaierror) at connect time
_CACHE_FAULTS = (SQLAlchemyError, OSError)


async def cache_lookup(session: AsyncSession, key: str) -> Coordinates | None:
    """Look up cached coordinates by exact key.

    Args:
        session: Database session.
        key: Address text or entity key, matched verbatim.

    The read transaction is ended before returning, so the session holds
    no connection while the caller waits on the lookup service.

    Returns:
        ``(latitude, longitude)`` on a hit; None on a miss or on any
        database fault, including an unreachable server.
    """
    try:
        result = await session.execute(
            select(GeocodingCache.latitude, GeocodingCache.longitude).where(GeocodingCache.address == key)
        )
        row = result.first()
    except _CACHE_FAULTS as e:
        logger.warning(f"Geocoding cache read failed, treating as miss: {e!r}")
        await _safe_rollback(session)
        return None
    await _safe_rollback(session)

    if row is None or row.latitude is None or row.longitude is None:
        return None
    return row.latitude, row.longitude


async def cache_upsert(session: AsyncSession, key: str, coordinates: Coordinates) -> bool:
    """Insert or update the coordinates stored under ``key``.

    A single ``INSERT ... ON CONFLICT (address) DO UPDATE`` statement, so
    concurrent writers of the same key resolve as last-writer-wins.

    Args:
        session: Database session.
        key: Address text or entity key.
        coordinates: ``(latitude, longitude)`` to store.

    Returns:
        True if the row was committed, False if the write failed.
    """
    latitude, longitude = coordinates
    now = datetime.now(UTC)
    dialect = session.bind.dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        logger.error(f"Geocoding cache upsert is not supported on dialect {dialect!r}")
        return False

    try:
        stmt = insert(GeocodingCache).values(
            address=key,
            latitude=latitude,
            longitude=longitude,
            updated_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[GeocodingCache.address],
            set_={
                "latitude": stmt.excluded.latitude,
                "longitude": stmt.excluded.longitude,
                "updated_at": stmt.excluded.updated_at,
            },
        )
        await session.execute(stmt)
        await session.commit()
    except _CACHE_FAULTS as e:
        logger.warning(f"Geocoding cache write failed for key {key!r}: {e!r}")
        await _safe_rollback(session)
        return False

    logger.debug(f"Cached coordinates for key {key!r}")
    return True


async def _safe_rollback(session: AsyncSession) -> None:
    """End the current transaction; a failed rollback leaves nothing more to undo."""
    try:
        await session.rollback()
    except _CACHE_FAULTS as e:
        logger.warning(f"Geocoding cache rollback failed: {e}")
