"""Geocoding service — cache-first address resolution, suggestion caching, and cache statistics."""

from loguru import logger
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from event_logistics.lib.geocoder import (
    ENTITY_KEY_PREFIX,
    AddressSuggestion,
    BaseLookupClient,
    Coordinates,
    cache_lookup,
    cache_upsert,
    get_lookup_client,
    is_entity_key,
    suggestion_key,
)
from event_logistics.models.geocoding_cache import GeocodingCache
from event_logistics.schemas.geocoding import CacheStatsResponse


async def geocode_address(
    session: AsyncSession,
    address: str,
    *,
    client: BaseLookupClient | None = None,
) -> Coordinates | None:
    """Resolve an address or entity key to coordinates.

    The cache is checked first under the exact string given (no trimming or
    case folding).  On a miss the trimmed text is looked up with a single
    provider call, and the result is written back under the original text,
    the result's entity key, and the result's display name when it differs
    from the original.  Each write succeeds or fails on its own and never
    changes the return value.

    Args:
        session: Database session.
        address: Free-text address, venue name, or ``osm:<type>:<id>`` key.
        client: Lookup client; the default Nominatim client when None.

    Returns:
        ``(latitude, longitude)``, or None when the input is blank or no
        coordinates are available.  Callers must treat None as "skip this
        location", not as an error.
    """
    if not address or not address.strip():
        logger.debug("Empty address provided for geocoding")
        return None

    # Entity keys and raw text share one key column, so a single exact read covers both forms.
    cached = await cache_lookup(session, address)
    if cached is not None:
        kind = "entity key" if is_entity_key(address) else "exact match"
        logger.debug(f"Using cached coordinates for {kind} {address!r}")
        return cached

    query = address.strip()
    lookup = client or get_lookup_client()
    logger.info(f"Geocoding address {query!r} via {lookup.provider_name}")
    results = await lookup.search(query, limit=1)
    if not results:
        logger.warning(f"No geocoding results for address {query!r}")
        return None

    best = results[0]
    coordinates = best.coordinates
    if coordinates is None:
        logger.warning(f"Geocoding result for {query!r} has unusable coordinates: lat={best.lat!r} lon={best.lon!r}")
        return None

    keys = [address]
    osm_key = suggestion_key(best)
    if osm_key is not None:
        keys.append(osm_key)
    if best.display_name and best.display_name != address:
        keys.append(best.display_name)
    stored = [key for key in dict.fromkeys(keys) if await cache_upsert(session, key, coordinates)]

    logger.bind(
        json_output=True,
        provider=lookup.provider_name,
        query=query,
        latitude=coordinates[0],
        longitude=coordinates[1],
        cached_keys=stored,
    ).info("Geocoded address")
    return coordinates


async def cache_suggestion(session: AsyncSession, suggestion: AddressSuggestion) -> list[str]:
    """Cache the coordinates of a suggestion the user picked.

    Writes under the suggestion's entity key (when present) and under its
    exact display name.  Each write is independent.

    Args:
        session: Database session.
        suggestion: The chosen candidate.

    Returns:
        Keys written successfully; empty when the candidate's coordinates
        cannot be parsed or every write failed.
    """
    coordinates = suggestion.coordinates
    if coordinates is None:
        logger.warning(f"Not caching suggestion {suggestion.display_name!r}: unusable coordinates")
        return []

    keys = [k for k in (suggestion_key(suggestion), suggestion.display_name) if k]
    written: list[str] = []
    for key in dict.fromkeys(keys):
        if await cache_upsert(session, key, coordinates):
            written.append(key)

    logger.info(f"Cached selected address {suggestion.display_name!r} under {len(written)}/{len(keys)} key(s)")
    return written


async def get_cache_stats(session: AsyncSession) -> CacheStatsResponse:
    """Get geocoding cache statistics.

    Args:
        session: Database session.

    Returns:
        Row counts split by key form, plus the oldest and newest update time.
    """
    is_entity = GeocodingCache.address.startswith(ENTITY_KEY_PREFIX)
    result = await session.execute(
        select(
            func.count(GeocodingCache.id).label("total"),
            func.coalesce(func.sum(case((is_entity, 1), else_=0)), 0).label("entity"),
            func.min(GeocodingCache.updated_at).label("oldest"),
            func.max(GeocodingCache.updated_at).label("newest"),
        )
    )
    row = result.one()
    total = int(row.total or 0)
    entity = int(row.entity or 0)
    return CacheStatsResponse(
        total_entries=total,
        entity_key_entries=entity,
        text_key_entries=total - entity,
        oldest_update=row.oldest,
        newest_update=row.newest,
    )
