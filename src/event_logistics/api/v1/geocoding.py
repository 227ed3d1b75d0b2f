"""Geocoding API endpoints — address resolution, autocomplete, suggestion caching, map view, and cache stats."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from event_logistics.core.config import Settings, get_settings
from event_logistics.core.dependencies import get_async_session, get_geocoding_client, get_sessionmaker
from event_logistics.lib.geocoder import BaseLookupClient
from event_logistics.schemas.geocoding import (
    AddressGeocodeResponse,
    AddressSuggestionResponse,
    CacheStatsResponse,
    CacheSuggestionRequest,
    CacheSuggestionResponse,
    EventMapRequest,
    EventMapResponse,
)
from event_logistics.services.geocoding_service import cache_suggestion, geocode_address, get_cache_stats
from event_logistics.services.map_service import resolve_event_map
from event_logistics.services.suggestion_service import fetch_address_suggestions

geocoding_router = APIRouter(prefix="/geocoding", tags=["geocoding"])


@geocoding_router.get(
    "/geocode",
    response_model=AddressGeocodeResponse,
)
async def geocode_address_endpoint(
    address: str = Query(  # noqa: B008
        ...,
        min_length=1,
        max_length=500,
        description="Free-text address, venue name, or osm:<type>:<id> key (1-500 characters)",
    ),
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
    client: BaseLookupClient = Depends(get_geocoding_client),  # noqa: B008
) -> AddressGeocodeResponse:
    """Resolve an address to coordinates, from the cache when possible."""
    if not address.strip():
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Address must not be empty or whitespace-only.",
        )

    coordinates = await geocode_address(session, address, client=client)
    if coordinates is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No coordinates available for this address.",
        )

    return AddressGeocodeResponse(address=address, latitude=coordinates[0], longitude=coordinates[1])


@geocoding_router.get(
    "/suggestions",
    response_model=list[AddressSuggestionResponse],
)
async def address_suggestions_endpoint(
    q: str = Query(..., max_length=500, description="Partially typed address"),  # noqa: B008
    limit: int | None = Query(None, ge=1, le=50, description="Maximum suggestions to return"),  # noqa: B008
    settings: Settings = Depends(get_settings),  # noqa: B008
    client: BaseLookupClient = Depends(get_geocoding_client),  # noqa: B008
) -> list[AddressSuggestionResponse]:
    """Autocomplete candidates; queries shorter than the configured minimum return an empty list."""
    suggestions = await fetch_address_suggestions(
        q,
        limit or settings.geocoder_suggestion_limit,
        client=client,
        min_length=settings.geocoder_suggestion_min_length,
    )
    return [AddressSuggestionResponse.from_suggestion(s) for s in suggestions]


@geocoding_router.post(
    "/cache",
    response_model=CacheSuggestionResponse,
)
async def cache_suggestion_endpoint(
    request: CacheSuggestionRequest,
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> CacheSuggestionResponse:
    """Store the coordinates of a picked suggestion under its entity key and display name."""
    suggestion = request.to_suggestion()
    if suggestion.coordinates is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="lat and lon must be numeric.",
        )

    keys = await cache_suggestion(session, suggestion)
    return CacheSuggestionResponse(cached=bool(keys), keys=keys)


@geocoding_router.post(
    "/map",
    response_model=EventMapResponse,
)
async def event_map_endpoint(
    request: EventMapRequest,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_sessionmaker),  # noqa: B008
    settings: Settings = Depends(get_settings),  # noqa: B008
    client: BaseLookupClient = Depends(get_geocoding_client),  # noqa: B008
) -> EventMapResponse:
    """Resolve the venue, places and transport legs of an event for the map view."""
    return await resolve_event_map(
        session_factory,
        request,
        client=client,
        concurrency=settings.geocoder_map_concurrency,
    )


@geocoding_router.get(
    "/cache/stats",
    response_model=CacheStatsResponse,
)
async def cache_statistics_endpoint(
    session: AsyncSession = Depends(get_async_session),  # noqa: B008
) -> CacheStatsResponse:
    """Get geocoding cache statistics."""
    return await get_cache_stats(session)
