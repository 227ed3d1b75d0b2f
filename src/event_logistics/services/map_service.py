"""Map service — resolves coordinates for everything plotted on an event map."""

import asyncio

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from event_logistics.lib.geocoder import BaseLookupClient, Coordinates, ThrottledLookupClient, get_lookup_client
from event_logistics.schemas.geocoding import EventMapRequest, EventMapResponse, MapLeg, MapPlace
from event_logistics.services.geocoding_service import geocode_address

DEFAULT_CONCURRENCY = 4


async def resolve_event_map(
    session_factory: async_sessionmaker[AsyncSession],
    request: EventMapRequest,
    *,
    client: BaseLookupClient | None = None,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> EventMapResponse:
    """Resolve the venue, places and transport-leg endpoints of one event.

    Every non-blank address is resolved by an independent
    :func:`geocode_address` call with its own session, at most
    ``concurrency`` at a time.  Identical addresses are not coalesced.
    Lookups that miss the cache are spaced by the client's
    ``rate_limit_delay``.
    Blank addresses get no position and cost no lookup.

    Args:
        session_factory: Factory for per-resolution sessions.
        request: Addresses to resolve.
        client: Lookup client shared by all resolutions.
        concurrency: Maximum number of in-flight resolutions.

    Returns:
        Positions for each item, with the venue position as map center.
    """
    semaphore = asyncio.Semaphore(concurrency)
    lookup = ThrottledLookupClient(client or get_lookup_client())

    async def _resolve(address: str | None) -> Coordinates | None:
        if not address or not address.strip():
            return None
        async with semaphore, session_factory() as session:
            return await geocode_address(session, address, client=lookup)

    venue_task = _resolve(request.venue)
    place_addresses = [p.full_address for p in request.places]
    place_tasks = [_resolve(a) for a in place_addresses]
    leg_tasks = [_resolve(a) for leg in request.legs for a in (leg.departure, leg.arrival)]

    center, *rest = await asyncio.gather(venue_task, *place_tasks, *leg_tasks)
    place_positions = rest[: len(place_tasks)]
    leg_positions = rest[len(place_tasks) :]

    places = [
        MapPlace(id=p.id, kind=p.kind, address=addr or None, position=pos)
        for p, addr, pos in zip(request.places, place_addresses, place_positions, strict=True)
    ]
    legs = [
        MapLeg(
            id=leg.id,
            mode=leg.mode,
            departure=leg.departure,
            arrival=leg.arrival,
            departure_position=leg_positions[2 * i],
            arrival_position=leg_positions[2 * i + 1],
        )
        for i, leg in enumerate(request.legs)
    ]

    requested = [request.venue, *place_addresses]
    requested += [a for leg in request.legs for a in (leg.departure, leg.arrival)]
    resolved = [center, *place_positions, *leg_positions]
    unresolved = sum(1 for addr, pos in zip(requested, resolved, strict=True) if addr and addr.strip() and pos is None)
    if unresolved:
        logger.warning(f"Event map: {unresolved} address(es) could not be resolved")

    return EventMapResponse(center=center, places=places, legs=legs, unresolved=unresolved)
