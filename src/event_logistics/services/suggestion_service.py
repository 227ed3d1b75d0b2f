"""Suggestion service — interactive address autocomplete on top of the lookup client."""

from loguru import logger

from event_logistics.core.config import Settings
from event_logistics.lib.geocoder import AddressSuggestion, BaseLookupClient, Debouncer, get_lookup_client

MIN_QUERY_LENGTH = 3
DEFAULT_LIMIT = 5


async def fetch_address_suggestions(
    query: str,
    limit: int = DEFAULT_LIMIT,
    *,
    client: BaseLookupClient | None = None,
    min_length: int = MIN_QUERY_LENGTH,
) -> list[AddressSuggestion]:
    """Fetch autocomplete candidates for a partially typed address.

    Queries shorter than ``min_length`` return immediately without
    contacting the provider.  Candidates whose latitude or longitude is
    missing or not numeric are dropped.

    Args:
        query: Text typed so far, sent as-is.
        limit: Maximum number of candidates to request.
        client: Lookup client; the default Nominatim client when None.
        min_length: Minimum query length that triggers a lookup.

    Returns:
        Candidates with usable coordinates, in provider order.
    """
    if not query or len(query) < min_length:
        return []

    lookup = client or get_lookup_client()
    candidates = await lookup.search(query, limit=limit)
    usable = [c for c in candidates if c.coordinates is not None]
    if len(usable) < len(candidates):
        logger.debug(f"Dropped {len(candidates) - len(usable)} suggestion(s) without usable coordinates")
    return usable


def debounced_suggestions(
    settings: Settings,
    *,
    client: BaseLookupClient | None = None,
) -> Debouncer[list[AddressSuggestion]]:
    """Build a per-field debounced suggestion fetcher from settings.

    The returned callable takes the query typed so far.  Calls made within
    ``geocoder_suggestion_debounce_ms`` of each other collapse into the last
    one; superseded calls return None.

    Args:
        settings: Application settings supplying delay, limit and minimum length.
        client: Lookup client; built from ``settings`` when None.

    Returns:
        A new :class:`Debouncer` owned by the caller.
    """
    lookup = client or get_lookup_client(settings)

    async def _fetch(query: str) -> list[AddressSuggestion]:
        return await fetch_address_suggestions(
            query,
            settings.geocoder_suggestion_limit,
            client=lookup,
            min_length=settings.geocoder_suggestion_min_length,
        )

    return Debouncer(_fetch, delay=settings.geocoder_suggestion_debounce_ms / 1000)
