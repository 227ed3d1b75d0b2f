"""Geocoder library — address lookup, cache keys and best-effort coordinate caching.

Public API:
    - AddressSuggestion / AddressDetails: Candidate returned by a lookup
    - Coordinates: ``(latitude, longitude)`` pair
    - BaseLookupClient: Abstract lookup client interface
    - NominatimClient: OpenStreetMap Nominatim client
    - GeocodingProviderError: Transport/service failure inside a client
    - entity_key / is_entity_key / suggestion_key: Cache key derivation
    - cache_lookup / cache_upsert: Database caching functions
    - format_full_address / compose_address: Address formatting
    - Debouncer: Caller-owned debounced call wrapper
    - ThrottledLookupClient: Paces a client by its rate_limit_delay
    - get_lookup_client: Build the configured lookup client
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from event_logistics.lib.geocoder.address import compose_address, format_full_address
from event_logistics.lib.geocoder.base import (
    AddressDetails,
    AddressSuggestion,
    BaseLookupClient,
    Coordinates,
    GeocodingProviderError,
)
from event_logistics.lib.geocoder.cache import cache_lookup, cache_upsert
from event_logistics.lib.geocoder.debounce import Debouncer
from event_logistics.lib.geocoder.keys import ENTITY_KEY_PREFIX, entity_key, is_entity_key, suggestion_key
from event_logistics.lib.geocoder.nominatim import NominatimClient
from event_logistics.lib.geocoder.throttle import ThrottledLookupClient

if TYPE_CHECKING:
    from event_logistics.core.config import Settings


def get_lookup_client(settings: Settings | None = None) -> BaseLookupClient:
    """Build the lookup client from settings.

    Args:
        settings: Application settings; library defaults are used when None.

    Returns:
        A configured :class:`NominatimClient`.
    """
    if settings is None:
        return NominatimClient()
    return NominatimClient(
        base_url=settings.geocoder_nominatim_base_url,
        timeout=settings.geocoder_nominatim_timeout,
        email=settings.geocoder_nominatim_email,
        user_agent=settings.geocoder_user_agent,
        accept_language=settings.geocoder_accept_language,
    )


__all__ = [
    "ENTITY_KEY_PREFIX",
    "AddressDetails",
    "AddressSuggestion",
    "BaseLookupClient",
    "Coordinates",
    "Debouncer",
    "GeocodingProviderError",
    "NominatimClient",
    "ThrottledLookupClient",
    "cache_lookup",
    "cache_upsert",
    "compose_address",
    "entity_key",
    "format_full_address",
    "get_lookup_client",
    "is_entity_key",
    "suggestion_key",
]
