"""Cache key derivation.

Two key forms share the cache table: a stable entity key built from the
provider's object type and id, and the literal address text.  Address text
is used verbatim; case, whitespace and punctuation are significant.
"""

from event_logistics.lib.geocoder.base import AddressSuggestion

ENTITY_KEY_PREFIX = "osm:"


def entity_key(entity_type: str, entity_id: int | str) -> str:
    """Format the entity key ``osm:<entity_type>:<entity_id>``."""
    return f"{ENTITY_KEY_PREFIX}{entity_type}:{entity_id}"


def is_entity_key(key: str) -> bool:
    """Whether ``key`` has the entity-key shape."""
    return key.startswith(ENTITY_KEY_PREFIX)


def suggestion_key(suggestion: AddressSuggestion) -> str | None:
    """Entity key for a candidate, or None when the provider omitted its type or id."""
    if not suggestion.osm_type or suggestion.osm_id in (None, ""):
        return None
    return entity_key(suggestion.osm_type, suggestion.osm_id)
