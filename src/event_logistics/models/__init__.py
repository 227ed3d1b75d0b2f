"""ORM model registry — import all models so Alembic autogenerate discovers them."""

from event_logistics.models.geocoding_cache import GeocodingCache

__all__ = [
    "GeocodingCache",
]
