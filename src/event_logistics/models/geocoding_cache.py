"""GeocodingCache model — durable address-key to coordinate table."""

from sqlalchemy import Double, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from event_logistics.models.base import Base, TimestampMixin, UUIDMixin


class GeocodingCache(Base, UUIDMixin, TimestampMixin):
    """Cached coordinates keyed by a verbatim address string or an ``osm:<type>:<id>`` entity key.

    Rows are never expired.  The same physical location may appear under
    several keys (entity key, the caller's raw text, the provider's display
    name); those rows are not deduplicated against each other.
    """

    __tablename__ = "geocoding_cache"

    address: Mapped[str] = mapped_column(Text, nullable=False)
    latitude: Mapped[float] = mapped_column(Double, nullable=False)
    longitude: Mapped[float] = mapped_column(Double, nullable=False)

    __table_args__ = (UniqueConstraint("address", name="uq_geocoding_cache_address"),)
