"""Lookup client interface and the candidate types it produces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from typing import Any

Coordinates = tuple[float, float]
"""A ``(latitude, longitude)`` pair."""


@dataclass
class AddressDetails:
    """Structured address components of a lookup candidate.

    Every field is optional; the provider only returns the parts it knows.
    """

    road: str | None = None
    house_number: str | None = None
    neighbourhood: str | None = None
    suburb: str | None = None
    city: str | None = None
    town: str | None = None
    village: str | None = None
    county: str | None = None
    state: str | None = None
    postcode: str | None = None
    country: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> "AddressDetails":
        """Build from a provider ``address`` object, keeping unknown keys in ``extra``.

        Anything other than a JSON object yields empty details.
        """
        if not isinstance(data, dict) or not data:
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs: dict[str, Any] = {}
        extra: dict[str, str] = {}
        for key, value in data.items():
            if value is None:
                continue
            if key in known:
                kwargs[key] = str(value)
            else:
                extra[key] = str(value)
        return cls(**kwargs, extra=extra)

    @property
    def locality(self) -> str | None:
        """First available of city, town or village."""
        return self.city or self.town or self.village


@dataclass
class AddressSuggestion:
    """A single candidate returned by a lookup client.

    ``lat``/``lon`` are kept as the raw strings the provider sent; use
    :attr:`coordinates` to get parsed floats.
    """

    osm_type: str | None
    osm_id: int | str | None
    display_name: str
    lat: str | None
    lon: str | None
    place_id: int | None = None
    address: AddressDetails = field(default_factory=AddressDetails)
    category: str | None = None
    type: str | None = None
    bounding_box: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AddressSuggestion":
        """Build from one element of the provider's JSON result array."""
        lat = data.get("lat")
        lon = data.get("lon")
        bbox = data.get("boundingbox")
        return cls(
            osm_type=data.get("osm_type"),
            osm_id=data.get("osm_id"),
            display_name=str(data.get("display_name") or ""),
            lat=None if lat is None else str(lat),
            lon=None if lon is None else str(lon),
            place_id=data.get("place_id"),
            address=AddressDetails.from_dict(data.get("address")),
            category=data.get("class") or data.get("category"),
            type=data.get("type"),
            bounding_box=[str(v) for v in bbox] if isinstance(bbox, list) else [],
        )

    @property
    def coordinates(self) -> Coordinates | None:
        """Parsed ``(lat, lon)``, or None if either value is missing or not numeric."""
        if not self.lat or not self.lon:
            return None
        try:
            lat = float(self.lat)
            lon = float(self.lon)
        except ValueError:
            return None
        if lat != lat or lon != lon:  # NaN
            return None
        return lat, lon


class GeocodingProviderError(Exception):
    """Raised when a lookup provider experiences a transport or service error.

    Distinguishes provider failures (timeout, HTTP error, connection error,
    unparseable body) from a successful response with no match.

    Args:
        provider_name: Name of the failing provider.
        message: Human-readable error description.
        status_code: Optional HTTP status code from the provider.
    """

    def __init__(self, provider_name: str, message: str, status_code: int | None = None) -> None:
        self.provider_name = provider_name
        self.message = message
        self.status_code = status_code
        super().__init__(f"{provider_name}: {message}")


class BaseLookupClient(ABC):
    """Abstract lookup client. Implementations make a single best-effort attempt per call."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider."""

    @property
    def rate_limit_delay(self) -> float:
        """Minimum delay in seconds the provider's usage policy asks for between requests."""
        return 0.0

    @abstractmethod
    async def search(self, query: str, limit: int = 5) -> list[AddressSuggestion]:
        """Search for candidates matching ``query``.

        Args:
            query: Free-text address or place name.
            limit: Maximum number of candidates to request.

        Returns:
            Candidates in provider order; an empty list on no match or on
            any transport/service failure.
        """
