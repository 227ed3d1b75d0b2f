"""Pydantic v2 schemas for geocoding operations."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, computed_field

from event_logistics.lib.geocoder.address import compose_address, format_full_address
from event_logistics.lib.geocoder.base import AddressDetails, AddressSuggestion
from event_logistics.lib.geocoder.keys import suggestion_key

# --- Single-address geocoding ---


class AddressGeocodeResponse(BaseModel):
    """Coordinates resolved for a single address or entity key."""

    address: str = Field(description="The address or entity key exactly as submitted")
    latitude: float
    longitude: float


# --- Suggestions ---


class AddressComponentsSchema(BaseModel):
    """Structured address components of a suggestion."""

    model_config = {"from_attributes": True}

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

    def to_details(self) -> AddressDetails:
        """Convert to the library dataclass."""
        return AddressDetails(**self.model_dump())


class AddressSuggestionResponse(BaseModel):
    """A single address candidate offered for autocomplete."""

    osm_type: str | None = None
    osm_id: int | str | None = None
    place_id: int | None = None
    display_name: str
    formatted_address: str = Field(description="Address rebuilt from structured components in a fixed order")
    cache_key: str | None = Field(default=None, description="Entity cache key (osm:<type>:<id>)")
    latitude: float
    longitude: float
    address: AddressComponentsSchema

    @classmethod
    def from_suggestion(cls, suggestion: AddressSuggestion) -> "AddressSuggestionResponse":
        """Build from a candidate that is known to carry valid coordinates.

        Raises:
            ValueError: If the candidate's coordinates cannot be parsed.
        """
        coordinates = suggestion.coordinates
        if coordinates is None:
            msg = f"Suggestion {suggestion.display_name!r} has no usable coordinates"
            raise ValueError(msg)
        return cls(
            osm_type=suggestion.osm_type,
            osm_id=suggestion.osm_id,
            place_id=suggestion.place_id,
            display_name=suggestion.display_name,
            formatted_address=format_full_address(suggestion.address),
            cache_key=suggestion_key(suggestion),
            latitude=coordinates[0],
            longitude=coordinates[1],
            address=AddressComponentsSchema.model_validate(suggestion.address),
        )


class CacheSuggestionRequest(BaseModel):
    """A suggestion the user picked, to be stored under its entity key and display name."""

    osm_type: str | None = Field(default=None, max_length=20)
    osm_id: int | str | None = None
    display_name: str = Field(..., min_length=1, max_length=500)
    lat: str = Field(..., min_length=1, max_length=32)
    lon: str = Field(..., min_length=1, max_length=32)
    address: AddressComponentsSchema = Field(default_factory=AddressComponentsSchema)

    def to_suggestion(self) -> AddressSuggestion:
        """Convert to the library candidate type."""
        return AddressSuggestion(
            osm_type=self.osm_type,
            osm_id=self.osm_id,
            display_name=self.display_name,
            lat=self.lat,
            lon=self.lon,
            address=self.address.to_details(),
        )


class CacheSuggestionResponse(BaseModel):
    """Outcome of caching a picked suggestion."""

    cached: bool
    keys: list[str] = Field(default_factory=list, description="Keys that were written successfully")


# --- Cache statistics ---


class CacheStatsResponse(BaseModel):
    """Geocoding cache statistics."""

    total_entries: int
    entity_key_entries: int
    text_key_entries: int
    oldest_update: datetime | None = None
    newest_update: datetime | None = None


# --- Event map resolution ---

PlaceKind = Literal["venue", "hotel", "other"]
TransportMode = Literal["bus", "car", "train", "flight"]


class MapPlaceQuery(BaseModel):
    """A fixed place to plot on the event map.

    Street, city and country are joined into one lookup string, so a hotel
    stored as separate columns resolves the same way every time.
    """

    id: str = Field(..., min_length=1, max_length=100)
    kind: PlaceKind = "hotel"
    address: str | None = Field(default=None, max_length=500)
    city: str | None = Field(default=None, max_length=100)
    country: str | None = Field(default=None, max_length=100)

    @property
    def full_address(self) -> str:
        """Non-blank parts of address, city and country, comma-joined."""
        return compose_address(self.address, self.city, self.country)


class MapLegQuery(BaseModel):
    """A transport leg whose departure and arrival should be plotted."""

    id: str = Field(..., min_length=1, max_length=100)
    mode: TransportMode
    departure: str | None = Field(default=None, max_length=500)
    arrival: str | None = Field(default=None, max_length=500)


class EventMapRequest(BaseModel):
    """Everything the map view needs resolved for one event."""

    venue: str | None = Field(default=None, max_length=500, description="Event address, or its location name")
    places: list[MapPlaceQuery] = Field(default_factory=list, max_length=500)
    legs: list[MapLegQuery] = Field(default_factory=list, max_length=500)


class MapPlace(BaseModel):
    """A resolved place; ``position`` is None when no coordinates are available."""

    id: str
    kind: PlaceKind
    address: str | None = None
    position: tuple[float, float] | None = None


class MapLeg(BaseModel):
    """A resolved transport leg; either end may be unresolved."""

    id: str
    mode: TransportMode
    departure: str | None = None
    arrival: str | None = None
    departure_position: tuple[float, float] | None = None
    arrival_position: tuple[float, float] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_plottable(self) -> bool:
        """Whether both ends resolved so a line can be drawn."""
        return self.departure_position is not None and self.arrival_position is not None


class EventMapResponse(BaseModel):
    """Resolved map payload."""

    center: tuple[float, float] | None = None
    places: list[MapPlace] = Field(default_factory=list)
    legs: list[MapLeg] = Field(default_factory=list)
    unresolved: int = Field(default=0, description="Number of non-blank addresses that could not be resolved")
