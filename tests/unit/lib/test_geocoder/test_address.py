"""Unit tests for address formatting."""

from event_logistics.lib.geocoder.address import compose_address, format_full_address
from event_logistics.lib.geocoder.base import AddressDetails


class TestFormatFullAddress:
    """Tests for format_full_address()."""

    def test_downing_street(self) -> None:
        details = AddressDetails(house_number="10", road="Downing St", city="London", country="UK")
        assert format_full_address(details) == "Downing St, 10, London, UK"

    def test_full_order(self) -> None:
        details = AddressDetails(
            road="Baker Street",
            house_number="221B",
            neighbourhood="Marylebone Village",
            suburb="Marylebone",
            city="London",
            county="Greater London",
            state="England",
            postcode="NW1 6XE",
            country="United Kingdom",
        )
        assert format_full_address(details) == (
            "Baker Street, 221B, Marylebone Village, Marylebone, London, Greater London, England, NW1 6XE, United Kingdom"
        )

    def test_road_without_house_number(self) -> None:
        assert format_full_address(AddressDetails(road="Main St", country="US")) == "Main St, US"

    def test_house_number_without_road_is_dropped(self) -> None:
        assert format_full_address(AddressDetails(house_number="5", city="Rome")) == "Rome"

    def test_town_used_when_no_city(self) -> None:
        assert format_full_address(AddressDetails(town="Woking", village="Horsell")) == "Woking"

    def test_village_used_when_no_city_or_town(self) -> None:
        assert format_full_address(AddressDetails(village="Horsell", country="UK")) == "Horsell, UK"

    def test_empty(self) -> None:
        assert format_full_address(AddressDetails()) == ""


class TestComposeAddress:
    """Tests for compose_address()."""

    def test_joins_parts(self) -> None:
        assert compose_address("Via Roma 1", "Milan", "Italy") == "Via Roma 1, Milan, Italy"

    def test_skips_blank_and_none(self) -> None:
        assert compose_address("Via Roma 1", None, "  ", "Italy") == "Via Roma 1, Italy"

    def test_strips_parts(self) -> None:
        assert compose_address(" Hotel Plaza ", "Rome ") == "Hotel Plaza, Rome"

    def test_all_blank(self) -> None:
        assert compose_address(None, "") == ""
