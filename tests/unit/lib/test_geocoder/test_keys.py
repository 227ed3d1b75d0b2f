"""Unit tests for cache key derivation."""

from event_logistics.lib.geocoder.base import AddressSuggestion
from event_logistics.lib.geocoder.keys import entity_key, is_entity_key, suggestion_key


def _suggestion(**overrides) -> AddressSuggestion:
    defaults = {
        "osm_type": "way",
        "osm_id": 12345,
        "display_name": "221B, Baker Street, London",
        "lat": "51.5",
        "lon": "-0.1",
    }
    defaults.update(overrides)
    return AddressSuggestion(**defaults)


class TestEntityKey:
    """Tests for entity_key()."""

    def test_format(self) -> None:
        assert entity_key("way", 12345) == "osm:way:12345"

    def test_string_id(self) -> None:
        assert entity_key("node", "42") == "osm:node:42"

    def test_deterministic(self) -> None:
        assert entity_key("relation", 7) == entity_key("relation", 7)


class TestIsEntityKey:
    """Tests for is_entity_key()."""

    def test_entity_key_shape(self) -> None:
        assert is_entity_key("osm:way:12345")

    def test_plain_text(self) -> None:
        assert not is_entity_key("221B Baker Street")

    def test_prefix_is_case_sensitive(self) -> None:
        assert not is_entity_key("OSM:way:1")

    def test_leading_whitespace_is_not_stripped(self) -> None:
        assert not is_entity_key(" osm:way:1")


class TestSuggestionKey:
    """Tests for suggestion_key()."""

    def test_from_suggestion(self) -> None:
        assert suggestion_key(_suggestion()) == "osm:way:12345"

    def test_missing_type(self) -> None:
        assert suggestion_key(_suggestion(osm_type=None)) is None

    def test_missing_id(self) -> None:
        assert suggestion_key(_suggestion(osm_id=None)) is None
