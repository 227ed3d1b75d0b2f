"""Unit tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from event_logistics.core.config import Settings


@pytest.fixture(autouse=True)
def _database_url(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://cache:secret@db/logistics")


def _load() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


class TestDefaults:
    """Values used when only DATABASE_URL is set."""

    def test_geocoding_defaults(self) -> None:
        settings = _load()
        assert settings.database_url == "postgresql+asyncpg://cache:secret@db/logistics"
        assert settings.database_schema is None
        assert settings.geocoder_nominatim_base_url == "https://nominatim.openstreetmap.org"
        assert settings.geocoder_nominatim_timeout == 10.0
        assert settings.geocoder_accept_language == "en"
        assert (settings.geocoder_suggestion_min_length, settings.geocoder_suggestion_limit) == (3, 5)
        assert settings.geocoder_suggestion_debounce_ms == 800
        assert settings.geocoder_map_concurrency == 4

    def test_http_defaults(self) -> None:
        settings = _load()
        assert settings.api_v1_prefix == "/api/v1"
        assert settings.rate_limit_per_minute == 200
        assert settings.cors_origin_list == []
        assert settings.trusted_proxy_header_list == ["CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP"]
        assert settings.log_level == "INFO"
        assert settings.log_dir is None


class TestOverrides:
    """Environment values that are accepted and normalized."""

    @pytest.mark.parametrize(
        ("env", "attribute", "expected"),
        [
            ({"GEOCODER_NOMINATIM_EMAIL": "ops@example.com"}, "geocoder_nominatim_email", "ops@example.com"),
            ({"GEOCODER_NOMINATIM_BASE_URL": "http://osm.internal:8080/"}, "geocoder_nominatim_base_url",
             "http://osm.internal:8080"),
            ({"CORS_ORIGINS": "http://localhost:5173, https://app.example"}, "cors_origin_list",
             ["http://localhost:5173", "https://app.example"]),
            ({"TRUSTED_PROXY_HEADERS": "X-Real-IP , CF-Connecting-IP"}, "trusted_proxy_header_list",
             ["X-Real-IP", "CF-Connecting-IP"]),
            ({"TRUSTED_PROXY_HEADERS": " "}, "trusted_proxy_header_list", []),
            ({"DATABASE_SCHEMA": "pr_42"}, "database_schema", "pr_42"),
            ({"GEOCODER_SUGGESTION_DEBOUNCE_MS": "0"}, "geocoder_suggestion_debounce_ms", 0),
        ],
    )
    def test_accepted(self, monkeypatch: pytest.MonkeyPatch, env, attribute, expected) -> None:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        assert getattr(_load(), attribute) == expected


class TestValidation:
    """Environment values that are rejected."""

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("GEOCODER_NOMINATIM_BASE_URL", "ftp://osm.internal"),
            ("GEOCODER_NOMINATIM_TIMEOUT", "0"),
            ("GEOCODER_SUGGESTION_LIMIT", "51"),
            ("GEOCODER_SUGGESTION_MIN_LENGTH", "0"),
            ("GEOCODER_MAP_CONCURRENCY", "0"),
            ("RATE_LIMIT_PER_MINUTE", "0"),
            ("DATABASE_SCHEMA", "pr-42; DROP SCHEMA"),
            ("DATABASE_SCHEMA", "42pr"),
        ],
    )
    def test_rejected(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            _load()

    def test_schema_error_message(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_SCHEMA", "Public")
        with pytest.raises(ValidationError, match="Invalid database_schema"):
            _load()
