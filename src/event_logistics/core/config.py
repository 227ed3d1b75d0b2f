"""Service configuration read from the environment (or a ``.env`` file) with pydantic-settings."""

import re

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SCHEMA_NAME = re.compile(r"^[a-z_][a-z0-9_]{0,62}$")


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """Runtime settings for the API server, the CLI and migrations."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Cache database
    database_url: str = Field(description="Async SQLAlchemy URL of the cache database")
    database_schema: str | None = Field(
        default=None,
        description="Schema to put first on the search path, for per-branch databases (e.g. pr_42)",
    )

    # Geocoding — Nominatim (OpenStreetMap)
    geocoder_nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Lookup service root; /search is appended",
    )
    geocoder_nominatim_timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")
    geocoder_nominatim_email: str = Field(
        default="",
        description="Contact address sent with each lookup, as the public usage policy asks",
    )
    geocoder_user_agent: str = Field(default="event-logistics-api/0.1", description="User-Agent for lookups")
    geocoder_accept_language: str = Field(default="en", description="Language of returned display names")

    # Geocoding — suggestions and map resolution
    geocoder_suggestion_min_length: int = Field(
        default=3,
        ge=1,
        description="Queries shorter than this never reach the lookup service",
    )
    geocoder_suggestion_limit: int = Field(default=5, gt=0, le=50, description="Suggestions per query")
    geocoder_suggestion_debounce_ms: int = Field(
        default=800,
        ge=0,
        description="Quiet period before a debounced suggestion fetch fires",
    )
    geocoder_map_concurrency: int = Field(
        default=4,
        gt=0,
        description="Addresses resolved in parallel when building an event map",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Minimum Loguru level")
    log_dir: str | None = Field(default=None, description="Enables a daily-rotated log file in this directory")

    # HTTP surface
    environment: str = Field(default="production", description="Deployment name shown in startup logs")
    api_v1_prefix: str = Field(default="/api/v1", description="Mount point of the versioned router")
    cors_origins: str = Field(default="", description="Comma-separated origins allowed to call the API")
    cors_origin_regex: str = Field(default="", description="Regex alternative to cors_origins")
    rate_limit_per_minute: int = Field(
        default=200,
        gt=0,
        description="Geocoding requests allowed per client per minute",
    )
    trusted_proxy_headers: str = Field(
        default="CF-Connecting-IP,X-Forwarded-For,X-Real-IP",
        description="Comma-separated headers that carry the client address, highest priority first",
    )

    @field_validator("database_schema")
    @classmethod
    def validate_database_schema(cls, v: str | None) -> str | None:
        if v is not None and not _SCHEMA_NAME.match(v):
            msg = f"Invalid database_schema: must match {_SCHEMA_NAME.pattern}"
            raise ValueError(msg)
        return v

    @field_validator("geocoder_nominatim_base_url")
    @classmethod
    def validate_nominatim_base_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            msg = "geocoder_nominatim_base_url must be an http(s) URL"
            raise ValueError(msg)
        return v.rstrip("/")

    @property
    def cors_origin_list(self) -> list[str]:
        """Allowed CORS origins as a list."""
        return _split_csv(self.cors_origins)

    @property
    def trusted_proxy_header_list(self) -> list[str]:
        """Client-address headers as a list; empty means trust the socket peer only."""
        return _split_csv(self.trusted_proxy_headers)


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()  # type: ignore[call-arg]
