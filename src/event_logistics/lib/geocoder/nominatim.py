"""OpenStreetMap Nominatim lookup client.

Uses the Nominatim search API (https://nominatim.org/release-docs/develop/api/Search/).
Free but rate-limited to 1 req/sec on the public instance; each call is a
single attempt with no retry or backoff.
"""

import httpx
from loguru import logger

from event_logistics.lib.geocoder.base import (
    AddressSuggestion,
    BaseLookupClient,
    GeocodingProviderError,
)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "event-logistics-api/0.1"
DEFAULT_ACCEPT_LANGUAGE = "en"


class NominatimClient(BaseLookupClient):
    """OpenStreetMap Nominatim lookup client."""

    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        email: str = "",
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
    ) -> None:
        self._search_url = f"{base_url.rstrip('/')}/search"
        self._timeout = timeout
        self._email = email
        self._user_agent = user_agent
        self._accept_language = accept_language

    @property
    def provider_name(self) -> str:
        return "nominatim"

    @property
    def rate_limit_delay(self) -> float:
        return 1.0

    async def search(self, query: str, limit: int = 5) -> list[AddressSuggestion]:
        """Search Nominatim for candidates matching ``query``.

        Args:
            query: Free-text address or place name, sent as-is.
            limit: Maximum number of candidates to request.

        Returns:
            Parsed candidates in provider order, or an empty list on any
            transport, status or parse failure.
        """
        try:
            data = await self._fetch(query, limit)
        except GeocodingProviderError as e:
            logger.warning(f"Address lookup failed: {e}")
            return []
        return self._parse_response(data)

    async def _fetch(self, query: str, limit: int) -> list[dict]:
        """Issue the search request and return the decoded JSON array.

        Raises:
            GeocodingProviderError: On transport, HTTP status or decode errors.
        """
        params: dict[str, str | int] = {
            "format": "json",
            "q": query,
            "addressdetails": 1,
            "limit": limit,
        }
        if self._email:
            params["email"] = self._email

        headers = {
            "Accept-Language": self._accept_language,
            "User-Agent": self._user_agent,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._search_url, params=params, headers=headers)
                response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise GeocodingProviderError("nominatim", "Lookup request timed out") from e
        except httpx.HTTPStatusError as e:
            raise GeocodingProviderError(
                "nominatim",
                f"Provider returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise GeocodingProviderError("nominatim", f"Transport error: {e}") from e
        except ValueError as e:
            raise GeocodingProviderError("nominatim", f"Failed to decode response: {e}") from e

        if not isinstance(data, list):
            raise GeocodingProviderError("nominatim", "Unexpected response shape (expected a JSON array)")
        return data

    @staticmethod
    def _parse_response(data: list[dict]) -> list[AddressSuggestion]:
        """Convert raw result objects into candidates, skipping non-object entries."""
        return [AddressSuggestion.from_dict(item) for item in data if isinstance(item, dict)]
