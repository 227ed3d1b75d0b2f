"""Request pacing for lookup clients that ask for a gap between calls."""

import asyncio
import time

from loguru import logger

from event_logistics.lib.geocoder.base import AddressSuggestion, BaseLookupClient


class ThrottledLookupClient(BaseLookupClient):
    """Space out ``search`` calls by the wrapped client's ``rate_limit_delay``.

    Concurrent callers queue on a lock for their start slot, so call starts
    are at least ``rate_limit_delay`` seconds apart while the requests
    themselves may still overlap.  A client with no delay is called directly.
    """

    def __init__(self, inner: BaseLookupClient) -> None:
        self._inner = inner
        self._lock = asyncio.Lock()
        self._next_at = 0.0

    @property
    def provider_name(self) -> str:
        return self._inner.provider_name

    @property
    def rate_limit_delay(self) -> float:
        return self._inner.rate_limit_delay

    async def _wait_for_slot(self, delay: float) -> None:
        async with self._lock:
            wait = self._next_at - time.monotonic()
            if wait > 0:
                logger.debug(f"Throttling {self.provider_name} lookup for {wait:.2f}s")
                await asyncio.sleep(wait)
            self._next_at = time.monotonic() + delay

    async def search(self, query: str, limit: int = 5) -> list[AddressSuggestion]:
        delay = self._inner.rate_limit_delay
        if delay > 0:
            await self._wait_for_slot(delay)
        return await self._inner.search(query, limit=limit)
