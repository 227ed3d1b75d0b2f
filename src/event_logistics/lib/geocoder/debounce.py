"""Caller-owned debouncing for interactive suggestion fetches.

Each address field owns one :class:`Debouncer`; nothing is shared between
fields or held at module level.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Debouncer(Generic[T]):
    """Delay calls to an async function until input has been quiet for ``delay`` seconds.

    Every call supersedes the one still waiting; the superseded call returns
    None without invoking the function.  Only the last call made within the
    quiet period reaches ``func``.

    Example::

        suggest = Debouncer(fetch_address_suggestions, delay=0.8)
        results = await suggest("221B Baker")
    """

    def __init__(self, func: Callable[..., Awaitable[T]], delay: float = 0.8) -> None:
        if delay < 0:
            msg = f"delay must be >= 0, got {delay}"
            raise ValueError(msg)
        self._func = func
        self._delay = delay
        self._pending: asyncio.Task[T] | None = None

    @property
    def pending(self) -> bool:
        """Whether a call is currently waiting or running."""
        return self._pending is not None and not self._pending.done()

    async def __call__(self, *args: object, **kwargs: object) -> T | None:
        self.cancel()
        task = asyncio.ensure_future(self._run(*args, **kwargs))
        self._pending = task
        try:
            return await task
        except asyncio.CancelledError:
            if self._pending is not task:
                return None
            raise
        finally:
            if self._pending is task:
                self._pending = None

    def cancel(self) -> None:
        """Cancel the waiting call, if any."""
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()

    async def _run(self, *args: object, **kwargs: object) -> T:
        await asyncio.sleep(self._delay)
        return await self._func(*args, **kwargs)
