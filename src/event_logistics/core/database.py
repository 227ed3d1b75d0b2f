"""Process-wide async engine for the geocoding cache database.

The API lifespan and each CLI command (through :func:`engine_scope`) create
the engine once; request handlers and services only ever see sessions.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from event_logistics.core.config import Settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

_POOL_DEFAULTS = {"pool_size": 10, "max_overflow": 5}


def get_engine() -> AsyncEngine:
    """Return the engine created by :func:`init_engine`.

    Raises:
        RuntimeError: If no engine exists yet.
    """
    if _engine is None:
        msg = "Database engine not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the session factory bound to the current engine.

    Raises:
        RuntimeError: If no engine exists yet.
    """
    if _session_factory is None:
        msg = "Session factory not initialized. Call init_engine() first."
        raise RuntimeError(msg)
    return _session_factory


def _engine_options(database_url: str, schema: str | None, options: dict[str, Any]) -> dict[str, Any]:
    if schema is not None:
        connect_args = options.pop("connect_args", {})
        if not isinstance(connect_args, dict):
            msg = "connect_args must be a dict"
            raise TypeError(msg)
        # asyncpg applies server_settings on every new connection
        options["connect_args"] = {**connect_args, "server_settings": {"search_path": f"{schema},public"}}

    pooled = options.get("poolclass") is not StaticPool and not database_url.startswith("sqlite")
    if pooled:
        for name, value in _POOL_DEFAULTS.items():
            options.setdefault(name, value)
    return options


def init_engine(database_url: str, *, schema: str | None = None, **kwargs: Any) -> AsyncEngine:
    """Create the engine and session factory, replacing any previous ones.

    Args:
        database_url: ``postgresql+asyncpg://`` in production,
            ``sqlite+aiosqlite://`` in tests.
        schema: PostgreSQL schema placed ahead of ``public`` on the search path.
        **kwargs: Passed through to ``create_async_engine``.

    Returns:
        The new engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    _engine = create_async_engine(database_url, **_engine_options(database_url, schema, kwargs))
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine. No-op when none exists."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is None:
        return
    await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def engine_scope(settings: Settings) -> AsyncGenerator[async_sessionmaker[AsyncSession]]:
    """Own the engine for the duration of a one-shot command.

    Yields:
        The session factory bound to the new engine.
    """
    init_engine(settings.database_url, schema=settings.database_schema)
    try:
        yield get_session_factory()
    finally:
        await dispose_engine()
