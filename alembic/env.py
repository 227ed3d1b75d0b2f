"""Alembic environment for the geocoding cache, run through the async engine."""

import asyncio
from logging.config import fileConfig
from typing import Any

from alembic import context
from sqlalchemy import pool, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

from event_logistics.core.config import get_settings
from event_logistics.models import GeocodingCache  # noqa: F401
from event_logistics.models.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

settings = get_settings()
target_metadata = Base.metadata


def _context_options(**options: Any) -> dict[str, Any]:
    options.update(target_metadata=target_metadata, compare_type=True)
    if settings.database_schema is not None:
        options["version_table_schema"] = settings.database_schema
    return options


def run_migrations_offline() -> None:
    """Emit migration SQL without connecting."""
    context.configure(
        **_context_options(
            url=settings.database_url,
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
        )
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    if settings.database_schema is not None:
        connection.execute(text(f'SET search_path TO "{settings.database_schema}", public'))
    context.configure(**_context_options(connection=connection))
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    """Apply migrations over a short-lived async engine."""
    section = config.get_section(config.config_ini_section, {})
    section["sqlalchemy.url"] = settings.database_url
    engine = async_engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    try:
        async with engine.connect() as connection:
            if settings.database_schema is not None:
                await connection.execute(text(f'CREATE SCHEMA IF NOT EXISTS "{settings.database_schema}"'))
                await connection.commit()
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
