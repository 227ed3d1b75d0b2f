"""Cache table migrations, driven through Alembic's command API."""

import typer
from loguru import logger

db_app = typer.Typer()

ALEMBIC_INI = "alembic.ini"


def _alembic_config():  # type: ignore[no-untyped-def]
    from alembic.config import Config

    return Config(ALEMBIC_INI)


@db_app.command()
def upgrade(
    revision: str = typer.Argument("head", help="Target revision"),
    sql: bool = typer.Option(False, "--sql", help="Print the migration SQL instead of running it"),
) -> None:
    """Create or migrate the geocoding cache table."""
    from alembic import command

    logger.info(f"Migrating geocoding cache schema up to {revision}{' (offline)' if sql else ''}")
    command.upgrade(_alembic_config(), revision, sql=sql)
    logger.info("Geocoding cache schema is up to date")


@db_app.command()
def downgrade(
    revision: str = typer.Argument("-1", help="Target revision"),
) -> None:
    """Roll the cache schema back to an earlier revision."""
    from alembic import command

    logger.warning(f"Migrating geocoding cache schema down to {revision}")
    command.downgrade(_alembic_config(), revision)


@db_app.command()
def current() -> None:
    """Print the revision the cache database is at."""
    from alembic import command

    command.current(_alembic_config(), verbose=True)
