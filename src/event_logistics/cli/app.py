"""``event-logistics`` command line: API server, migrations and geocoding tools."""

import typer

from event_logistics.cli.db_cmd import db_app
from event_logistics.cli.geocode_cmd import geocode_app
from event_logistics.core.config import get_settings
from event_logistics.core.logging import setup_logging

app = typer.Typer(name="event-logistics", help="Event logistics geocoding CLI", no_args_is_help=True)
app.add_typer(db_app, name="db", help="Geocoding cache migrations")
app.add_typer(geocode_app, name="geocode", help="Resolve addresses and inspect the cache")


@app.callback()
def _main_callback() -> None:
    """Configure logging before any command runs."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Bind host"),  # noqa: S104
    port: int = typer.Option(8000, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("event_logistics.main:create_app", factory=True, host=host, port=port, reload=reload)
