"""Geocoding CLI commands: resolve an address, preview suggestions, inspect the cache."""

import asyncio

import typer

geocode_app = typer.Typer()


@geocode_app.command("lookup")
def lookup(
    address: str = typer.Argument(..., help="Address, venue name, or osm:<type>:<id> key"),  # noqa: B008
) -> None:
    """Resolve an address through the cache, calling the lookup service on a miss."""
    coordinates = asyncio.run(_lookup(address))
    if coordinates is None:
        typer.echo(f"No coordinates available for: {address}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{coordinates[0]}, {coordinates[1]}")


@geocode_app.command("suggest")
def suggest(
    query: str = typer.Argument(..., help="Partially typed address"),  # noqa: B008
    limit: int | None = typer.Option(  # noqa: B008
        None, "--limit", min=1, max=50, help="Maximum suggestions [default: GEOCODER_SUGGESTION_LIMIT]"
    ),
) -> None:
    """Print autocomplete suggestions for a query (no cache writes)."""
    from event_logistics.core.config import get_settings
    from event_logistics.lib.geocoder import format_full_address, get_lookup_client, suggestion_key
    from event_logistics.services.suggestion_service import fetch_address_suggestions

    settings = get_settings()
    suggestions = asyncio.run(
        fetch_address_suggestions(
            query,
            limit or settings.geocoder_suggestion_limit,
            client=get_lookup_client(settings),
            min_length=settings.geocoder_suggestion_min_length,
        )
    )
    if not suggestions:
        typer.echo("No suggestions found")
        return

    for s in suggestions:
        lat, lon = s.coordinates  # type: ignore[misc]
        typer.echo(f"{s.display_name}")
        typer.echo(f"  Formatted: {format_full_address(s.address) or '-'}")
        typer.echo(f"  Key:       {suggestion_key(s) or '-'}")
        typer.echo(f"  Lat/Lon:   {lat}, {lon}")


@geocode_app.command("stats")
def stats() -> None:
    """Show geocoding cache statistics."""
    result = asyncio.run(_stats())
    typer.echo(f"Total entries:      {result.total_entries}")
    typer.echo(f"Entity-key entries: {result.entity_key_entries}")
    typer.echo(f"Text-key entries:   {result.text_key_entries}")
    typer.echo(f"Oldest update:      {result.oldest_update or '-'}")
    typer.echo(f"Newest update:      {result.newest_update or '-'}")


async def _lookup(address: str):  # type: ignore[no-untyped-def]
    """Async implementation of a single lookup."""
    from event_logistics.core.config import get_settings
    from event_logistics.core.database import engine_scope
    from event_logistics.lib.geocoder import get_lookup_client
    from event_logistics.services.geocoding_service import geocode_address

    settings = get_settings()
    async with engine_scope(settings) as factory, factory() as session:
        return await geocode_address(session, address, client=get_lookup_client(settings))


async def _stats():  # type: ignore[no-untyped-def]
    """Async implementation of cache statistics."""
    from event_logistics.core.config import get_settings
    from event_logistics.core.database import engine_scope
    from event_logistics.services.geocoding_service import get_cache_stats

    settings = get_settings()
    async with engine_scope(settings) as factory, factory() as session:
        return await get_cache_stats(session)
