"""ASGI entry point: ``create_app`` builds the event logistics geocoding API."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from event_logistics.api.router import create_router, setup_middleware
from event_logistics.core.config import get_settings
from event_logistics.core.database import dispose_engine, init_engine
from event_logistics.core.logging import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Open the cache database for the life of the server."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)
    init_engine(settings.database_url, echo=False, schema=settings.database_schema)
    logger.info(f"Event logistics API starting ({settings.environment})")
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Event logistics API stopped")


async def _value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Build the application with middleware and the versioned router.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    app = FastAPI(
        title="Event Logistics API",
        description="Address resolution and geocoding cache for event logistics maps and forms",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_exception_handler(ValueError, _value_error_handler)  # type: ignore[arg-type]
    setup_middleware(app, settings)
    app.include_router(create_router(settings))
    return app
