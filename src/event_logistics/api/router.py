"""Versioned API router and middleware wiring."""

from fastapi import APIRouter, FastAPI

from event_logistics.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware, setup_cors
from event_logistics.api.v1.geocoding import geocoding_router
from event_logistics.core.config import Settings


def create_router(settings: Settings) -> APIRouter:
    """Mount the geocoding endpoints under ``settings.api_v1_prefix``."""
    router = APIRouter(prefix=settings.api_v1_prefix)
    router.include_router(geocoding_router)
    return router


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Register middleware; the last one added runs first.

    Only the geocoding routes are throttled, since every miss there can
    cost a call to the external lookup service.
    """
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_minute=settings.rate_limit_per_minute,
        trusted_proxy_headers=settings.trusted_proxy_header_list,
        path_prefixes=(f"{settings.api_v1_prefix}{geocoding_router.prefix}",),
    )
    app.add_middleware(SecurityHeadersMiddleware)
    setup_cors(app, settings)
