"""HTTP middleware: CORS for the map and form front-ends, response hardening, and a lookup throttle."""

import time
from collections import defaultdict, deque

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from event_logistics.core.config import Settings

WINDOW_SECONDS = 60.0

_FALLBACK_PROXY_HEADERS = ("CF-Connecting-IP", "X-Forwarded-For", "X-Real-IP")

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "Referrer-Policy": "no-referrer",
}


def get_client_ip(request: Request, trusted_headers: list[str] | None = None) -> str:
    """Identify the caller for throttling purposes.

    The first non-empty trusted header wins; ``X-Forwarded-For`` contributes
    its leftmost hop.  Without a usable header the socket peer is used.

    Args:
        request: The incoming request.
        trusted_headers: Header names in priority order.  An empty list
            disables proxy headers entirely.

    Returns:
        The client address, or ``"unknown"`` when there is no peer.
    """
    names = _FALLBACK_PROXY_HEADERS if trusted_headers is None else trusted_headers
    for name in names:
        raw = request.headers.get(name, "").strip()
        if raw:
            return raw.split(",", 1)[0].strip() if name.lower() == "x-forwarded-for" else raw

    return request.client.host if request.client else "unknown"


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the configured origins to call the read and cache endpoints.

    The API carries no credentials, so cookies are not allowed across origins.
    """
    origin_regex = settings.cors_origin_regex.strip() or None
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_origin_regex=origin_regex,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp hardening headers onto every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers.update(_SECURITY_HEADERS)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding-window throttle for lookup-backed routes.

    Only requests whose path starts with one of ``path_prefixes`` are
    counted, so autocomplete keystrokes cannot exhaust the public lookup
    service's usage policy while other routes stay open.  Counters live in
    process memory.
    """

    def __init__(
        self,
        app: ASGIApp,
        requests_per_minute: int = 60,
        trusted_proxy_headers: list[str] | None = None,
        path_prefixes: tuple[str, ...] = ("/",),
    ) -> None:
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.trusted_proxy_headers = trusted_proxy_headers
        self.path_prefixes = path_prefixes
        self._hits: defaultdict[str, deque[float]] = defaultdict(deque)
        self._last_sweep = 0.0

    def _sweep(self, now: float) -> None:
        """Forget clients with no hit inside the current window."""
        cutoff = now - WINDOW_SECONDS
        for client in [c for c, hits in self._hits.items() if not hits or hits[-1] <= cutoff]:
            del self._hits[client]
        self._last_sweep = now

    def _admit(self, client: str, now: float) -> bool:
        if now - self._last_sweep >= WINDOW_SECONDS:
            self._sweep(now)
        hits = self._hits[client]
        while hits and hits[0] <= now - WINDOW_SECONDS:
            hits.popleft()
        if len(hits) >= self.requests_per_minute:
            return False
        hits.append(now)
        return True

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path.startswith(self.path_prefixes):
            client = get_client_ip(request, self.trusted_proxy_headers)
            if not self._admit(client, time.time()):
                return Response(
                    content='{"detail":"Rate limit exceeded"}',
                    status_code=429,
                    media_type="application/json",
                    headers={"Retry-After": str(int(WINDOW_SECONDS))},
                )
        return await call_next(request)
