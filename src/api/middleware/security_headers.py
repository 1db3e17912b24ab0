"""Middleware adding browser security headers to every response."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.core.constants import DEFAULT_HSTS_MAX_AGE

STATIC_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def build_hsts_header(
    max_age: int = DEFAULT_HSTS_MAX_AGE,
    *,
    include_subdomains: bool = True,
    preload: bool = False,
) -> str:
    """Build a Strict-Transport-Security header value."""
    parts = [f"max-age={max_age}"]
    if include_subdomains:
        parts.append("includeSubDomains")
    if preload:
        parts.append("preload")
    return "; ".join(parts)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add the static security headers, plus HSTS when enabled.

    HSTS is only meaningful behind TLS, so the application enables it in
    production and leaves it off for local development.

    Args:
        app: The ASGI application to wrap.
        hsts_enabled: Whether to send Strict-Transport-Security.
        hsts_max_age: HSTS max-age in seconds.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        hsts_enabled: bool = False,
        hsts_max_age: int = DEFAULT_HSTS_MAX_AGE,
    ) -> None:
        super().__init__(app)
        self.headers = dict(STATIC_SECURITY_HEADERS)
        if hsts_enabled:
            self.headers["Strict-Transport-Security"] = build_hsts_header(
                hsts_max_age
            )

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers.setdefault(name, value)
        return response
