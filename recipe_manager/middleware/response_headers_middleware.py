"""Middleware adding timing and hardening headers to every response."""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

PROCESS_TIME_HEADER = "X-Process-Time"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}

# The interactive docs load their assets from a CDN
_DOCS_CSP = (
    "default-src 'self'; img-src 'self' data: https://fastapi.tiangolo.com; "
    "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
    "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net"
)
_API_CSP = "default-src 'none'; img-src 'self'; frame-ancestors 'none'"


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp the processing time and security headers on responses."""

    def __init__(self, app: ASGIApp, docs_prefix: str | None = None) -> None:
        super().__init__(app)
        self.docs_prefix = docs_prefix

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Time the downstream call and decorate its response.

        Args:
            request: The incoming request
            call_next: The next middleware/handler in chain

        Returns:
            Response with timing and security headers
        """
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        response.headers[PROCESS_TIME_HEADER] = f"{elapsed_ms:.2f}ms"
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        serves_docs = self.docs_prefix is not None and request.url.path.startswith(
            self.docs_prefix
        )
        response.headers["Content-Security-Policy"] = (
            _DOCS_CSP if serves_docs else _API_CSP
        )
        return response
