"""Request ID middleware.

Tags every request with an identifier that is echoed back to the client and attached
to all log lines emitted while the request is handled.
"""

import uuid
from collections.abc import Awaitable, Callable

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_CONTEXT_KEY = "request_id"

# Incoming ids longer than this are replaced rather than logged verbatim
MAX_REQUEST_ID_LENGTH = 128


def resolve_request_id(incoming: str | None) -> str:
    """Return the caller's request id when usable, else a fresh UUID4."""
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH and incoming.isprintable():
        return incoming
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assign a request id, expose it on ``request.state`` and in the response."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Run the request inside a Loguru context carrying its id.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or route handler.

        Returns:
            Response: The downstream response with the request id header set.
        """
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        with logger.contextualize(**{REQUEST_ID_CONTEXT_KEY: request_id}):
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
