"""Unit tests for the response headers middleware."""

from unittest.mock import AsyncMock, Mock

import pytest
from starlette.requests import Request
from starlette.responses import Response

from recipe_manager.middleware.response_headers_middleware import (
    PROCESS_TIME_HEADER,
    SECURITY_HEADERS,
    ResponseHeadersMiddleware,
)


def _request(path: str) -> Request:
    request = Mock(spec=Request)
    request.url.path = path
    return request


class TestResponseHeadersMiddleware:
    """Unit tests for the ResponseHeadersMiddleware class."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_adds_timing_and_security_headers(self) -> None:
        """Test that every hardening header and the process time are set."""
        # Arrange
        middleware = ResponseHeadersMiddleware(Mock(), docs_prefix="/api/api-docs")
        call_next = AsyncMock(return_value=Response("ok"))

        # Act
        response = await middleware.dispatch(_request("/api/recipe/1"), call_next)

        # Assert
        assert response.headers[PROCESS_TIME_HEADER].endswith("ms")
        for header, value in SECURITY_HEADERS.items():
            assert response.headers[header] == value
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_docs_get_relaxed_policy(self) -> None:
        """Test that the docs UI may load its CDN assets."""
        # Arrange
        middleware = ResponseHeadersMiddleware(Mock(), docs_prefix="/api/api-docs")
        call_next = AsyncMock(return_value=Response("<html></html>"))

        # Act
        response = await middleware.dispatch(_request("/api/api-docs"), call_next)

        # Assert
        assert "cdn.jsdelivr.net" in response.headers["Content-Security-Policy"]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_keeps_headers_set_downstream(self) -> None:
        """Test that a route's own security header is not overwritten."""
        # Arrange
        middleware = ResponseHeadersMiddleware(Mock())
        call_next = AsyncMock(
            return_value=Response("ok", headers={"X-Frame-Options": "SAMEORIGIN"})
        )

        # Act
        response = await middleware.dispatch(_request("/api/health"), call_next)

        # Assert
        assert response.headers["X-Frame-Options"] == "SAMEORIGIN"
