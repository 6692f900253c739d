"""Unit tests for the request ID middleware."""

import uuid
from unittest.mock import AsyncMock, Mock, patch

import pytest
from starlette.requests import Request
from starlette.responses import Response

from recipe_manager.middleware.request_id_middleware import (
    MAX_REQUEST_ID_LENGTH,
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    resolve_request_id,
)


class TestResolveRequestId:
    """Unit tests for resolve_request_id()."""

    @pytest.mark.unit
    def test_keeps_usable_incoming_id(self) -> None:
        """Test that a sane caller supplied id is reused."""
        assert resolve_request_id("abc-123") == "abc-123"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "incoming", [None, "", "x" * (MAX_REQUEST_ID_LENGTH + 1), "bad\nid"]
    )
    def test_replaces_unusable_id(self, incoming: str | None) -> None:
        """Test that missing, oversized or unprintable ids get a fresh UUID."""
        # Act
        request_id = resolve_request_id(incoming)

        # Assert
        assert uuid.UUID(request_id).version == 4


class TestRequestIDMiddleware:
    """Unit tests for the RequestIDMiddleware class."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_dispatch_with_existing_request_id(self) -> None:
        """Test dispatch method when request already has a request ID."""
        # Arrange
        middleware = RequestIDMiddleware(Mock())

        request = Mock(spec=Request)
        request.headers = {REQUEST_ID_HEADER: "existing-id-123"}
        request.state = Mock()

        response = Mock(spec=Response)
        response.headers = {}
        call_next = AsyncMock(return_value=response)

        # Act
        with patch(
            "recipe_manager.middleware.request_id_middleware.logger"
        ) as mock_logger:
            mock_logger.contextualize.return_value.__enter__ = Mock(return_value=None)
            mock_logger.contextualize.return_value.__exit__ = Mock(return_value=None)

            result = await middleware.dispatch(request, call_next)

        # Assert
        assert request.state.request_id == "existing-id-123"
        assert result.headers[REQUEST_ID_HEADER] == "existing-id-123"
        call_next.assert_called_once_with(request)
        mock_logger.contextualize.assert_called_once_with(request_id="existing-id-123")

    @pytest.mark.unit
    def test_header_echoed_by_application(self, client) -> None:  # noqa: ANN001
        """Test that the application answers with a request id header."""
        # Act
        response = client.get("/api/health")

        # Assert
        assert uuid.UUID(response.headers[REQUEST_ID_HEADER])
