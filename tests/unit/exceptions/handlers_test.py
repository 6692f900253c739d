"""Unit tests for exception handlers."""

import json
from unittest.mock import Mock, patch

import pytest
from fastapi import Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError

from recipe_manager.exceptions.custom_exceptions import (
    InvalidCredentialsError,
    NotFoundError,
)
from recipe_manager.exceptions.handlers import (
    database_exception_handler,
    format_error_location,
    integrity_error_handler,
    recipe_manager_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)


def _request() -> Request:
    request = Mock(spec=Request)
    request.method = "PUT"
    request.url.path = "/api/recipe/1"
    return request


def _body(response: JSONResponse) -> dict:
    return json.loads(bytes(response.body).decode())


class TestFormatErrorLocation:
    """Unit tests for format_error_location()."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            (("body", "recipeSections", 0, "name"), "recipeSections[0].name"),
            (("body", "tags", 2), "tags[2]"),
            (("query", "page"), "page"),
            (("body",), "body"),
            (("password",), "password"),
        ],
    )
    def test_paths(self, location: tuple, expected: str) -> None:
        """Test conversion of pydantic locations into field paths."""
        assert format_error_location(location) == expected


class TestRecipeManagerExceptionHandler:
    """Unit tests for the application error handler."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        """Test that errors render with their own status and code."""
        # Act
        response = await recipe_manager_exception_handler(
            _request(), NotFoundError("Recipe", 1)
        )

        # Assert
        assert response.status_code == 404
        assert _body(response)["code"] == "NOT_FOUND"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unauthorized_adds_challenge(self) -> None:
        """Test that 401 responses carry a bearer challenge."""
        # Act
        response = await recipe_manager_exception_handler(
            _request(), InvalidCredentialsError()
        )

        # Assert
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"


class TestRequestValidationExceptionHandler:
    """Unit tests for the validation error handler."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fields_keyed_by_path(self) -> None:
        """Test that each failing field gets its first message."""
        # Arrange
        exc = RequestValidationError(
            [
                {"loc": ("body", "name"), "msg": "too long", "type": "x"},
                {"loc": ("body", "name"), "msg": "second", "type": "x"},
                {
                    "loc": ("body", "recipeSections", 1, "sortNumber"),
                    "msg": "too small",
                    "type": "x",
                },
            ]
        )

        # Act
        response = await request_validation_exception_handler(_request(), exc)

        # Assert
        assert response.status_code == 422
        assert _body(response) == {
            "code": "VALIDATION_FAILED",
            "message": "Validation failed",
            "fields": {"name": "too long", "recipeSections[1].sortNumber": "too small"},
        }


class TestDatabaseHandlers:
    """Unit tests for the database error handlers."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unique_violation_is_conflict(self) -> None:
        """Test that unique violations become 409 UNIQUE_CONSTRAINT_ERROR."""
        # Arrange
        exc = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: recipes.name")
        )

        # Act
        response = await integrity_error_handler(_request(), exc)

        # Assert
        assert response.status_code == 409
        assert _body(response)["code"] == "UNIQUE_CONSTRAINT_ERROR"
        assert _body(response)["fields"] == {"name": "not_unique"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_other_database_error(self) -> None:
        """Test that other SQLAlchemy errors become 500 DATABASE_ERROR."""
        # Arrange
        exc = OperationalError("SELECT 1", {}, Exception("connection lost"))

        # Act
        with patch("recipe_manager.exceptions.handlers._log"):
            response = await database_exception_handler(_request(), exc)

        # Assert
        assert response.status_code == 500
        assert _body(response)["code"] == "DATABASE_ERROR"


class TestUnhandledExceptionHandler:
    """Unit tests for the unhandled exception handler."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unhandled_exception_handler_with_http_exception(self) -> None:
        """Test that HTTPExceptions are re-raised without modification."""
        # Arrange
        http_exception = HTTPException(status_code=404, detail="Not found")

        # Act & Assert
        with pytest.raises(HTTPException) as exc_info:
            await unhandled_exception_handler(_request(), http_exception)
        assert exc_info.value == http_exception

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unhandled_exception_handler_with_generic_exception(self) -> None:
        """Test that generic exceptions return a 500 GENERAL_ERROR response."""
        # Arrange
        generic_exception = ValueError("Something went wrong")

        # Act
        with patch("recipe_manager.exceptions.handlers._log") as mock_logger:
            response = await unhandled_exception_handler(_request(), generic_exception)

        # Assert
        assert response.status_code == 500
        assert _body(response)["code"] == "GENERAL_ERROR"
        mock_logger.opt.assert_called_once_with(exception=generic_exception)
        mock_logger.opt.return_value.error.assert_called_once_with(
            "Unhandled exception occurred"
        )
