"""Exception handlers.

Contains the FastAPI exception handlers that turn exceptions into the JSON error body
``{"code": ..., "message": ..., "fields": {...}}``.
"""

from collections.abc import Sequence
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse, Response
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_manager.core.logging import get_logger
from recipe_manager.db.errors import translate_integrity_error
from recipe_manager.enums.error_code_enum import ErrorCodeEnum
from recipe_manager.exceptions.custom_exceptions import (
    DatabaseError,
    RecipeManagerError,
    TooManyRequestsError,
    ValidationFailedError,
)

_log = get_logger(__name__)

# Leading location segments FastAPI adds that clients never see
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}

_HTTP_STATUS_CODES = {
    HTTPStatus.NOT_FOUND: ErrorCodeEnum.NOT_FOUND,
    HTTPStatus.UNAUTHORIZED: ErrorCodeEnum.INVALID_CREDENTIALS,
    HTTPStatus.FORBIDDEN: ErrorCodeEnum.FORBIDDEN,
    HTTPStatus.UNPROCESSABLE_ENTITY: ErrorCodeEnum.VALIDATION_FAILED,
    HTTPStatus.TOO_MANY_REQUESTS: ErrorCodeEnum.TOO_MANY_REQUESTS,
}


def format_error_location(location: Sequence[Any]) -> str:
    """Turn a pydantic error location into a client-facing field path.

    ``("body", "recipeSections", 0, "name")`` becomes ``"recipeSections[0].name"``.
    """
    parts = list(location)
    if parts and parts[0] in _LOCATION_PREFIXES:
        if len(parts) == 1:
            return str(parts[0])
        parts = parts[1:]

    path = ""
    for part in parts:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path


def _error_response(
    error: RecipeManagerError,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    if error.get_status_code() == HTTPStatus.UNAUTHORIZED:
        headers = {**(headers or {}), "WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=error.get_status_code(),
        content=error.to_dict(),
        headers=headers,
    )


async def recipe_manager_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Render a :class:`RecipeManagerError` with its own code and status.

    Args:
        request: The incoming request that caused the exception.
        exc: The application error.

    Returns:
        JSONResponse with the error body.
    """
    error = exc if isinstance(exc, RecipeManagerError) else RecipeManagerError()
    if error.get_status_code() >= HTTPStatus.INTERNAL_SERVER_ERROR:
        _log.error(
            "{} on {} {}: {}",
            error.get_code().value,
            request.method,
            request.url.path,
            error.message,
        )
    else:
        _log.warning(
            "{} on {} {}: {}",
            error.get_code().value,
            request.method,
            request.url.path,
            error.message,
        )
    return _error_response(error)


async def request_validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Render request validation failures with one message per field.

    Args:
        request: The incoming request that failed validation.
        exc: The ``RequestValidationError`` raised by FastAPI.

    Returns:
        JSONResponse with status 422 and code ``VALIDATION_FAILED``.
    """
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    fields: dict[str, str] = {}
    for error in errors:
        fields.setdefault(format_error_location(error.get("loc", ())), error["msg"])
    _log.info("Validation failed on {}: {}", request.url.path, fields)
    return _error_response(ValidationFailedError(fields=fields))


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render unique and foreign key violations as 409 conflicts."""
    if not isinstance(exc, IntegrityError):
        return await database_exception_handler(request, exc)
    error = translate_integrity_error(exc)
    _log.warning(
        "Integrity violation on {} {}: {}",
        request.method,
        request.url.path,
        str(exc.orig),
    )
    return _error_response(error)


async def database_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render any other database failure as a 500 ``DATABASE_ERROR``."""
    _log.opt(exception=exc).error(
        "Database error on {} {}", request.method, request.url.path
    )
    return _error_response(DatabaseError())


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Render framework HTTP errors (unknown routes, bad methods) in the error shape."""
    if not isinstance(exc, StarletteHTTPException):
        return await unhandled_exception_handler(request, exc)
    code = _HTTP_STATUS_CODES.get(exc.status_code, ErrorCodeEnum.GENERAL_ERROR)
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": code.value, "message": str(exc.detail), "fields": {}},
        headers=getattr(exc, "headers", None),
    )


async def rate_limit_exception_handler(request: Request, exc: Exception) -> Response:
    """Render slowapi's rate limit error as a 429 ``TOO_MANY_REQUESTS``."""
    error = TooManyRequestsError(
        f"Rate limit exceeded: {exc.detail}"
        if isinstance(exc, RateLimitExceeded)
        else None
    )
    _log.warning("Rate limit hit by {} on {}", request.client, request.url.path)
    return _error_response(error)


async def unhandled_exception_handler(_request: Request, exc: Exception) -> Response:
    """Handle unhandled exceptions in the FastAPI application.

    Args:
        _request: The incoming request that caused the exception.
        exc: The exception that was raised.

    Raises:
        HTTPException: Re-raised unchanged so FastAPI renders it.

    Returns:
        JSONResponse with status 500 and code ``GENERAL_ERROR``.
    """
    if isinstance(exc, HTTPException):
        raise exc
    _log.opt(exception=exc).error("Unhandled exception occurred")
    return _error_response(RecipeManagerError())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler of this module to ``app``."""
    app.add_exception_handler(RecipeManagerError, recipe_manager_exception_handler)
    app.add_exception_handler(
        RequestValidationError, request_validation_exception_handler
    )
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
