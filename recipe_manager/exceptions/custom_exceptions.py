"""Custom exception classes.

Every error the service reports to clients is a :class:`RecipeManagerError`. Each
subclass fixes the error code and HTTP status; instances add a message and, where it
helps the client, per-field messages.
"""

from http import HTTPStatus
from typing import Any

from recipe_manager.enums.error_code_enum import ErrorCodeEnum


class RecipeManagerError(Exception):
    """Base class for errors that map onto an API error response."""

    code: ErrorCodeEnum = ErrorCodeEnum.GENERAL_ERROR
    status_code: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "Unexpected error"

    def __init__(
        self,
        message: str | None = None,
        fields: dict[str, str] | None = None,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human readable description; defaults to the class message.
            fields: Optional mapping of request field path to message key.
        """
        self.message = message or self.default_message
        self.fields = dict(fields or {})
        super().__init__(self.message)

    def get_code(self) -> ErrorCodeEnum:
        """Get the error code reported to the client."""
        return self.code

    def get_status_code(self) -> HTTPStatus:
        """Get the HTTP status of the error response."""
        return self.status_code

    def get_fields(self) -> dict[str, str]:
        """Get the per-field messages."""
        return self.fields

    def to_dict(self) -> dict[str, Any]:
        """Render the error as the JSON body sent to the client.

        Returns:
            dict[str, Any]: ``code``, ``message`` and ``fields`` of the error.
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "fields": self.fields,
        }


class DatabaseError(RecipeManagerError):
    """Raised when the database fails in a way clients cannot act on."""

    code = ErrorCodeEnum.DATABASE_ERROR
    default_message = "Database error"


class NotFoundError(RecipeManagerError):
    """Raised when a requested or referenced row does not exist."""

    code = ErrorCodeEnum.NOT_FOUND
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Not found"

    def __init__(self, resource: str, identifier: Any = None) -> None:
        """Initialize the exception with the missing resource.

        Args:
            resource: Name of the entity that was looked up, e.g. ``"Recipe"``.
            identifier: The id (or ids) that did not match.
        """
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            message = f"{resource} not found"
        else:
            message = f"{resource} {identifier} not found"
        super().__init__(message)

    def get_resource(self) -> str:
        return self.resource

    def get_identifier(self) -> Any:
        return self.identifier


class ValidationFailedError(RecipeManagerError):
    """Raised when input passes schema validation but is still unusable."""

    code = ErrorCodeEnum.VALIDATION_FAILED
    status_code = HTTPStatus.UNPROCESSABLE_ENTITY
    default_message = "Validation failed"


class InvalidCredentialsError(RecipeManagerError):
    """Raised for a missing or malformed bearer header and for failed logins."""

    code = ErrorCodeEnum.INVALID_CREDENTIALS
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Invalid credentials"


class ExpiredTokenError(RecipeManagerError):
    """Raised when a token's ``exp`` claim lies in the past."""

    code = ErrorCodeEnum.EXPIRED_TOKEN
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Token has expired"


class InvalidTokenError(RecipeManagerError):
    """Raised when a token cannot be decoded or its signature does not match."""

    code = ErrorCodeEnum.INVALID_TOKEN
    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Invalid token"


class ForbiddenError(RecipeManagerError):
    """Raised when an authenticated user lacks every role a route accepts."""

    code = ErrorCodeEnum.FORBIDDEN
    status_code = HTTPStatus.FORBIDDEN
    default_message = "Insufficient permissions"


class UniqueConstraintError(RecipeManagerError):
    """Raised when a write would duplicate a unique value."""

    code = ErrorCodeEnum.UNIQUE_CONSTRAINT_ERROR
    status_code = HTTPStatus.CONFLICT
    default_message = "Value already exists"


class ConstraintFailedError(RecipeManagerError):
    """Raised when a write breaks a foreign key or another integrity rule."""

    code = ErrorCodeEnum.CONSTRAINT_FAILED
    status_code = HTTPStatus.CONFLICT
    default_message = "Referenced row is missing or still in use"


class UnableToSendEmailError(RecipeManagerError):
    """Raised when the mail server refuses a message."""

    code = ErrorCodeEnum.UNABLE_TO_SEND_EMAIL
    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    default_message = "Unable to send email"

    def __init__(self, recipients: list[str] | None = None) -> None:
        """Initialize the exception with the refused recipients.

        Args:
            recipients: Addresses the mail server rejected.
        """
        self.recipients = list(recipients or [])
        super().__init__()

    def get_recipients(self) -> list[str]:
        return self.recipients


class AccountDoesntExistError(RecipeManagerError):
    """Raised when a password reset targets an unknown or unconfirmed account."""

    code = ErrorCodeEnum.ACCOUNT_DOESNT_EXIST
    status_code = HTTPStatus.NOT_FOUND
    default_message = "Account doesn't exist"


class TooManyRequestsError(RecipeManagerError):
    """Rendered when a client exceeds the configured rate limit."""

    code = ErrorCodeEnum.TOO_MANY_REQUESTS
    status_code = HTTPStatus.TOO_MANY_REQUESTS
    default_message = "Too many requests"
