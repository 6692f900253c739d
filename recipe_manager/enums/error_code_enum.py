"""Enum for API error codes.

Every error response carries one of these codes in its ``code`` field.
"""

from enum import Enum


class ErrorCodeEnum(str, Enum):
    """Machine readable error codes returned to API clients."""

    GENERAL_ERROR = "GENERAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    FORBIDDEN = "FORBIDDEN"
    EXPIRED_TOKEN = "EXPIRED_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    UNIQUE_CONSTRAINT_ERROR = "UNIQUE_CONSTRAINT_ERROR"
    CONSTRAINT_FAILED = "CONSTRAINT_FAILED"
    UNABLE_TO_SEND_EMAIL = "UNABLE_TO_SEND_EMAIL"
    ACCOUNT_DOESNT_EXIST = "ACCOUNT_DOESNT_EXIST"
    TOO_MANY_REQUESTS = "TOO_MANY_REQUESTS"
