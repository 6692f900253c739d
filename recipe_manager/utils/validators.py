"""Input validation utilities.

Field checks shared by the account schemas. They raise ``PydanticCustomError`` so the
message key ends up verbatim in the ``fields`` of a validation error response.
"""

import re

from pydantic_core import PydanticCustomError

STRONG_PASSWORD = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])(?=.{8,})")
USERNAME_START = re.compile(r"^[a-z0-9]+")

SIMPLE_PASSWORD = "simplePassword"
ONLY_ALPHA_NUMERIC = "onlyAlphaNumeric"


def validate_strong_password(value: str) -> str:
    """Require eight or more characters mixing lower case, upper case and digits.

    Raises:
        PydanticCustomError: With message ``simplePassword``.
    """
    if not STRONG_PASSWORD.match(value):
        raise PydanticCustomError("simple_password", SIMPLE_PASSWORD)
    return value


def normalize_username(value: object) -> object:
    """Trim and lower-case a submitted username before length checks run."""
    if isinstance(value, str):
        return value.strip().lower()
    return value


def validate_username(value: str) -> str:
    """Require the username to start with a letter or digit.

    Raises:
        PydanticCustomError: With message ``onlyAlphaNumeric``.
    """
    if not USERNAME_START.match(value):
        raise PydanticCustomError("only_alpha_numeric", ONLY_ALPHA_NUMERIC)
    return value
