"""Error body shared by every failing endpoint."""

from pydantic import Field

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.enums.error_code_enum import ErrorCodeEnum


class ErrorResponse(BaseSchema):
    """Body of an error response.

    ``fields`` maps a request field path, e.g. ``recipeSections[0].name``, to a
    message describing what is wrong with it.
    """

    code: ErrorCodeEnum
    message: str
    fields: dict[str, str] = Field(default_factory=dict)


def error_responses(*statuses: int) -> dict[int | str, dict]:
    """Build the ``responses`` argument documenting error statuses of a route."""
    return {status: {"model": ErrorResponse} for status in statuses}
