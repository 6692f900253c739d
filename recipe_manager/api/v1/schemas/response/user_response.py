"""Responses of the user administration endpoints."""

from datetime import datetime

from pydantic import Field

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.enums.role_enum import RoleEnum


class UserResponse(BaseSchema):
    """An account as shown to administrators; secrets are never included."""

    id: int
    username: str
    first_name: str | None
    last_name: str | None
    email: str
    confirmed: bool
    notifications: bool
    roles: list[RoleEnum] = Field(validation_alias="role_names")
    created_at: datetime
    updated_at: datetime
