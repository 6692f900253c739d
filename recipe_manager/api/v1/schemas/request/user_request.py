"""Request bodies of the user administration and profile endpoints."""

from typing import Annotated

from pydantic import (
    AfterValidator,
    BeforeValidator,
    EmailStr,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.api.v1.schemas.request.auth_request import StrongPassword
from recipe_manager.enums.role_enum import RoleEnum
from recipe_manager.utils.validators import (
    normalize_username,
    validate_strong_password,
    validate_username,
)

Username = Annotated[
    str,
    BeforeValidator(normalize_username),
    Field(min_length=4, max_length=50),
    AfterValidator(validate_username),
]
PersonName = Annotated[str, Field(min_length=3, max_length=50)]


class CreateUserRequest(BaseSchema):
    """New account created by an administrator.

    The account stays unconfirmed until its owner follows the emailed link.
    """

    username: Username
    password: StrongPassword
    email: EmailStr
    first_name: PersonName | None
    last_name: PersonName | None
    notifications: bool = False
    roles: list[RoleEnum] = Field(default_factory=list)


class UpdateUserRequest(BaseSchema):
    """Replacement of an account's data; the password only when asked for."""

    username: Username
    email: EmailStr
    first_name: PersonName | None
    last_name: PersonName | None
    roles: list[RoleEnum] = Field(default_factory=list)
    update_password: bool
    password: str | None = Field(None, max_length=255, validate_default=True)

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str | None, info: ValidationInfo) -> str | None:
        if not info.data.get("update_password"):
            return value
        if value is None:
            raise PydanticCustomError("missing_password", "required")
        return validate_strong_password(value)


class UpdateProfileRequest(BaseSchema):
    first_name: PersonName | None
    last_name: PersonName | None
    notifications: bool
