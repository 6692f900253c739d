"""Request bodies of the authentication endpoints."""

from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, EmailStr, Field

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.utils.validators import validate_strong_password

StrongPassword = Annotated[
    str,
    Field(min_length=8, max_length=255),
    AfterValidator(validate_strong_password),
]


class LoginRequest(BaseSchema):
    username: str = Field(..., max_length=50)
    password: str = Field(..., max_length=255)


class RefreshTokenRequest(BaseSchema):
    refresh_token: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseSchema):
    password: str = Field(..., max_length=255)
    new_password: StrongPassword


class ConfirmAccountRequest(BaseSchema):
    username: str = Field(..., max_length=50)
    key: UUID


class ResetLinkRequest(BaseSchema):
    email: EmailStr


class ResetPasswordRequest(BaseSchema):
    username: str = Field(..., max_length=50)
    key: UUID
    new_password: StrongPassword
