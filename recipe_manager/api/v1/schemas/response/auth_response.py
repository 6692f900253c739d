"""Responses of the authentication endpoints."""

from recipe_manager.api.v1.schemas.base_schema import BaseSchema


class TokenResponse(BaseSchema):
    """Access token for requests plus the refresh token used to renew it."""

    token: str
    refresh_token: str
