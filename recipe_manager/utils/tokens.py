"""Token management utilities.

Issues and validates the HS256 JSON Web Tokens handed out at login. Access tokens
carry the user id and roles; refresh tokens carry the user id and a ``refresh`` flag
and are only accepted by the refresh endpoint.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from recipe_manager.core.config.config import get_settings
from recipe_manager.core.logging import get_logger
from recipe_manager.enums.role_enum import RoleEnum
from recipe_manager.exceptions.custom_exceptions import (
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
)

_log = get_logger(__name__)
settings = get_settings()

ALGORITHM = "HS256"
BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class TokenClaims:
    """Decoded claims of a token issued by this service."""

    user_id: int
    roles: list[RoleEnum] = field(default_factory=list)
    refresh: bool = False


@dataclass(frozen=True)
class TokenPair:
    token: str
    refresh_token: str


def _encode(payload: dict[str, Any], lifetime: timedelta) -> str:
    now = datetime.now(UTC)
    claims = {**payload, "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, settings.token_sign_key, algorithm=ALGORITHM)


def create_access_token(user_id: int, roles: list[RoleEnum]) -> str:
    return _encode(
        {"userId": user_id, "roles": [role.value for role in roles]},
        timedelta(minutes=settings.token_validity_minutes),
    )


def create_refresh_token(user_id: int) -> str:
    return _encode(
        {"userId": user_id, "refresh": True},
        timedelta(days=settings.refresh_token_validity_days),
    )


def create_token_pair(user_id: int, roles: list[RoleEnum]) -> TokenPair:
    """Issue a fresh access token and refresh token for a user."""
    return TokenPair(
        token=create_access_token(user_id, roles),
        refresh_token=create_refresh_token(user_id),
    )


def decode_token(token: str) -> TokenClaims:
    """Decode and validate a token issued by this service.

    Args:
        token: The encoded JWT.

    Returns:
        TokenClaims: The user id, roles and refresh flag of the token.

    Raises:
        ExpiredTokenError: If the token has expired.
        InvalidTokenError: If the token is malformed, has a bad signature or lacks
            the ``userId`` claim.
    """
    try:
        payload = jwt.decode(
            token,
            settings.token_sign_key,
            algorithms=[ALGORITHM],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as e:
        _log.warning("Token has expired")
        raise ExpiredTokenError() from e
    except jwt.InvalidTokenError as e:
        _log.warning("Token validation failed: {}", str(e))
        raise InvalidTokenError() from e

    user_id = payload.get("userId")
    if not isinstance(user_id, int):
        raise InvalidTokenError("Token carries no user")
    try:
        roles = [RoleEnum(role) for role in payload.get("roles", [])]
    except ValueError as e:
        raise InvalidTokenError("Token carries an unknown role") from e
    return TokenClaims(
        user_id=user_id,
        roles=roles,
        refresh=bool(payload.get("refresh", False)),
    )


def extract_bearer_token(authorization_header: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    Raises:
        InvalidCredentialsError: If the header is missing or not a bearer header.
    """
    if not authorization_header:
        raise InvalidCredentialsError("Missing authorization header")
    parts = authorization_header.split()
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise InvalidCredentialsError("Malformed authorization header")
    return parts[1]
