"""Password hashing and bearer-token authentication."""

import bcrypt
from fastapi import Request

from recipe_manager.core.logging import get_logger
from recipe_manager.exceptions.custom_exceptions import InvalidCredentialsError
from recipe_manager.utils.tokens import TokenClaims, decode_token, extract_bearer_token

_log = get_logger(__name__)

BCRYPT_ROUNDS = 12


def hash_password(password: str) -> str:
    """Hash a password with bcrypt.

    Returns:
        str: The 60 character bcrypt hash.
    """
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        _log.warning("Stored password hash could not be parsed")
        return False


def authenticate_request(request: Request) -> TokenClaims:
    """Validate the access token sent with a request.

    Args:
        request: The incoming request.

    Returns:
        TokenClaims: Claims of the caller's access token.

    Raises:
        InvalidCredentialsError: If the header is missing or malformed, or a refresh
            token is presented.
        ExpiredTokenError: If the token has expired.
        InvalidTokenError: If the token cannot be validated.
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    claims = decode_token(token)
    if claims.refresh:
        _log.warning(
            "Refresh token presented as access token for user {}", claims.user_id
        )
        raise InvalidCredentialsError("Refresh token cannot be used for requests")
    return claims
