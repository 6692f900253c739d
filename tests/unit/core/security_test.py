"""Unit tests for password hashing and request authentication."""

from unittest.mock import Mock

import pytest
from fastapi import Request

from recipe_manager.core.security import (
    authenticate_request,
    hash_password,
    verify_password,
)
from recipe_manager.enums.role_enum import RoleEnum
from recipe_manager.exceptions.custom_exceptions import InvalidCredentialsError
from recipe_manager.utils.tokens import create_access_token, create_refresh_token


def _request(authorization: str | None) -> Request:
    request = Mock(spec=Request)
    request.headers = {"Authorization": authorization} if authorization else {}
    return request


class TestPasswords:
    """Unit tests for bcrypt hashing."""

    @pytest.mark.unit
    def test_hash_and_verify(self) -> None:
        """Test that a hash verifies its own password only."""
        # Act
        password_hash = hash_password("Secret123")

        # Assert
        assert len(password_hash) == 60
        assert verify_password("Secret123", password_hash)
        assert not verify_password("Secret124", password_hash)

    @pytest.mark.unit
    def test_malformed_hash(self) -> None:
        """Test that an unparsable stored hash fails verification."""
        assert verify_password("Secret123", "not-a-bcrypt-hash") is False


class TestAuthenticateRequest:
    """Unit tests for authenticate_request()."""

    @pytest.mark.unit
    def test_access_token(self) -> None:
        """Test that a valid access token yields its claims."""
        # Arrange
        token = create_access_token(9, [RoleEnum.CREATOR])

        # Act
        claims = authenticate_request(_request(f"Bearer {token}"))

        # Assert
        assert claims.user_id == 9
        assert claims.roles == [RoleEnum.CREATOR]

    @pytest.mark.unit
    def test_refresh_token_rejected(self) -> None:
        """Test that refresh tokens cannot authorize requests."""
        # Arrange
        token = create_refresh_token(9)

        # Act & Assert
        with pytest.raises(InvalidCredentialsError):
            authenticate_request(_request(f"Bearer {token}"))

    @pytest.mark.unit
    def test_missing_header(self) -> None:
        """Test that requests without a header are rejected."""
        with pytest.raises(InvalidCredentialsError):
            authenticate_request(_request(None))
