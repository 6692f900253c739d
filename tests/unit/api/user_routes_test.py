"""Unit tests for the user administration endpoints."""

from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from recipe_manager.db.models import User
from tests.conftest import IsType


@pytest.fixture
def admin_headers(
    admin_user: User, auth_headers: Callable[[User], dict[str, str]]
) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def mock_send_mail() -> Iterator[MagicMock]:
    with patch("recipe_manager.services.user_service.send_mail") as mocked:
        yield mocked


def _user_body(**overrides: Any) -> dict[str, Any]:
    body: dict[str, Any] = {
        "username": "newcook",
        "password": "Kitchen123",
        "email": "newcook@example.com",
        "firstName": "New",
        "lastName": "Cook",
        "notifications": False,
        "roles": ["CREATOR"],
    }
    body.update(overrides)
    return body


class TestUserRoutes:
    """Unit tests for /user."""

    @pytest.mark.unit
    def test_create_user(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_send_mail: MagicMock,
    ) -> None:
        """Test that admins create unconfirmed accounts without exposing secrets."""
        # Act
        response = client.post("/api/user", json=_user_body(), headers=admin_headers)

        # Assert
        assert response.status_code == 201
        assert response.json() == {
            "id": IsType(int),
            "username": "newcook",
            "firstName": "New",
            "lastName": "Cook",
            "email": "newcook@example.com",
            "confirmed": False,
            "notifications": False,
            "roles": ["CREATOR"],
            "createdAt": IsType(str),
            "updatedAt": IsType(str),
        }
        mock_send_mail.assert_called_once()

    @pytest.mark.unit
    def test_invalid_user_fields(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_send_mail: MagicMock,
    ) -> None:
        """Test the message keys of username and password rules."""
        # Act
        response = client.post(
            "/api/user",
            json=_user_body(username="_cook", password="weakpassword"),
            headers=admin_headers,
        )

        # Assert
        assert response.status_code == 422
        assert response.json()["fields"] == {
            "username": "onlyAlphaNumeric",
            "password": "simplePassword",
        }
        mock_send_mail.assert_not_called()

    @pytest.mark.unit
    def test_duplicate_username(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        mock_send_mail: MagicMock,
    ) -> None:
        """Test that a taken username gets 409 UNIQUE_CONSTRAINT_ERROR."""
        # Act
        response = client.post(
            "/api/user", json=_user_body(username="admin"), headers=admin_headers
        )

        # Assert
        assert response.status_code == 409
        assert response.json()["fields"] == {"username": "not_unique"}

    @pytest.mark.unit
    def test_only_admins_manage_users(
        self,
        client: TestClient,
        creator_user: User,
        auth_headers: Callable[[User], dict[str, str]],
    ) -> None:
        """Test that non-admins cannot list users."""
        # Act
        response = client.get("/api/user", headers=auth_headers(creator_user))

        # Assert
        assert response.status_code == 403

    @pytest.mark.unit
    def test_list_update_and_delete(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        plain_user: User,
    ) -> None:
        """Test listing, role changes and deletion."""
        # Act
        listed = client.get("/api/user", headers=admin_headers)
        updated = client.put(
            f"/api/user/{plain_user.id}",
            json={
                "username": "reader",
                "email": "reader@example.com",
                "firstName": "Avid",
                "lastName": "Reader",
                "roles": ["CREATOR"],
                "updatePassword": False,
            },
            headers=admin_headers,
        )
        deleted = client.delete(f"/api/user/{plain_user.id}", headers=admin_headers)

        # Assert
        assert [u["username"] for u in listed.json()] == ["admin", "reader"]
        assert updated.json()["roles"] == ["CREATOR"]
        assert updated.json()["firstName"] == "Avid"
        assert deleted.status_code == 204

    @pytest.mark.unit
    def test_update_password_requires_password(
        self, client: TestClient, admin_headers: dict[str, str], plain_user: User
    ) -> None:
        """Test that updatePassword without a password is rejected."""
        # Act
        response = client.put(
            f"/api/user/{plain_user.id}",
            json={
                "username": "reader",
                "email": "reader@example.com",
                "firstName": None,
                "lastName": None,
                "updatePassword": True,
            },
            headers=admin_headers,
        )

        # Assert
        assert response.status_code == 422
        assert response.json()["fields"] == {"password": "required"}

    @pytest.mark.unit
    def test_resend_confirmation(
        self,
        client: TestClient,
        admin_headers: dict[str, str],
        user_factory: Callable[..., User],
        mock_send_mail: MagicMock,
    ) -> None:
        """Test that admins can resend the confirmation mail."""
        # Arrange
        pending = user_factory("pending", confirmed=False)

        # Act
        response = client.patch(
            f"/api/user/resendConfirmation/{pending.id}", headers=admin_headers
        )

        # Assert
        assert response.status_code == 204
        mock_send_mail.assert_called_once()

    @pytest.mark.unit
    def test_update_own_profile(
        self,
        client: TestClient,
        plain_user: User,
        auth_headers: Callable[[User], dict[str, str]],
    ) -> None:
        """Test that every user can edit their own profile."""
        # Act
        response = client.patch(
            "/api/user/updateProfile",
            json={"firstName": "Bookish", "lastName": "Reader", "notifications": True},
            headers=auth_headers(plain_user),
        )

        # Assert
        assert response.status_code == 200
        assert response.json()["firstName"] == "Bookish"
        assert response.json()["notifications"] is True
