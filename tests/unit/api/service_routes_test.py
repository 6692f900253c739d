"""Unit tests for health probes, metrics and the internal application."""

from collections.abc import Callable
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from recipe_manager.db.models import Category, Recipe, User


class TestHealthRoutes:
    """Unit tests for the probes of the public application."""

    @pytest.mark.unit
    def test_liveness(self, client: TestClient) -> None:
        """Test that the liveness probe answers without authentication."""
        # Act
        response = client.get("/api/health")

        # Assert
        assert response.status_code == 200
        assert response.text == "ok"
        assert response.headers["X-Content-Type-Options"] == "nosniff"

    @pytest.mark.unit
    def test_readiness_with_database_down(self, client: TestClient) -> None:
        """Test that the readiness probe reports 503 without a database."""
        # Act
        with patch(
            "recipe_manager.api.v1.routes.health.check_database_health",
            return_value=False,
        ):
            response = client.get("/api/health/ready")

        # Assert
        assert response.status_code == 503

    @pytest.mark.unit
    def test_unknown_route(self, client: TestClient) -> None:
        """Test that unknown routes use the error body."""
        # Act
        response = client.get("/api/nothing-here")

        # Assert
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    @pytest.mark.unit
    def test_metrics_are_exposed(self, client: TestClient) -> None:
        """Test that Prometheus metrics are served."""
        # Arrange
        client.get("/api/health")

        # Act
        response = client.get("/metrics")

        # Assert
        assert response.status_code == 200
        assert "health_checks_total" in response.text


class TestInternalApplication:
    """Unit tests for the internal job endpoints."""

    @pytest.mark.unit
    def test_send_notifications(
        self,
        internal_client: TestClient,
        db_session: Session,
        category: Category,
        user_factory: Callable[..., User],
    ) -> None:
        """Test that the job mails subscribers about new recipes."""
        # Arrange
        author = user_factory("author")
        user_factory("follower", notifications=True)
        db_session.add(
            Recipe(
                name="Fresh bread",
                name_search="fresh bread",
                sources=[],
                category_id=category.id,
                creator_id=author.id,
                modifier_id=author.id,
            )
        )
        db_session.commit()

        # Act
        with patch(
            "recipe_manager.services.notification_service.send_mail"
        ) as mock_send_mail:
            response = internal_client.post("/internal/sendNotifications")

        # Assert
        assert response.status_code == 204
        mock_send_mail.assert_called_once()
        assert mock_send_mail.call_args.args[0].to == "follower@example.com"

    @pytest.mark.unit
    def test_internal_health(self, internal_client: TestClient) -> None:
        """Test the internal application's probe."""
        assert internal_client.get("/internal/health").text == "ok"
