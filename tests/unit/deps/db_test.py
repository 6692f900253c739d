"""Unit tests for the request-scoped session dependency."""

from unittest.mock import Mock, patch

import pytest
from sqlalchemy.orm import Session

from recipe_manager.deps.db import get_db


class TestGetDb:
    """Unit tests for get_db."""

    @pytest.mark.unit
    def test_yields_and_closes_session(self) -> None:
        """Test that the session is handed out once and closed afterwards."""
        # Arrange
        mock_session = Mock(spec=Session)
        mock_session_local = Mock(return_value=mock_session)

        # Act
        with patch("recipe_manager.deps.db.SessionLocal", mock_session_local):
            generator = get_db()
            session = next(generator)
            with pytest.raises(StopIteration):
                next(generator)

        # Assert
        assert session is mock_session
        mock_session_local.assert_called_once_with()
        mock_session.close.assert_called_once_with()

    @pytest.mark.unit
    def test_closes_session_when_request_fails(self) -> None:
        """Test that an error raised into the dependency still closes the session."""
        # Arrange
        mock_session = Mock(spec=Session)

        # Act
        with patch(
            "recipe_manager.deps.db.SessionLocal", Mock(return_value=mock_session)
        ):
            generator = get_db()
            next(generator)
            with pytest.raises(RuntimeError):
                generator.throw(RuntimeError("handler failed"))

        # Assert
        mock_session.close.assert_called_once_with()
        mock_session.commit.assert_not_called()
