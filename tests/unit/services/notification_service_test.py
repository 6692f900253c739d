"""Unit tests for new-recipe notifications."""

from collections.abc import Callable, Iterator
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy import update
from sqlalchemy.orm import Session

from recipe_manager.db.models import Category, Recipe, User
from recipe_manager.services.notification_service import (
    NewRecipe,
    find_new_recipes,
    send_notifications,
)


@pytest.fixture
def mock_send_mail() -> Iterator[MagicMock]:
    with patch("recipe_manager.services.notification_service.send_mail") as mocked:
        yield mocked


@pytest.fixture
def add_recipe(db_session: Session, category: Category) -> Callable[..., int]:
    """Insert a bare recipe created ``age`` ago by ``creator``."""

    def build(name: str, creator: User, age: timedelta) -> int:
        recipe = Recipe(
            name=name,
            name_search=name.lower(),
            sources=[],
            category_id=category.id,
            creator_id=creator.id,
            modifier_id=creator.id,
        )
        db_session.add(recipe)
        db_session.flush()
        db_session.execute(
            update(Recipe)
            .where(Recipe.id == recipe.id)
            .values(created_at=datetime.now(UTC) - age)
        )
        db_session.commit()
        return recipe.id

    return build


class TestFindNewRecipes:
    """Unit tests for find_new_recipes()."""

    @pytest.mark.unit
    def test_only_recent_recipes_by_name(
        self,
        db_session: Session,
        add_recipe: Callable[..., int],
        creator_user: User,
    ) -> None:
        """Test the notification range and ordering."""
        # Arrange
        soup_id = add_recipe("Soup", creator_user, timedelta(hours=3))
        cake_id = add_recipe("Cake", creator_user, timedelta(hours=20))
        add_recipe("Old stew", creator_user, timedelta(days=3))

        # Act
        recipes = find_new_recipes(db_session)

        # Assert
        assert recipes == [
            NewRecipe(id=cake_id, name="Cake", creator_id=creator_user.id),
            NewRecipe(id=soup_id, name="Soup", creator_id=creator_user.id),
        ]


class TestSendNotifications:
    """Unit tests for send_notifications()."""

    @pytest.mark.unit
    def test_mails_subscribers_about_others_recipes(
        self,
        db_session: Session,
        add_recipe: Callable[..., int],
        user_factory: Callable[..., User],
        mock_send_mail: MagicMock,
    ) -> None:
        """Test that subscribers hear about recipes they did not write."""
        # Arrange
        author = user_factory("author", notifications=True)
        follower = user_factory("follower", notifications=True)
        user_factory("quiet", notifications=False)
        user_factory("pending", confirmed=False, notifications=True)
        add_recipe("Soup", author, timedelta(hours=1))

        # Act
        sent = send_notifications(db_session)

        # Assert
        assert sent == 1
        mail = mock_send_mail.call_args.args[0]
        assert mail.to == follower.email
        assert "Soup" in mail.text

    @pytest.mark.unit
    def test_nothing_new(
        self,
        db_session: Session,
        user_factory: Callable[..., User],
        mock_send_mail: MagicMock,
    ) -> None:
        """Test that no mails go out without new recipes."""
        # Arrange
        user_factory("follower", notifications=True)

        # Act
        sent = send_notifications(db_session)

        # Assert
        assert sent == 0
        mock_send_mail.assert_not_called()
