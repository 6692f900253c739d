"""Unit tests for the development data seed."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from recipe_manager.core.security import verify_password
from recipe_manager.db.models import Category, Tag, Unit, User
from recipe_manager.db.seed import (
    ADMIN_PASSWORD,
    ADMIN_USERNAME,
    CATEGORIES,
    TAGS,
    seed_development_data,
)
from recipe_manager.enums.role_enum import RoleEnum


class TestSeedDevelopmentData:
    """Unit tests for seed_development_data."""

    @pytest.mark.unit
    def test_seeds_admin_and_reference_data(
        self, engine: Engine, db_session: Session
    ) -> None:
        """Test that a usable administrator and the reference rows exist."""
        # Act
        seed_development_data(engine, db_session)

        # Assert
        admin = db_session.scalars(
            select(User).where(User.username == ADMIN_USERNAME)
        ).one()
        assert admin.confirmed is True
        assert admin.role_names == [RoleEnum.ADMIN]
        assert verify_password(ADMIN_PASSWORD, admin.password_hash)
        assert set(db_session.scalars(select(Tag.name))) == set(TAGS)
        assert set(db_session.scalars(select(Category.name))) == set(CATEGORIES)

    @pytest.mark.unit
    def test_running_twice_adds_nothing(
        self, engine: Engine, db_session: Session
    ) -> None:
        """Test that the seed is idempotent."""
        # Arrange
        seed_development_data(engine, db_session)
        units = db_session.scalar(select(func.count(Unit.id)))

        # Act
        seed_development_data(engine, db_session)

        # Assert
        assert db_session.scalar(select(func.count(User.id))) == 1
        assert db_session.scalar(select(func.count(Unit.id))) == units
