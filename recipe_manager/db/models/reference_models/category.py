"""Category model definition."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

CATEGORY_NAME_LENGTH = 50


class Category(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'categories' table.

    Every recipe belongs to exactly one category; a category that still has recipes
    cannot be deleted.
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(CATEGORY_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
