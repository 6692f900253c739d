"""Unit category model definition."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

UNIT_CATEGORY_NAME_LENGTH = 80


class UnitCategory(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'unit_categories' table.

    Groups units such as "Weight" or "Volume".
    """

    __tablename__ = "unit_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(UNIT_CATEGORY_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
