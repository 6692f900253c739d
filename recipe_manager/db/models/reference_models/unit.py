"""Unit model definition."""

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

UNIT_NAME_LENGTH = 80
UNIT_ABBREVIATION_LENGTH = 20


class Unit(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'units' table.

    ``required`` marks units whose ingredients must carry a value, e.g. grams, as
    opposed to "to taste".
    """

    __tablename__ = "units"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(UNIT_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
    abbreviation: Mapped[str] = mapped_column(
        String(UNIT_ABBREVIATION_LENGTH),
        nullable=False,
        unique=True,
    )
    required: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    unit_category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("unit_categories.id", ondelete="RESTRICT"),
        nullable=False,
    )
