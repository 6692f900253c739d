"""Ingredient model definition."""

from typing import TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

if TYPE_CHECKING:
    from recipe_manager.db.models.recipe_models.recipe_section import RecipeSection
    from recipe_manager.db.models.reference_models.unit import Unit

INGREDIENT_NAME_LENGTH = 80


class Ingredient(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'ingredients' table.

    Represents one line of a recipe section: an amount of something in a unit.
    """

    __tablename__ = "ingredients"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(INGREDIENT_NAME_LENGTH),
        nullable=False,
    )
    sort_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    value: Mapped[float | None] = mapped_column(
        Float,
        nullable=True,
    )
    unit_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("units.id", ondelete="RESTRICT"),
        nullable=False,
    )
    recipe_section_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipe_sections.id", ondelete="CASCADE"),
        nullable=False,
    )
    recipe_section: Mapped["RecipeSection"] = relationship(
        "RecipeSection",
        back_populates="ingredients",
    )
    unit: Mapped["Unit"] = relationship(
        "Unit",
        lazy="joined",
    )
