"""Recipe section model definition."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

if TYPE_CHECKING:
    from recipe_manager.db.models.recipe_models.ingredient import Ingredient
    from recipe_manager.db.models.recipe_models.recipe import Recipe

SECTION_NAME_LENGTH = 80


class RecipeSection(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipe_sections' table.

    A named, ordered group of ingredients with its own method, e.g. "Dough".
    """

    __tablename__ = "recipe_sections"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(SECTION_NAME_LENGTH),
        nullable=False,
    )
    sort_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    method: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    recipe_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
    )
    recipe: Mapped["Recipe"] = relationship(
        "Recipe",
        back_populates="recipe_sections",
    )
    ingredients: Mapped[list["Ingredient"]] = relationship(
        "Ingredient",
        back_populates="recipe_section",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Ingredient.sort_number",
        lazy="selectin",
    )
