"""Associated recipe link model definition."""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from recipe_manager.db.models.base_database_model import BaseDatabaseModel


class RecipeRecipe(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipe_recipes' link table.

    Links a recipe to another recipe it refers to, e.g. a sauce served with it. The
    link is directional.
    """

    __tablename__ = "recipe_recipes"

    recipe_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    associated_recipe_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    )
