"""Recipe tag link model definition."""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from recipe_manager.db.models.base_database_model import BaseDatabaseModel


class RecipeTag(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipe_tags' link table."""

    __tablename__ = "recipe_tags"

    recipe_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        primary_key=True,
    )
    tag_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    )
