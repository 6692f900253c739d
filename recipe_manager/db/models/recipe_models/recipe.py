"""Recipe model definition.

Defines the root of the recipe aggregate. Sections, ingredients, pictures and link
rows hang off a recipe and are removed with it.
"""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

if TYPE_CHECKING:
    from recipe_manager.db.models.picture_models.picture import Picture
    from recipe_manager.db.models.recipe_models.recipe_section import RecipeSection
    from recipe_manager.db.models.reference_models.tag import Tag
    from recipe_manager.db.models.user_models.user import User

RECIPE_NAME_LENGTH = 80
RECIPE_DESCRIPTION_LENGTH = 160


class Recipe(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'recipes' table.

    ``name_search`` and ``description_search`` hold the lower-cased,
    diacritic-free copies of ``name`` and ``description`` that searches match
    against.
    """

    __tablename__ = "recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(RECIPE_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
    name_search: Mapped[str] = mapped_column(
        String(RECIPE_NAME_LENGTH),
        nullable=False,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(RECIPE_DESCRIPTION_LENGTH),
        nullable=True,
    )
    description_search: Mapped[str | None] = mapped_column(
        String(RECIPE_DESCRIPTION_LENGTH),
        nullable=True,
    )
    serves: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
    )
    method: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    sources: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False,
    )
    creator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    modifier_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    recipe_sections: Mapped[list["RecipeSection"]] = relationship(
        "RecipeSection",
        back_populates="recipe",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="RecipeSection.sort_number",
        lazy="selectin",
    )
    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary="recipe_tags",
        order_by="Tag.name",
        viewonly=True,
    )
    associated_recipes: Mapped[list["Recipe"]] = relationship(
        "Recipe",
        secondary="recipe_recipes",
        primaryjoin="Recipe.id == recipe_recipes.c.recipe_id",
        secondaryjoin="Recipe.id == recipe_recipes.c.associated_recipe_id",
        order_by="Recipe.name",
        viewonly=True,
    )
    pictures: Mapped[list["Picture"]] = relationship(
        "Picture",
        back_populates="recipe",
        passive_deletes=True,
        order_by="Picture.sort_number",
    )
    creator: Mapped["User"] = relationship(
        "User",
        foreign_keys=[creator_id],
        lazy="joined",
    )
    modifier: Mapped["User"] = relationship(
        "User",
        foreign_keys=[modifier_id],
        lazy="joined",
    )
