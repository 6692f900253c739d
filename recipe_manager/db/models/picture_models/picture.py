"""Picture model definition."""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

if TYPE_CHECKING:
    from recipe_manager.db.models.recipe_models.recipe import Recipe

PICTURE_NAME_LENGTH = 80


class Picture(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'pictures' table.

    Pictures are uploaded before the recipe that shows them is saved, so
    ``recipe_id`` starts out empty. The JPEG blobs are loaded only on access.
    """

    __tablename__ = "pictures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(PICTURE_NAME_LENGTH),
        nullable=False,
    )
    sort_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
    )
    data: Mapped[bytes] = mapped_column(
        LargeBinary,
        nullable=False,
        deferred=True,
    )
    thumbnail: Mapped[bytes] = mapped_column(
        LargeBinary,
        nullable=False,
        deferred=True,
    )
    recipe_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    recipe: Mapped["Recipe | None"] = relationship(
        "Recipe",
        back_populates="pictures",
    )
