"""Tag model definition."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)

TAG_NAME_LENGTH = 80


class Tag(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'tags' table.

    Deleting a tag removes it from every recipe carrying it.
    """

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(TAG_NAME_LENGTH),
        nullable=False,
        unique=True,
    )
