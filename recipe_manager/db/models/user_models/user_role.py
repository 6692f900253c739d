"""User role model definition."""

from typing import TYPE_CHECKING

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_manager.db.models.base_database_model import BaseDatabaseModel
from recipe_manager.enums.role_enum import RoleEnum

if TYPE_CHECKING:
    from recipe_manager.db.models.user_models.user import User


class UserRole(BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'user_roles' table.

    One row per role granted to a user.
    """

    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role_name"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_name: Mapped[RoleEnum] = mapped_column(
        SAEnum(
            RoleEnum,
            name="role_enum",
            native_enum=False,
            create_constraint=False,
        ),
        nullable=False,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    user: Mapped["User"] = relationship(
        "User",
        back_populates="roles",
    )
