"""User model definition.

Defines the account entity used for authentication, authorization and the
notification mailing.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from recipe_manager.db.models.base_database_model import (
    BaseDatabaseModel,
    TimestampMixin,
)
from recipe_manager.enums.role_enum import RoleEnum

if TYPE_CHECKING:
    from recipe_manager.db.models.user_models.user_role import UserRole

USERNAME_LENGTH = 50
PERSON_NAME_LENGTH = 50
EMAIL_LENGTH = 320
KEY_LENGTH = 36


class User(TimestampMixin, BaseDatabaseModel):
    """SQLAlchemy ORM model for the 'users' table.

    ``uuid`` holds the one-time key of a pending account confirmation or password
    reset; it is cleared once used.
    """

    __tablename__ = "users"
    __repr_exclude__ = ("password_hash", "uuid")

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(
        String(USERNAME_LENGTH),
        nullable=False,
        unique=True,
    )
    password_hash: Mapped[str] = mapped_column(
        String(60),
        nullable=False,
    )
    first_name: Mapped[str | None] = mapped_column(
        String(PERSON_NAME_LENGTH),
        nullable=True,
    )
    last_name: Mapped[str | None] = mapped_column(
        String(PERSON_NAME_LENGTH),
        nullable=True,
    )
    email: Mapped[str] = mapped_column(
        String(EMAIL_LENGTH),
        nullable=False,
        unique=True,
    )
    uuid: Mapped[str | None] = mapped_column(
        String(KEY_LENGTH),
        nullable=True,
    )
    confirmed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    notifications: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    roles: Mapped[list["UserRole"]] = relationship(
        "UserRole",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )

    @property
    def role_names(self) -> list[RoleEnum]:
        return sorted((role.role_name for role in self.roles), key=lambda r: r.value)

    @property
    def full_name(self) -> str:
        """Get "first last" when both names are set, else the username."""
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.username
