"""Base database models and common ORM definitions.

Defines the declarative base shared by every model and the timestamp columns most
tables carry.
"""

import json
from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class BaseDatabaseModel(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models.

    ``repr()`` and ``str()`` render the loaded column values as JSON. Columns listed in
    ``__repr_exclude__`` are never rendered and binary values are summarised.
    """

    __repr_exclude__: ClassVar[tuple[str, ...]] = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._to_json()})"

    def __str__(self) -> str:
        return self._to_json()

    def _to_json(self) -> str:
        """Return the loaded column values as a JSON object string."""
        unloaded = inspect(self).unloaded
        data: dict[str, object] = {}
        for column in self.__table__.columns:
            key = column.key
            if key in unloaded or key in self.__repr_exclude__:
                continue
            value = getattr(self, key)
            if isinstance(value, bytes):
                value = f"<{len(value)} bytes>"
            data[key] = value
        return json.dumps(data, default=str, ensure_ascii=False)


class TimestampMixin:
    """Adds ``created_at`` and ``updated_at`` maintained by the database."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
