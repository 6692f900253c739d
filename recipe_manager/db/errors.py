"""Translation of database integrity errors into API errors.

PostgreSQL reports violations through SQLSTATE codes and a ``Key (col)=(value)``
detail line; SQLite only through its message text. Both shapes are recognised.
"""

import re

from pydantic.alias_generators import to_camel
from sqlalchemy.exc import IntegrityError

from recipe_manager.exceptions.custom_exceptions import (
    ConstraintFailedError,
    RecipeManagerError,
    UniqueConstraintError,
)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"

NOT_UNIQUE = "not_unique"

_PG_KEY_DETAIL = re.compile(r"Key \((?P<columns>[^)]+)\)=")
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)$", re.MULTILINE)


def _sqlstate(orig: BaseException | None) -> str | None:
    # psycopg2 exposes pgcode, psycopg 3 exposes sqlstate
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _unique_columns(message: str) -> list[str]:
    match = _PG_KEY_DETAIL.search(message)
    if match:
        return [c.strip().strip('"') for c in match.group("columns").split(",")]
    match = _SQLITE_UNIQUE.search(message)
    if match:
        return [c.strip().rsplit(".", 1)[-1] for c in match.group("columns").split(",")]
    return []


def is_unique_violation(exc: IntegrityError) -> bool:
    if _sqlstate(exc.orig) == UNIQUE_VIOLATION:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    if _sqlstate(exc.orig) == FOREIGN_KEY_VIOLATION:
        return True
    return "FOREIGN KEY constraint failed" in str(exc.orig)


def translate_integrity_error(exc: IntegrityError) -> RecipeManagerError:
    """Map an integrity violation onto the matching API error.

    Unique violations list the offending columns, in their camelCase wire names, in
    ``fields``. Foreign key and any other integrity violations become a generic
    constraint failure.

    Args:
        exc: The error raised by SQLAlchemy on flush or commit.

    Returns:
        RecipeManagerError: The error to render.
    """
    if is_unique_violation(exc):
        columns = _unique_columns(str(exc.orig))
        return UniqueConstraintError(
            fields={to_camel(column): NOT_UNIQUE for column in columns}
        )
    if is_foreign_key_violation(exc):
        return ConstraintFailedError()
    return ConstraintFailedError("Integrity constraint failed")
