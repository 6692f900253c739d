"""Database session management.

Creates the engine and session factory from settings and provides the
``transaction`` unit of work used by every write operation.
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from recipe_manager.core.config.config import settings
from recipe_manager.core.logging import get_logger

_log = get_logger(__name__)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    # SQLite ignores foreign keys unless asked per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def _engine_options(url: str) -> dict[str, Any]:
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "pool_size": 10,
        "max_overflow": 20,
        "connect_args": {"connect_timeout": 10},
    }


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Run a block of writes as one unit of work.

    Commits when the block completes and rolls back when it raises, re-raising the
    original exception so the API layer can translate it.

    Args:
        db: The request's session.

    Yields:
        Session: The same session, for use inside the ``with`` block.
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def check_database_health() -> bool:
    """Check if the database is available and responding.

    Returns:
        bool: True if database is healthy, False otherwise
    """
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        _log.warning("Database health check failed: {} ({})", str(e), type(e).__name__)
        return False
