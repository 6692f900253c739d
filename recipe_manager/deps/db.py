"""Database dependency utilities."""

from collections.abc import Generator

from sqlalchemy.orm import Session

from recipe_manager.db.session import SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for FastAPI dependency injection.

    The session lives for one request and is closed afterwards; writes inside it are
    committed by the services through ``transaction``.

    Yields:
        Session: An active SQLAlchemy database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
