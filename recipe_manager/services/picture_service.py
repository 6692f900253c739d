"""Service for recipe pictures.

Pictures are uploaded on their own and linked to a recipe when the recipe is saved.
Linking and the clean-up of abandoned uploads happen in the recipe service.
"""

from datetime import UTC, datetime, timedelta

from sqlalchemy import delete, select
from sqlalchemy.orm import QueryableAttribute, Session, undefer

from recipe_manager.core.config.config import get_settings
from recipe_manager.core.logging import get_logger
from recipe_manager.db.models import Picture
from recipe_manager.db.session import transaction
from recipe_manager.exceptions.custom_exceptions import NotFoundError
from recipe_manager.utils.image import process_picture
from recipe_manager.utils.text import shorten

_log = get_logger(__name__)
settings = get_settings()

PICTURE_NAME_LIMIT = 80


class PictureService:
    """Upload and retrieval of pictures."""

    def upload_picture(self, db: Session, filename: str | None, raw: bytes) -> Picture:
        """Store an uploaded image as an unlinked picture.

        Args:
            db: Database session.
            filename: Original name of the uploaded file; used as picture name.
            raw: The uploaded bytes.

        Returns:
            Picture: The stored picture.

        Raises:
            ValidationFailedError: If ``raw`` is not a readable image.
        """
        processed = process_picture(
            raw,
            settings.image_dimension,
            settings.thumbnail_dimension,
        )
        name = shorten(filename or "picture", PICTURE_NAME_LIMIT)
        with transaction(db):
            picture = Picture(
                name=name,
                sort_number=1,
                data=processed.data,
                thumbnail=processed.thumbnail,
            )
            db.add(picture)
            db.flush()
            picture_id = picture.id
        _log.info(
            "Stored picture {} '{}' ({} bytes, thumbnail {} bytes)",
            picture_id,
            name,
            len(processed.data),
            len(processed.thumbnail),
        )
        return picture

    def list_by_recipe(self, db: Session, recipe_id: int) -> list[Picture]:
        """Return the pictures of a recipe ordered by name, without image data."""
        return list(
            db.scalars(
                select(Picture)
                .where(Picture.recipe_id == recipe_id)
                .order_by(Picture.name)
            )
        )

    def get_thumbnail(self, db: Session, picture_id: int) -> bytes:
        return self._load(db, picture_id, Picture.thumbnail).thumbnail

    def get_data(self, db: Session, picture_id: int) -> bytes:
        return self._load(db, picture_id, Picture.data).data

    def _load(
        self, db: Session, picture_id: int, column: QueryableAttribute[bytes]
    ) -> Picture:
        picture = db.scalars(
            select(Picture).where(Picture.id == picture_id).options(undefer(column))
        ).first()
        if picture is None:
            raise NotFoundError("Picture", picture_id)
        return picture


def delete_orphaned_pictures(db: Session, now: datetime | None = None) -> int:
    """Delete pictures that have had no recipe for longer than the allowed age.

    Runs inside the caller's transaction.

    Args:
        db: Database session.
        now: Reference time; defaults to the current time.

    Returns:
        int: Number of deleted pictures.
    """
    cutoff = (now or datetime.now(UTC)) - timedelta(
        hours=settings.orphan_picture_max_age_hours
    )
    result = db.execute(
        delete(Picture)
        .where(Picture.recipe_id.is_(None), Picture.created_at <= cutoff)
        .execution_options(synchronize_session="fetch")
    )
    if result.rowcount:
        _log.info("Deleted {} orphaned pictures older than {}", result.rowcount, cutoff)
    return result.rowcount
