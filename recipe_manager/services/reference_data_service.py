"""Service for the name-only reference data.

Categories, tags and unit categories differ only in their table, so one service
class, parameterised by model, serves all three.
"""

from typing import Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from recipe_manager.core.logging import get_logger
from recipe_manager.db.models import Category, Tag, UnitCategory
from recipe_manager.db.session import transaction
from recipe_manager.exceptions.custom_exceptions import NotFoundError

_log = get_logger(__name__)

NamedModel = TypeVar("NamedModel", Category, Tag, UnitCategory)


class ReferenceDataService(Generic[NamedModel]):
    """CRUD operations on a table of uniquely named rows."""

    def __init__(self, model: type[NamedModel], resource: str) -> None:
        """Initialize the service.

        Args:
            model: ORM model of the table.
            resource: Name used in log lines and error messages.
        """
        self.model = model
        self.resource = resource

    def list_all(self, db: Session) -> list[NamedModel]:
        """Return every row ordered by name."""
        return list(db.scalars(select(self.model).order_by(self.model.name)))

    def get(self, db: Session, item_id: int) -> NamedModel:
        """Return one row.

        Raises:
            NotFoundError: If no row has ``item_id``.
        """
        item = db.get(self.model, item_id)
        if item is None:
            raise NotFoundError(self.resource, item_id)
        return item

    def create(self, db: Session, name: str) -> NamedModel:
        """Insert a row; a duplicate name surfaces as an integrity error."""
        with transaction(db):
            item = self.model(name=name)
            db.add(item)
            db.flush()
        db.refresh(item)
        _log.info("Created {} {} '{}'", self.resource, item.id, name)
        return item

    def update(self, db: Session, item_id: int, name: str) -> NamedModel:
        """Rename a row.

        Raises:
            NotFoundError: If no row has ``item_id``.
        """
        with transaction(db):
            item = self.get(db, item_id)
            item.name = name
            db.flush()
        db.refresh(item)
        _log.info("Renamed {} {} to '{}'", self.resource, item_id, name)
        return item

    def delete(self, db: Session, item_id: int) -> None:
        """Delete a row; rows still referenced fail with an integrity error.

        Raises:
            NotFoundError: If no row has ``item_id``.
        """
        with transaction(db):
            result = db.execute(delete(self.model).where(self.model.id == item_id))
            if result.rowcount != 1:
                raise NotFoundError(self.resource, item_id)
        _log.info("Deleted {} {}", self.resource, item_id)


category_service = ReferenceDataService(Category, "Category")
tag_service = ReferenceDataService(Tag, "Tag")
unit_category_service = ReferenceDataService(UnitCategory, "Unit category")
