"""Service for measurement units."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.request.unit_request import UnitRequest
from recipe_manager.core.logging import get_logger
from recipe_manager.db.models import Unit
from recipe_manager.db.session import transaction
from recipe_manager.exceptions.custom_exceptions import NotFoundError

_log = get_logger(__name__)


class UnitService:
    """CRUD operations on units."""

    def list_by_unit_category(self, db: Session, unit_category_id: int) -> list[Unit]:
        """Return the units of one unit category ordered by name."""
        return list(
            db.scalars(
                select(Unit)
                .where(Unit.unit_category_id == unit_category_id)
                .order_by(Unit.name)
            )
        )

    def get_unit(self, db: Session, unit_id: int) -> Unit:
        unit = db.get(Unit, unit_id)
        if unit is None:
            raise NotFoundError("Unit", unit_id)
        return unit

    def create_unit(self, db: Session, request: UnitRequest) -> Unit:
        """Insert a unit.

        An unknown unit category or a duplicate name or abbreviation fails with an
        integrity error.
        """
        with transaction(db):
            unit = Unit(**request.model_dump())
            db.add(unit)
            db.flush()
        db.refresh(unit)
        _log.info("Created unit {} '{}'", unit.id, unit.name)
        return unit

    def update_unit(self, db: Session, unit_id: int, request: UnitRequest) -> Unit:
        with transaction(db):
            unit = self.get_unit(db, unit_id)
            for field, value in request.model_dump().items():
                setattr(unit, field, value)
            db.flush()
        db.refresh(unit)
        _log.info("Updated unit {}", unit_id)
        return unit

    def delete_unit(self, db: Session, unit_id: int) -> None:
        """Delete a unit; units used by ingredients fail with an integrity error.

        Raises:
            NotFoundError: If the unit does not exist.
        """
        with transaction(db):
            result = db.execute(delete(Unit).where(Unit.id == unit_id))
            if result.rowcount != 1:
                raise NotFoundError("Unit", unit_id)
        _log.info("Deleted unit {}", unit_id)
