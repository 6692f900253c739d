"""Development data.

Creates the tables and fills them with a usable starting set: an administrator
(``Test`` / ``Test1234``), a few tags and categories and the common units. Rows that
already exist are left alone, so running it on every start-up is safe.
"""

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from recipe_manager.core.logging import get_logger
from recipe_manager.core.security import hash_password
from recipe_manager.db.models import (
    BaseDatabaseModel,
    Category,
    Tag,
    Unit,
    UnitCategory,
    User,
    UserRole,
)
from recipe_manager.db.session import transaction
from recipe_manager.enums.role_enum import RoleEnum

_log = get_logger(__name__)

ADMIN_USERNAME = "Test"
ADMIN_PASSWORD = "Test1234"
ADMIN_EMAIL = "test@example.com"

TAGS = ("Vegetarian", "Vegan", "Gluten free", "Quick", "Spicy")
CATEGORIES = ("Soups", "Main courses", "Side dishes", "Desserts", "Baking")

# unit category -> (name, abbreviation, required)
UNITS = {
    "Weight": (("Gram", "g", True), ("Kilogram", "kg", True)),
    "Volume": (
        ("Millilitre", "ml", True),
        ("Litre", "l", True),
        ("Teaspoon", "tsp", True),
        ("Tablespoon", "tbsp", True),
    ),
    "Other": (("Piece", "pcs", True), ("To taste", "tt", False)),
}


def _ensure_admin(db: Session) -> None:
    if db.scalar(select(User.id).where(User.username == ADMIN_USERNAME)):
        return
    db.add(
        User(
            username=ADMIN_USERNAME,
            password_hash=hash_password(ADMIN_PASSWORD),
            email=ADMIN_EMAIL,
            confirmed=True,
            roles=[UserRole(role_name=RoleEnum.ADMIN)],
        )
    )
    _log.info("Seeded administrator '{}'", ADMIN_USERNAME)


def _ensure_named(db: Session, model: type[Tag] | type[Category], names: tuple) -> None:
    existing = set(db.scalars(select(model.name).where(model.name.in_(names))))
    db.add_all(model(name=name) for name in names if name not in existing)


def _ensure_units(db: Session) -> None:
    for category_name, units in UNITS.items():
        category = db.scalar(
            select(UnitCategory).where(UnitCategory.name == category_name)
        )
        if category is None:
            category = UnitCategory(name=category_name)
            db.add(category)
            db.flush()
        existing = set(
            db.scalars(select(Unit.name).where(Unit.unit_category_id == category.id))
        )
        db.add_all(
            Unit(
                name=name,
                abbreviation=abbreviation,
                required=required,
                unit_category_id=category.id,
            )
            for name, abbreviation, required in units
            if name not in existing
        )


def seed_development_data(engine: Engine, db: Session) -> None:
    """Create missing tables and insert missing development rows.

    Args:
        engine: Engine the tables are created on.
        db: Session used for the inserts.
    """
    BaseDatabaseModel.metadata.create_all(bind=engine)
    with transaction(db):
        _ensure_admin(db)
        _ensure_named(db, Tag, TAGS)
        _ensure_named(db, Category, CATEGORIES)
        _ensure_units(db)
    _log.info("Development data in place")
