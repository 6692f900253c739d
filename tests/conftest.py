"""Shared test fixtures and configuration for the Recipe Manager service tests.

The environment is prepared before the application is imported: an in-memory SQLite
database, a fixed signing key and no rate limiting. Every test gets a fresh database
whose session is also handed to the application through the ``get_db`` override.
"""

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["TOKEN_SIGN_KEY"] = "test-sign-key-with-enough-length-for-hs256"
os.environ["ENABLE_RATE_LIMITING"] = "false"
os.environ["LOGGING_CONFIG_PATH"] = str(
    Path(__file__).parent / "fixtures" / "logging.json"
)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from recipe_manager.core import security  # noqa: E402
from recipe_manager.db.models import (  # noqa: E402
    BaseDatabaseModel,
    Category,
    Tag,
    Unit,
    UnitCategory,
    User,
    UserRole,
)
from recipe_manager.deps.db import get_db  # noqa: E402
from recipe_manager.enums.role_enum import RoleEnum  # noqa: E402
from recipe_manager.internal import app as internal_app  # noqa: E402
from recipe_manager.main import app  # noqa: E402
from recipe_manager.utils.tokens import create_access_token  # noqa: E402

PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the cheapest bcrypt cost so hashing does not dominate test time."""
    monkeypatch.setattr(security, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def engine() -> Iterator[Engine]:
    """In-memory SQLite engine shared by every connection of one test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    BaseDatabaseModel.metadata.create_all(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Iterator[Session]:
    """Session configured like the application's."""
    session = Session(bind=engine, autoflush=False)
    yield session
    session.close()


def _override_db(session: Session) -> Callable[[], Iterator[Session]]:
    def override() -> Iterator[Session]:
        yield session

    return override


@pytest.fixture
def client(db_session: Session) -> Iterator[TestClient]:
    """Test client for the public application."""
    app.dependency_overrides[get_db] = _override_db(db_session)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def internal_client(db_session: Session) -> Iterator[TestClient]:
    """Test client for the internal application."""
    internal_app.dependency_overrides[get_db] = _override_db(db_session)
    yield TestClient(internal_app)
    internal_app.dependency_overrides.clear()


def make_user(
    db: Session,
    username: str,
    roles: tuple[RoleEnum, ...] = (),
    confirmed: bool = True,
    notifications: bool = False,
) -> User:
    """Insert a user with ``PASSWORD`` as password."""
    user = User(
        username=username,
        password_hash=security.hash_password(PASSWORD),
        email=f"{username}@example.com",
        first_name=username.capitalize(),
        last_name="Tester",
        confirmed=confirmed,
        notifications=notifications,
        roles=[UserRole(role_name=role) for role in roles],
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def user_factory(db_session: Session) -> Callable[..., User]:
    """Insert users with ``PASSWORD`` as password."""

    def build(username: str, *roles: RoleEnum, **attributes: Any) -> User:
        return make_user(db_session, username, roles, **attributes)

    return build


@pytest.fixture
def admin_user(db_session: Session) -> User:
    return make_user(db_session, "admin", (RoleEnum.ADMIN,))


@pytest.fixture
def creator_user(db_session: Session) -> User:
    return make_user(db_session, "creator", (RoleEnum.CREATOR,))


@pytest.fixture
def plain_user(db_session: Session) -> User:
    return make_user(db_session, "reader")


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Build an ``Authorization`` header carrying an access token for a user."""

    def build(user: User) -> dict[str, str]:
        token = create_access_token(user.id, user.role_names)
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture
def category(db_session: Session) -> Category:
    item = Category(name="Soups")
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture
def unit(db_session: Session) -> Unit:
    unit_category = UnitCategory(name="Weight")
    db_session.add(unit_category)
    db_session.flush()
    item = Unit(
        name="Gram", abbreviation="g", required=True, unit_category_id=unit_category.id
    )
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture
def tags(db_session: Session) -> list[Tag]:
    items = [Tag(name="Quick"), Tag(name="Spicy"), Tag(name="Vegan")]
    db_session.add_all(items)
    db_session.commit()
    return items


@pytest.fixture
def recipe_payload(
    category: Category, unit: Unit
) -> Callable[..., dict[str, Any]]:
    """Build a camelCase recipe body with one section holding two ingredients."""

    def build(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": "Tomato soup",
            "description": "Smooth and warming",
            "serves": 4,
            "method": "Simmer everything, then blend.",
            "sources": ["Grandma"],
            "categoryId": category.id,
            "recipeSections": [
                {
                    "name": "Soup",
                    "sortNumber": 1,
                    "method": None,
                    "ingredients": [
                        {
                            "name": "Tomatoes",
                            "sortNumber": 1,
                            "value": 800,
                            "unitId": unit.id,
                        },
                        {
                            "name": "Salt",
                            "sortNumber": 2,
                            "value": None,
                            "unitId": unit.id,
                        },
                    ],
                }
            ],
            "associatedRecipes": [],
            "tags": [],
            "pictures": [],
        }
        payload.update(overrides)
        return payload

    return build


class IsType:
    """Utility class for type checking in assertions."""

    def __init__(self, expected_type: type) -> None:
        """Initialize IsType with the expected type for type checking."""
        self.expected_type = expected_type

    def __eq__(self, other: object) -> bool:
        """Check if the other object is an instance of the expected type."""
        return isinstance(other, self.expected_type)

    def __hash__(self) -> int:
        """Return the hash based on the expected type."""
        return hash(self.expected_type)

    def __repr__(self) -> str:
        """Return the string representation of the IsType instance."""
        return f"IsType({self.expected_type.__name__})"
