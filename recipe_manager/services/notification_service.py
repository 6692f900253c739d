"""New-recipe notifications.

Triggered through the internal application by an external scheduler. Every confirmed
user who opted in receives one mail listing the recipes other users created within
the last ``NOTIFICATION_RANGE_DAYS``.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from recipe_manager.core.config.config import get_settings
from recipe_manager.core.logging import get_logger
from recipe_manager.db.models import Recipe, User
from recipe_manager.utils.email import NOTIFICATION, render_mail, send_mail

_log = get_logger(__name__)
settings = get_settings()


@dataclass(frozen=True)
class NewRecipe:
    id: int
    name: str
    creator_id: int


def find_new_recipes(db: Session, now: datetime | None = None) -> list[NewRecipe]:
    """Return recipes created within the notification range, ordered by name."""
    since = (now or datetime.now(UTC)) - timedelta(
        days=settings.notification_range_days
    )
    rows = db.execute(
        select(Recipe.id, Recipe.name, Recipe.creator_id)
        .where(Recipe.created_at >= since)
        .order_by(Recipe.name)
    )
    return [
        NewRecipe(id=row.id, name=row.name, creator_id=row.creator_id) for row in rows
    ]


def send_notifications(db: Session, now: datetime | None = None) -> int:
    """Mail every subscribed user the new recipes they did not create themselves.

    Args:
        db: Database session.
        now: Reference time; defaults to the current time.

    Returns:
        int: Number of mails sent.

    Raises:
        UnableToSendEmailError: If a mail cannot be sent; later users are skipped.
    """
    recipes = find_new_recipes(db, now)
    if not recipes:
        _log.info("No new recipes, no notifications sent")
        return 0

    subscribers = db.scalars(
        select(User)
        .where(User.confirmed.is_(True), User.notifications.is_(True))
        .order_by(User.id)
    ).all()

    sent = 0
    for user in subscribers:
        others = [recipe for recipe in recipes if recipe.creator_id != user.id]
        if not others:
            continue
        send_mail(
            render_mail(
                NOTIFICATION,
                user.email,
                full_name=user.full_name,
                username=user.username,
                recipes=others,
            )
        )
        sent += 1
    _log.info("Sent {} notification mails about {} recipes", sent, len(recipes))
    return sent
