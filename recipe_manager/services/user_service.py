"""Service for user accounts.

Administrators manage accounts here; every user can edit their own profile. New
accounts start unconfirmed and receive a confirmation mail carrying a one-time key.
The mail is sent before the transaction commits, so an undeliverable message leaves
no half-created account behind.
"""

from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.request.user_request import (
    CreateUserRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
)
from recipe_manager.core.logging import get_logger
from recipe_manager.core.security import hash_password
from recipe_manager.db.models import User, UserRole
from recipe_manager.db.session import transaction
from recipe_manager.enums.role_enum import RoleEnum
from recipe_manager.exceptions.custom_exceptions import NotFoundError
from recipe_manager.utils.email import CONFIRMATION, render_mail, send_mail
from recipe_manager.utils.reconcile import reconcile

_log = get_logger(__name__)


def send_confirmation_mail(user: User) -> None:
    """Mail the account's confirmation key to its owner."""
    send_mail(
        render_mail(
            CONFIRMATION,
            user.email,
            full_name=user.full_name,
            username=user.username,
            key=user.uuid,
        )
    )


class UserService:
    """Account administration and profile updates."""

    def list_users(self, db: Session) -> list[User]:
        """Return every account ordered by username."""
        return list(db.scalars(select(User).order_by(User.username)))

    def get_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def create_user(self, db: Session, request: CreateUserRequest) -> User:
        """Create an unconfirmed account and mail its confirmation link.

        Args:
            db: Database session.
            request: Account data and roles.

        Returns:
            User: The new account.

        Raises:
            UnableToSendEmailError: If the confirmation mail cannot be sent; the
                account is not created.
        """
        with transaction(db):
            user = User(
                username=request.username,
                password_hash=hash_password(request.password),
                email=request.email,
                first_name=request.first_name,
                last_name=request.last_name,
                notifications=request.notifications,
                confirmed=False,
                uuid=str(uuid4()),
                roles=[],
            )
            self._update_roles(user, request.roles)
            db.add(user)
            db.flush()
            send_confirmation_mail(user)
        db.refresh(user)
        _log.info("Created user {} '{}'", user.id, user.username)
        return user

    def update_user(
        self, db: Session, user_id: int, request: UpdateUserRequest
    ) -> User:
        """Replace an account's data and roles; the password only on request.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with transaction(db):
            user = self.get_user(db, user_id)
            user.username = request.username
            user.email = request.email
            user.first_name = request.first_name
            user.last_name = request.last_name
            if request.update_password and request.password:
                user.password_hash = hash_password(request.password)
            self._update_roles(user, request.roles)
            db.flush()
        db.refresh(user)
        _log.info("Updated user {}", user_id)
        return user

    def delete_user(self, db: Session, user_id: int) -> None:
        """Delete an account; authors of recipes fail with an integrity error.

        Raises:
            NotFoundError: If the user does not exist.
        """
        with transaction(db):
            result = db.execute(delete(User).where(User.id == user_id))
            if result.rowcount != 1:
                raise NotFoundError("User", user_id)
        _log.info("Deleted user {}", user_id)

    def resend_confirmation(self, db: Session, user_id: int) -> None:
        """Issue a new confirmation key and mail it again.

        Raises:
            NotFoundError: If no unconfirmed user has ``user_id``.
        """
        with transaction(db):
            user = db.scalar(
                select(User).where(User.id == user_id, User.confirmed.is_(False))
            )
            if user is None:
                raise NotFoundError("Unconfirmed user", user_id)
            user.uuid = str(uuid4())
            db.flush()
            send_confirmation_mail(user)
        _log.info("Resent confirmation mail to user {}", user_id)

    def update_profile(
        self, db: Session, user_id: int, request: UpdateProfileRequest
    ) -> User:
        with transaction(db):
            user = self.get_user(db, user_id)
            user.first_name = request.first_name
            user.last_name = request.last_name
            user.notifications = request.notifications
            db.flush()
        db.refresh(user)
        return user

    def _update_roles(self, user: User, roles: list[RoleEnum]) -> None:
        plan = reconcile(
            user.roles,
            [RoleEnum(role) for role in roles],
            existing_key=lambda user_role: user_role.role_name,
            desired_key=lambda role: role,
            insert_unmatched=True,
        )
        for user_role in plan.to_delete:
            user.roles.remove(user_role)
        for role in plan.to_insert:
            user.roles.append(UserRole(role_name=role))
