"""Authentication service.

Issues token pairs for confirmed accounts and handles the key based flows: account
confirmation and password reset. Keys are UUIDs stored in ``users.uuid`` and cleared
once used; a reset key expires ``RESET_LINK_VALIDITY_HOURS`` after it was issued,
which is taken from the account's ``updated_at``.
"""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from recipe_manager.core.config.config import get_settings
from recipe_manager.core.logging import get_logger
from recipe_manager.core.security import hash_password, verify_password
from recipe_manager.db.models import User
from recipe_manager.db.session import transaction
from recipe_manager.exceptions.custom_exceptions import (
    AccountDoesntExistError,
    InvalidCredentialsError,
    NotFoundError,
)
from recipe_manager.utils.email import RESET, render_mail, send_mail
from recipe_manager.utils.tokens import TokenPair, create_token_pair, decode_token

_log = get_logger(__name__)
settings = get_settings()


class AuthService:
    """Login, token refresh and the account key flows."""

    def login(self, db: Session, username: str, password: str) -> TokenPair:
        """Check a confirmed user's password and issue tokens.

        Raises:
            InvalidCredentialsError: If the user is unknown, unconfirmed or the
                password does not match.
        """
        user = db.scalar(
            select(User).where(User.username == username, User.confirmed.is_(True))
        )
        if user is None or not verify_password(password, user.password_hash):
            _log.warning("Failed login for '{}'", username)
            raise InvalidCredentialsError()
        _log.info("User {} logged in", user.id)
        return create_token_pair(user.id, user.role_names)

    def refresh(self, db: Session, refresh_token: str) -> TokenPair:
        """Exchange a refresh token for a new token pair.

        Raises:
            InvalidCredentialsError: If the token is not a refresh token or its user
                no longer exists or is unconfirmed.
            ExpiredTokenError: If the refresh token has expired.
            InvalidTokenError: If the token cannot be validated.
        """
        claims = decode_token(refresh_token)
        if not claims.refresh:
            raise InvalidCredentialsError("Not a refresh token")
        user = db.scalar(
            select(User).where(User.id == claims.user_id, User.confirmed.is_(True))
        )
        if user is None:
            raise InvalidCredentialsError()
        return create_token_pair(user.id, user.role_names)

    def change_password(
        self, db: Session, user_id: int, password: str, new_password: str
    ) -> None:
        """Replace the caller's password after checking the current one.

        Raises:
            InvalidCredentialsError: If ``password`` is not the current password.
        """
        with transaction(db):
            user = db.get(User, user_id)
            if user is None or not verify_password(password, user.password_hash):
                raise InvalidCredentialsError()
            user.password_hash = hash_password(new_password)
        _log.info("User {} changed their password", user_id)

    def confirm_account(self, db: Session, username: str, key: UUID) -> None:
        """Mark an account confirmed when the key matches.

        Raises:
            InvalidCredentialsError: If username and key do not match.
        """
        with transaction(db):
            user = db.scalar(
                select(User).where(User.username == username, User.uuid == str(key))
            )
            if user is None:
                raise InvalidCredentialsError()
            user.confirmed = True
            user.uuid = None
        _log.info("User {} confirmed their account", user.id)

    def request_password_reset(self, db: Session, email: str) -> None:
        """Store a fresh reset key and mail the reset link.

        Raises:
            AccountDoesntExistError: If no confirmed account uses ``email``.
            UnableToSendEmailError: If the mail cannot be sent; the key is not
                stored.
        """
        with transaction(db):
            user = db.scalar(
                select(User).where(User.email == email, User.confirmed.is_(True))
            )
            if user is None:
                raise AccountDoesntExistError()
            user.uuid = str(uuid4())
            db.flush()
            send_mail(
                render_mail(
                    RESET,
                    user.email,
                    full_name=user.full_name,
                    username=user.username,
                    key=user.uuid,
                    validity_hours=settings.reset_link_validity_hours,
                )
            )
        _log.info("Password reset requested for user {}", user.id)

    def reset_password(
        self, db: Session, username: str, key: UUID, new_password: str
    ) -> None:
        """Set a new password using a reset key.

        An expired key is cleared before the call fails.

        Raises:
            AccountDoesntExistError: If no confirmed account matches username and key.
            InvalidCredentialsError: If the key has expired.
        """
        cutoff = datetime.now(UTC) - timedelta(
            hours=settings.reset_link_validity_hours
        )
        with transaction(db):
            user = db.scalar(
                select(User).where(
                    User.username == username,
                    User.uuid == str(key),
                    User.confirmed.is_(True),
                )
            )
            if user is None:
                raise AccountDoesntExistError()
            still_valid = db.scalar(
                select(User.id).where(User.id == user.id, User.updated_at >= cutoff)
            )
            if still_valid is not None:
                user.password_hash = hash_password(new_password)
            user.uuid = None
        if still_valid is None:
            _log.warning("Expired reset key used for user {}", user.id)
            raise InvalidCredentialsError("Reset link has expired")
        _log.info("User {} reset their password", user.id)

    def current_user(self, db: Session, user_id: int) -> User:
        user = db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user
