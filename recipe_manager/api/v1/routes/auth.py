"""Authentication route handlers.

Login and token refresh, the password change of the signed-in user and the
key based account confirmation and password reset flows.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.common.error_response import error_responses
from recipe_manager.api.v1.schemas.common.user_summary import UserSummary
from recipe_manager.api.v1.schemas.request.auth_request import (
    ChangePasswordRequest,
    ConfirmAccountRequest,
    LoginRequest,
    RefreshTokenRequest,
    ResetLinkRequest,
    ResetPasswordRequest,
)
from recipe_manager.api.v1.schemas.response.auth_response import TokenResponse
from recipe_manager.deps.auth import RequiredAuth
from recipe_manager.deps.db import get_db
from recipe_manager.services.auth_service import AuthService
from recipe_manager.utils.tokens import TokenPair

router = APIRouter(prefix="/auth", tags=["auth"])


def get_auth_service() -> AuthService:
    """Get AuthService instance."""
    return AuthService()


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
DbSession = Annotated[Session, Depends(get_db)]


def _token_response(pair: TokenPair) -> TokenResponse:
    return TokenResponse(token=pair.token, refresh_token=pair.refresh_token)


@router.post(
    "/login",
    summary="Log in",
    description="Issues an access token and a refresh token to a confirmed user.",
    response_model=TokenResponse,
    responses=error_responses(401, 422),
)
def login(
    request: LoginRequest, service: AuthServiceDep, db: DbSession
) -> TokenResponse:
    return _token_response(service.login(db, request.username, request.password))


@router.post(
    "/refresh",
    summary="Refresh tokens",
    description="Exchanges a valid refresh token for a new token pair.",
    response_model=TokenResponse,
    responses=error_responses(401, 422),
)
def refresh(
    request: RefreshTokenRequest, service: AuthServiceDep, db: DbSession
) -> TokenResponse:
    return _token_response(service.refresh(db, request.refresh_token))


@router.patch(
    "/password",
    summary="Change password",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 422),
)
def change_password(
    request: ChangePasswordRequest,
    service: AuthServiceDep,
    db: DbSession,
    user: RequiredAuth,
) -> None:
    service.change_password(db, user.user_id, request.password, request.new_password)


@router.patch(
    "/confirm",
    summary="Confirm an account",
    description="Confirms a new account with the key sent in the confirmation mail.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 422),
)
def confirm_account(
    request: ConfirmAccountRequest, service: AuthServiceDep, db: DbSession
) -> None:
    service.confirm_account(db, request.username, request.key)


@router.post(
    "/reset",
    summary="Request a password reset",
    description="Mails a password reset link to the owner of a confirmed account.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(404, 422, 503),
)
def request_password_reset(
    request: ResetLinkRequest, service: AuthServiceDep, db: DbSession
) -> None:
    service.request_password_reset(db, request.email)


@router.patch(
    "/reset",
    summary="Reset a password",
    description="""
                Sets a new password using the key from the reset mail. Keys expire
                after the configured number of hours; an expired key is discarded.
                """,
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 404, 422),
)
def reset_password(
    request: ResetPasswordRequest, service: AuthServiceDep, db: DbSession
) -> None:
    service.reset_password(db, request.username, request.key, request.new_password)


@router.get(
    "/user",
    summary="Get the signed-in user",
    response_model=UserSummary,
    responses=error_responses(401, 404),
)
def current_user(
    service: AuthServiceDep, db: DbSession, user: RequiredAuth
) -> UserSummary:
    return UserSummary.model_validate(service.current_user(db, user.user_id))
