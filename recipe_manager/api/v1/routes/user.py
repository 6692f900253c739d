"""User administration route handlers.

Everything here is restricted to administrators except the profile update, which
any signed-in user may call for their own account.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.common.error_response import error_responses
from recipe_manager.api.v1.schemas.request.user_request import (
    CreateUserRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
)
from recipe_manager.api.v1.schemas.response.user_response import UserResponse
from recipe_manager.deps.auth import AdminAuth, RequiredAuth
from recipe_manager.deps.db import get_db
from recipe_manager.services.user_service import UserService

router = APIRouter(prefix="/user", tags=["user"])


def get_user_service() -> UserService:
    """Get UserService instance."""
    return UserService()


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
DbSession = Annotated[Session, Depends(get_db)]


@router.get(
    "",
    summary="List users",
    response_model=list[UserResponse],
    responses=error_responses(401, 403),
)
def list_users(
    service: UserServiceDep, db: DbSession, _user: AdminAuth
) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in service.list_users(db)]


@router.get(
    "/{user_id}",
    summary="Get a user",
    response_model=UserResponse,
    responses=error_responses(401, 403, 404),
)
def get_user(
    user_id: int, service: UserServiceDep, db: DbSession, _user: AdminAuth
) -> UserResponse:
    return UserResponse.model_validate(service.get_user(db, user_id))


@router.post(
    "",
    summary="Create a user",
    description="""
                Creates an unconfirmed account and mails its owner a confirmation
                link. Nothing is stored when the mail cannot be sent.
                """,
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses=error_responses(401, 403, 409, 422, 503),
)
def create_user(
    request: CreateUserRequest,
    service: UserServiceDep,
    db: DbSession,
    _user: AdminAuth,
) -> UserResponse:
    return UserResponse.model_validate(service.create_user(db, request))


@router.put(
    "/{user_id}",
    summary="Update a user",
    description="Replaces account data and roles; the password changes only when "
    "`updatePassword` is set.",
    response_model=UserResponse,
    responses=error_responses(401, 403, 404, 409, 422),
)
def update_user(
    user_id: int,
    request: UpdateUserRequest,
    service: UserServiceDep,
    db: DbSession,
    _user: AdminAuth,
) -> UserResponse:
    return UserResponse.model_validate(service.update_user(db, user_id, request))


@router.patch(
    "/resendConfirmation/{user_id}",
    summary="Resend the confirmation mail",
    description="Issues a new confirmation key for an unconfirmed account.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 403, 404, 503),
)
def resend_confirmation(
    user_id: int, service: UserServiceDep, db: DbSession, _user: AdminAuth
) -> None:
    service.resend_confirmation(db, user_id)


@router.patch(
    "/updateProfile",
    summary="Update own profile",
    response_model=UserResponse,
    responses=error_responses(401, 404, 422),
)
def update_profile(
    request: UpdateProfileRequest,
    service: UserServiceDep,
    db: DbSession,
    user: RequiredAuth,
) -> UserResponse:
    return UserResponse.model_validate(
        service.update_profile(db, user.user_id, request)
    )


@router.delete(
    "/{user_id}",
    summary="Delete a user",
    description="Users who created or modified recipes cannot be deleted.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 403, 404, 409),
)
def delete_user(
    user_id: int, service: UserServiceDep, db: DbSession, _user: AdminAuth
) -> None:
    service.delete_user(db, user_id)
