"""Unit route handlers."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.common.error_response import error_responses
from recipe_manager.api.v1.schemas.request.unit_request import UnitRequest
from recipe_manager.api.v1.schemas.response.unit_response import UnitResponse
from recipe_manager.deps.auth import AdminAuth, RequiredAuth
from recipe_manager.deps.db import get_db
from recipe_manager.services.unit_service import UnitService

router = APIRouter(prefix="/unit", tags=["unit"])


def get_unit_service() -> UnitService:
    """Get UnitService instance."""
    return UnitService()


UnitServiceDep = Annotated[UnitService, Depends(get_unit_service)]
DbSession = Annotated[Session, Depends(get_db)]


@router.get(
    "/byUnitCategory/{unit_category_id}",
    summary="List the units of a unit category",
    response_model=list[UnitResponse],
    responses=error_responses(401),
)
def list_units(
    unit_category_id: int,
    service: UnitServiceDep,
    db: DbSession,
    _user: RequiredAuth,
) -> list[UnitResponse]:
    return [
        UnitResponse.model_validate(unit)
        for unit in service.list_by_unit_category(db, unit_category_id)
    ]


@router.get(
    "/{unit_id}",
    summary="Get a unit",
    response_model=UnitResponse,
    responses=error_responses(401, 404),
)
def get_unit(
    unit_id: int,
    service: UnitServiceDep,
    db: DbSession,
    _user: RequiredAuth,
) -> UnitResponse:
    return UnitResponse.model_validate(service.get_unit(db, unit_id))


@router.post(
    "",
    summary="Create a unit",
    status_code=status.HTTP_201_CREATED,
    response_model=UnitResponse,
    responses=error_responses(401, 403, 409, 422),
)
def create_unit(
    request: UnitRequest,
    service: UnitServiceDep,
    db: DbSession,
    _user: AdminAuth,
) -> UnitResponse:
    return UnitResponse.model_validate(service.create_unit(db, request))


@router.put(
    "/{unit_id}",
    summary="Update a unit",
    response_model=UnitResponse,
    responses=error_responses(401, 403, 404, 409, 422),
)
def update_unit(
    unit_id: int,
    request: UnitRequest,
    service: UnitServiceDep,
    db: DbSession,
    _user: AdminAuth,
) -> UnitResponse:
    return UnitResponse.model_validate(service.update_unit(db, unit_id, request))


@router.delete(
    "/{unit_id}",
    summary="Delete a unit",
    description="Units still used by ingredients cannot be deleted.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 403, 404, 409),
)
def delete_unit(
    unit_id: int,
    service: UnitServiceDep,
    db: DbSession,
    _user: AdminAuth,
) -> None:
    service.delete_unit(db, unit_id)
