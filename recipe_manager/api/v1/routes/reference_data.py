"""Route handlers for the name-only reference data.

Categories, tags and unit categories expose the same five endpoints; each router is
built by :func:`build_reference_router` around its service and request body.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.api.v1.schemas.common.error_response import error_responses
from recipe_manager.api.v1.schemas.common.named_item import NamedItem
from recipe_manager.api.v1.schemas.request.reference_request import (
    CategoryRequest,
    TagRequest,
    UnitCategoryRequest,
)
from recipe_manager.api.v1.schemas.response.reference_response import (
    NamedEntityResponse,
)
from recipe_manager.deps.auth import AdminAuth, RequiredAuth
from recipe_manager.deps.db import get_db
from recipe_manager.services.reference_data_service import (
    ReferenceDataService,
    category_service,
    tag_service,
    unit_category_service,
)

DbSession = Annotated[Session, Depends(get_db)]


def build_reference_router(
    prefix: str,
    tag: str,
    service: ReferenceDataService,
    request_model: type[BaseSchema],
) -> APIRouter:
    """Build the CRUD router of one reference table.

    Args:
        prefix: URL prefix, e.g. ``/category``.
        tag: OpenAPI tag of the endpoints.
        service: Service bound to the table.
        request_model: Body of create and update requests; must have ``name``.

    Returns:
        APIRouter: Router with list, get, create, update and delete endpoints.
    """
    router = APIRouter(prefix=prefix, tags=[tag])
    resource = service.resource.lower()

    @router.get(
        "",
        summary=f"List {resource} names",
        response_model=list[NamedItem],
        responses=error_responses(401),
    )
    def list_items(db: DbSession, _user: RequiredAuth) -> list[NamedItem]:
        return [NamedItem.model_validate(item) for item in service.list_all(db)]

    @router.get(
        "/{item_id}",
        summary=f"Get a {resource}",
        response_model=NamedEntityResponse,
        responses=error_responses(401, 403, 404),
    )
    def get_item(item_id: int, db: DbSession, _user: AdminAuth) -> NamedEntityResponse:
        return NamedEntityResponse.model_validate(service.get(db, item_id))

    @router.post(
        "",
        summary=f"Create a {resource}",
        status_code=status.HTTP_201_CREATED,
        response_model=NamedEntityResponse,
        responses=error_responses(401, 403, 409, 422),
    )
    def create_item(
        request: request_model,  # type: ignore[valid-type]
        db: DbSession,
        _user: AdminAuth,
    ) -> NamedEntityResponse:
        return NamedEntityResponse.model_validate(service.create(db, request.name))

    @router.put(
        "/{item_id}",
        summary=f"Rename a {resource}",
        response_model=NamedEntityResponse,
        responses=error_responses(401, 403, 404, 409, 422),
    )
    def update_item(
        item_id: int,
        request: request_model,  # type: ignore[valid-type]
        db: DbSession,
        _user: AdminAuth,
    ) -> NamedEntityResponse:
        return NamedEntityResponse.model_validate(
            service.update(db, item_id, request.name)
        )

    @router.delete(
        "/{item_id}",
        summary=f"Delete a {resource}",
        description="Rows still referenced by other data cannot be deleted.",
        status_code=status.HTTP_204_NO_CONTENT,
        response_class=Response,
        responses=error_responses(401, 403, 404, 409),
    )
    def delete_item(item_id: int, db: DbSession, _user: AdminAuth) -> None:
        service.delete(db, item_id)

    return router


category_router = build_reference_router(
    "/category", "category", category_service, CategoryRequest
)
tag_router = build_reference_router("/tag", "tag", tag_service, TagRequest)
unit_category_router = build_reference_router(
    "/unitCategory", "unit-category", unit_category_service, UnitCategoryRequest
)
