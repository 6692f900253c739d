"""Recipe route handlers.

Search, read and write recipes. Writes submit the complete recipe; nested sections,
ingredients, tags, associated recipes and pictures are reconciled by the service.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from recipe_manager.api.v1.schemas.common.error_response import error_responses
from recipe_manager.api.v1.schemas.common.id_response import IdResponse
from recipe_manager.api.v1.schemas.request.find_recipes_request import (
    FindRecipesRequest,
)
from recipe_manager.api.v1.schemas.request.recipe_request import (
    CreateRecipeRequest,
    UpdateRecipeRequest,
)
from recipe_manager.api.v1.schemas.response.recipe_response import (
    FindRecipesResponse,
    RecipeDetailResponse,
)
from recipe_manager.deps.auth import CreatorAuth, RequiredAuth
from recipe_manager.deps.db import get_db
from recipe_manager.services.recipe_service import RecipeService

router = APIRouter(prefix="/recipe", tags=["recipe"])


def get_recipe_service() -> RecipeService:
    """Get RecipeService instance."""
    return RecipeService()


RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
DbSession = Annotated[Session, Depends(get_db)]


@router.post(
    "/find",
    summary="Search recipes",
    description="""
                Returns one page of recipes matching the search text (in name or
                description, ignoring case and diacritics), the category and all of
                the given tags. Each row carries the recipe's first picture.
                """,
    response_model=FindRecipesResponse,
    responses=error_responses(401, 422),
)
def find_recipes(
    request: FindRecipesRequest,
    service: RecipeServiceDep,
    db: DbSession,
    _user: RequiredAuth,
) -> FindRecipesResponse:
    return service.find_recipes(db, request)


@router.get(
    "/{recipe_id}",
    summary="Get a recipe",
    description="Returns a recipe with sections, ingredients, tags, associated "
    "recipes, picture metadata and its authors.",
    response_model=RecipeDetailResponse,
    responses=error_responses(401, 404),
)
def get_recipe(
    recipe_id: int,
    service: RecipeServiceDep,
    db: DbSession,
    _user: RequiredAuth,
) -> RecipeDetailResponse:
    return service.get_recipe(db, recipe_id)


@router.post(
    "",
    summary="Create a recipe",
    description="""
                Creates a recipe with all of its nested collections. Submitted
                pictures must have been uploaded beforehand. The caller becomes
                creator and modifier.
                """,
    status_code=status.HTTP_201_CREATED,
    response_model=IdResponse,
    responses=error_responses(401, 403, 404, 409, 422),
)
def create_recipe(
    request: CreateRecipeRequest,
    service: RecipeServiceDep,
    db: DbSession,
    user: CreatorAuth,
) -> IdResponse:
    """Create a recipe.

    Args:
        request: Complete state of the new recipe.
        service: Recipe service.
        db: Database session dependency.
        user: The calling admin or creator.

    Returns:
        IdResponse: Id of the created recipe.
    """
    return IdResponse(id=service.create_recipe(db, request, user.user_id))


@router.put(
    "/{recipe_id}",
    summary="Update a recipe",
    description="""
                Replaces the recipe's state. Sections and ingredients with an id are
                updated, those without are created and stored ones left out are
                deleted. An unknown section or ingredient id aborts the whole update.
                """,
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 403, 404, 409, 422),
)
def update_recipe(
    recipe_id: int,
    request: UpdateRecipeRequest,
    service: RecipeServiceDep,
    db: DbSession,
    user: CreatorAuth,
) -> None:
    service.update_recipe(db, recipe_id, request, user.user_id)


@router.delete(
    "/{recipe_id}",
    summary="Delete a recipe",
    description="Deletes a recipe together with its sections, ingredients, pictures "
    "and links.",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=error_responses(401, 403, 404),
)
def delete_recipe(
    recipe_id: int,
    service: RecipeServiceDep,
    db: DbSession,
    _user: CreatorAuth,
) -> None:
    service.delete_recipe(db, recipe_id)
