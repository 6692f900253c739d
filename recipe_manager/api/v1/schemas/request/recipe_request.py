"""Request bodies for creating and updating recipes.

A recipe is always submitted whole: the nested lists describe the complete desired
state. In updates, sections and ingredients that carry an ``id`` refer to stored rows;
those without one are new.
"""

from typing import Annotated

from pydantic import Field

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.api.v1.schemas.common.types import EntityId, SortNumber

Source = Annotated[str, Field(min_length=1, max_length=1000)]


class IngredientRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=80)
    sort_number: SortNumber
    value: float | None = Field(..., ge=0)
    unit_id: EntityId


class UpdateIngredientRequest(IngredientRequest):
    id: EntityId | None = None


class RecipeSectionRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=80)
    sort_number: SortNumber
    method: str | None
    ingredients: list[IngredientRequest]


class UpdateRecipeSectionRequest(RecipeSectionRequest):
    id: EntityId | None = None
    ingredients: list[UpdateIngredientRequest]


class RecipePictureRequest(BaseSchema):
    """A previously uploaded picture to show on the recipe."""

    id: EntityId
    name: str = Field(..., min_length=1, max_length=80)
    sort_number: SortNumber


class CreateRecipeRequest(BaseSchema):
    """Complete state of a new recipe."""

    name: str = Field(..., min_length=1, max_length=80)
    description: str | None = Field(..., max_length=160)
    serves: int | None = Field(..., ge=1, le=100)
    method: str | None
    sources: list[Source]
    category_id: EntityId
    recipe_sections: list[RecipeSectionRequest]
    associated_recipes: list[EntityId]
    tags: list[EntityId]
    pictures: list[RecipePictureRequest]


class UpdateRecipeRequest(CreateRecipeRequest):
    """Complete desired state of an existing recipe."""

    recipe_sections: list[UpdateRecipeSectionRequest]
