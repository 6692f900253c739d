"""Responses of the recipe endpoints."""

from datetime import datetime

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.api.v1.schemas.common.named_item import NamedItem
from recipe_manager.api.v1.schemas.common.user_summary import UserSummary
from recipe_manager.api.v1.schemas.response.picture_response import PictureSummary


class UnitSummary(BaseSchema):
    name: str
    abbreviation: str


class IngredientResponse(BaseSchema):
    id: int
    name: str
    sort_number: int
    value: float | None
    unit_id: int
    unit: UnitSummary


class RecipeSectionResponse(BaseSchema):
    id: int
    name: str
    sort_number: int
    method: str | None
    ingredients: list[IngredientResponse]


class AssociatedRecipeResponse(BaseSchema):
    id: int
    name: str
    description: str | None


class RecipeDetailResponse(BaseSchema):
    """A recipe with everything needed to display it.

    Sections, ingredients and pictures are ordered by sort number; associated recipes
    and tags by name.
    """

    id: int
    name: str
    description: str | None
    serves: int | None
    method: str | None
    sources: list[str]
    category_id: int
    creator_id: int
    modifier_id: int
    created_at: datetime
    updated_at: datetime
    recipe_sections: list[RecipeSectionResponse]
    associated_recipes: list[AssociatedRecipeResponse]
    tags: list[NamedItem]
    pictures: list[PictureSummary]
    creator: UserSummary
    modifier: UserSummary


class PictureId(BaseSchema):
    id: int


class RecipeRow(BaseSchema):
    """One search hit; ``pictures`` holds at most the recipe's first picture."""

    id: int
    name: str
    description: str | None
    pictures: list[PictureId]


class FindRecipesResponse(BaseSchema):
    page: int
    page_size: int
    rows: list[RecipeRow]
    count: int
