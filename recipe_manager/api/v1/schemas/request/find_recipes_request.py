"""Request body of the recipe search."""

from pydantic import Field

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.api.v1.schemas.common.types import EntityId
from recipe_manager.enums.recipe_order_by_enum import RecipeOrderByEnum
from recipe_manager.enums.sort_order_enum import SortOrderEnum


class FindRecipesRequest(BaseSchema):
    """Filters, paging and ordering of a recipe search.

    Recipes must match every filter given: the search text (in name or description),
    the category and all of the listed tags.
    """

    search: str | None = Field(..., max_length=160)
    category_id: EntityId | None
    tags: list[EntityId]
    page: int = Field(..., ge=0)
    page_size: int = Field(..., ge=1)
    order_by: RecipeOrderByEnum
    order: SortOrderEnum
