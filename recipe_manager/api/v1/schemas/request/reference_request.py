"""Request bodies of the name-only reference data: categories, tags, unit categories."""

from pydantic import Field

from recipe_manager.api.v1.schemas.base_schema import BaseSchema


class CategoryRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=50)


class TagRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=80)


class UnitCategoryRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=80)
