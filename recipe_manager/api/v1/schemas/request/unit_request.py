"""Request body for creating and updating units."""

from pydantic import Field

from recipe_manager.api.v1.schemas.base_schema import BaseSchema
from recipe_manager.api.v1.schemas.common.types import EntityId


class UnitRequest(BaseSchema):
    name: str = Field(..., min_length=1, max_length=80)
    abbreviation: str = Field(..., min_length=1, max_length=20)
    required: bool
    unit_category_id: EntityId
