"""Response of the unit endpoints."""

from datetime import datetime

from recipe_manager.api.v1.schemas.base_schema import BaseSchema


class UnitResponse(BaseSchema):
    id: int
    name: str
    abbreviation: str
    required: bool
    unit_category_id: int
    created_at: datetime
    updated_at: datetime
