"""Response carrying only the id of a created row."""

from recipe_manager.api.v1.schemas.base_schema import BaseSchema


class IdResponse(BaseSchema):
    id: int
