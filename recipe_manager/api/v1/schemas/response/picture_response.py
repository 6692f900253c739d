"""Picture metadata responses; the image bytes are served separately."""

from recipe_manager.api.v1.schemas.base_schema import BaseSchema


class PictureSummary(BaseSchema):
    id: int
    name: str
    sort_number: int
