"""Public part of a user shown next to content they own."""

from recipe_manager.api.v1.schemas.base_schema import BaseSchema


class UserSummary(BaseSchema):
    username: str
    first_name: str | None
    last_name: str | None
