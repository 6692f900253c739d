"""Minimal id/name pair used in listings."""

from recipe_manager.api.v1.schemas.base_schema import BaseSchema


class NamedItem(BaseSchema):
    id: int
    name: str
