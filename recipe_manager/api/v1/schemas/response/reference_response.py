"""Responses of the name-only reference data endpoints."""

from datetime import datetime

from recipe_manager.api.v1.schemas.common.named_item import NamedItem


class NamedEntityResponse(NamedItem):
    """A category, tag or unit category with its timestamps."""

    created_at: datetime
    updated_at: datetime
