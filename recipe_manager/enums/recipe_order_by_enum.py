"""Enum for recipe search ordering."""

from enum import Enum


class RecipeOrderByEnum(str, Enum):
    """Columns a recipe search can be ordered by."""

    NAME = "name"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
