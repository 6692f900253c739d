"""ORM models package initializer.

Importing this package registers every table on ``BaseDatabaseModel.metadata``.
"""

from .base_database_model import BaseDatabaseModel
from .picture_models import Picture
from .recipe_models import Ingredient, Recipe, RecipeRecipe, RecipeSection, RecipeTag
from .reference_models import Category, Tag, Unit, UnitCategory
from .user_models import User, UserRole

__all__ = [
    "BaseDatabaseModel",
    "Category",
    "Ingredient",
    "Picture",
    "Recipe",
    "RecipeRecipe",
    "RecipeSection",
    "RecipeTag",
    "Tag",
    "Unit",
    "UnitCategory",
    "User",
    "UserRole",
]
