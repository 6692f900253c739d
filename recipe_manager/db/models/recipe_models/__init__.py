"""Recipe Models package initializer.

This package contains the ORM models of the recipe aggregate: the recipe itself, its
sections and ingredients, and its links to tags and other recipes.
"""

from .ingredient import Ingredient
from .recipe import Recipe
from .recipe_recipe import RecipeRecipe
from .recipe_section import RecipeSection
from .recipe_tag import RecipeTag

__all__ = [
    "Ingredient",
    "Recipe",
    "RecipeRecipe",
    "RecipeSection",
    "RecipeTag",
]
