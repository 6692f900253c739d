"""Reference data models.

Categories, tags, units and unit categories are small lookup tables maintained by
administrators and referenced from recipes and ingredients.
"""

from .category import Category
from .tag import Tag
from .unit import Unit
from .unit_category import UnitCategory

__all__ = [
    "Category",
    "Tag",
    "Unit",
    "UnitCategory",
]
