"""Routes package initializer.

Groups all route modules of the public API.
"""

from fastapi import APIRouter

from . import auth, health, picture, recipe, unit, user
from .reference_data import category_router, tag_router, unit_category_router

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(category_router)
api_router.include_router(health.router)
api_router.include_router(picture.router)
api_router.include_router(recipe.router)
api_router.include_router(tag_router)
api_router.include_router(unit.router)
api_router.include_router(unit_category_router)
api_router.include_router(user.router)
