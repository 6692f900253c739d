"""Recipe service.

Handles searching, reading and writing recipes. Writes receive the complete desired
state of a recipe and reconcile each nested collection against what is stored:

- sections and, inside each, ingredients are matched by id; stored rows that are not
  submitted are deleted, submitted rows without id are inserted and unknown ids abort
  the write with ``NotFoundError``;
- tag links are diffed by tag id;
- associated recipe links are replaced wholesale;
- submitted pictures are linked to the recipe, the recipe's other pictures are deleted
  and pictures left without a recipe for too long are cleaned up.

Everything happens in one transaction, so a failing write leaves the recipe as it was.
"""

from collections.abc import Sequence

from sqlalchemy import asc, delete, desc, func, or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from recipe_manager.api.v1.schemas.request.find_recipes_request import (
    FindRecipesRequest,
)
from recipe_manager.api.v1.schemas.request.recipe_request import (
    CreateRecipeRequest,
    IngredientRequest,
    RecipePictureRequest,
    RecipeSectionRequest,
)
from recipe_manager.api.v1.schemas.response.recipe_response import (
    FindRecipesResponse,
    PictureId,
    RecipeDetailResponse,
    RecipeRow,
)
from recipe_manager.core.logging import get_logger
from recipe_manager.db.models import (
    Ingredient,
    Picture,
    Recipe,
    RecipeRecipe,
    RecipeSection,
    RecipeTag,
)
from recipe_manager.db.session import transaction
from recipe_manager.enums.recipe_order_by_enum import RecipeOrderByEnum
from recipe_manager.enums.sort_order_enum import SortOrderEnum
from recipe_manager.exceptions.custom_exceptions import NotFoundError
from recipe_manager.services.picture_service import delete_orphaned_pictures
from recipe_manager.utils.reconcile import reconcile
from recipe_manager.utils.text import to_search_form

_log = get_logger(__name__)

_ORDER_COLUMNS = {
    RecipeOrderByEnum.NAME: Recipe.name_search,
    RecipeOrderByEnum.CREATED_AT: Recipe.created_at,
    RecipeOrderByEnum.UPDATED_AT: Recipe.updated_at,
}


def _submitted_id(item: object) -> int | None:
    # Create requests have no ids at all
    return getattr(item, "id", None)


class RecipeService:
    """Search, read and write recipes."""

    def find_recipes(
        self, db: Session, request: FindRecipesRequest
    ) -> FindRecipesResponse:
        """Return one page of recipes matching all given filters.

        Args:
            db: Database session.
            request: Search text, category, tags, paging and ordering.

        Returns:
            FindRecipesResponse: The page, its size, the rows and the total count.
        """
        conditions = self._search_conditions(request)
        count = db.scalar(select(func.count(Recipe.id)).where(*conditions)) or 0

        order_column = _ORDER_COLUMNS[RecipeOrderByEnum(request.order_by)]
        direction = desc if SortOrderEnum(request.order) == SortOrderEnum.DESC else asc
        rows = db.execute(
            select(Recipe.id, Recipe.name, Recipe.description)
            .where(*conditions)
            .order_by(direction(order_column), Recipe.id)
            .limit(request.page_size)
            .offset(request.page * request.page_size)
        ).all()

        first_pictures = self._first_picture_ids(db, [row.id for row in rows])
        return FindRecipesResponse(
            page=request.page,
            page_size=request.page_size,
            count=count,
            rows=[
                RecipeRow(
                    id=row.id,
                    name=row.name,
                    description=row.description,
                    pictures=(
                        [PictureId(id=first_pictures[row.id])]
                        if row.id in first_pictures
                        else []
                    ),
                )
                for row in rows
            ],
        )

    def get_recipe(self, db: Session, recipe_id: int) -> RecipeDetailResponse:
        """Return a recipe with its sections, links, pictures and authors.

        Raises:
            NotFoundError: If the recipe does not exist.
        """
        recipe = db.get(Recipe, recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return RecipeDetailResponse.model_validate(recipe)

    def create_recipe(
        self, db: Session, request: CreateRecipeRequest, user_id: int
    ) -> int:
        """Create a recipe together with all of its nested collections.

        Args:
            db: Database session.
            request: Complete state of the new recipe.
            user_id: The creating user, recorded as creator and modifier.

        Returns:
            int: Id of the new recipe.

        Raises:
            NotFoundError: If a submitted picture does not exist.
        """
        with transaction(db):
            recipe = Recipe(creator_id=user_id, recipe_sections=[])
            self._apply_scalars(recipe, request, user_id)
            db.add(recipe)
            db.flush()
            self._write_collections(db, recipe, request)
            recipe_id = recipe.id
        _log.info("User {} created recipe {} '{}'", user_id, recipe_id, request.name)
        return recipe_id

    def update_recipe(
        self,
        db: Session,
        recipe_id: int,
        request: CreateRecipeRequest,
        user_id: int,
    ) -> None:
        """Replace a recipe's state with the submitted one.

        Args:
            db: Database session.
            recipe_id: Recipe to update.
            request: Complete desired state; sections and ingredients may carry ids.
            user_id: The modifying user.

        Raises:
            NotFoundError: If the recipe, a submitted section or ingredient id, or a
                submitted picture does not exist.
        """
        with transaction(db):
            recipe = db.get(Recipe, recipe_id)
            if recipe is None:
                raise NotFoundError("Recipe", recipe_id)
            self._apply_scalars(recipe, request, user_id)
            self._write_collections(db, recipe, request)
        _log.info("User {} updated recipe {}", user_id, recipe_id)

    def delete_recipe(self, db: Session, recipe_id: int) -> None:
        """Delete a recipe; its sections, pictures and links go with it.

        Raises:
            NotFoundError: If the recipe does not exist.
        """
        with transaction(db):
            result = db.execute(delete(Recipe).where(Recipe.id == recipe_id))
            if result.rowcount != 1:
                raise NotFoundError("Recipe", recipe_id)
        _log.info("Deleted recipe {}", recipe_id)

    def _search_conditions(self, request: FindRecipesRequest) -> list[ColumnElement]:
        conditions: list[ColumnElement] = []
        term = to_search_form(request.search)
        if term:
            conditions.append(
                or_(
                    Recipe.name_search.contains(term, autoescape=True),
                    Recipe.description_search.contains(term, autoescape=True),
                )
            )
        if request.category_id is not None:
            conditions.append(Recipe.category_id == request.category_id)
        tag_ids = set(request.tags)
        if tag_ids:
            carrying_all_tags = (
                select(RecipeTag.recipe_id)
                .where(RecipeTag.tag_id.in_(tag_ids))
                .group_by(RecipeTag.recipe_id)
                .having(func.count(RecipeTag.tag_id) == len(tag_ids))
            )
            conditions.append(Recipe.id.in_(carrying_all_tags))
        return conditions

    def _first_picture_ids(self, db: Session, recipe_ids: list[int]) -> dict[int, int]:
        if not recipe_ids:
            return {}
        first: dict[int, int] = {}
        pictures = db.execute(
            select(Picture.recipe_id, Picture.id)
            .where(Picture.recipe_id.in_(recipe_ids))
            .order_by(Picture.recipe_id, Picture.sort_number, Picture.id)
        )
        for recipe_id, picture_id in pictures:
            first.setdefault(recipe_id, picture_id)
        return first

    def _apply_scalars(
        self, recipe: Recipe, request: CreateRecipeRequest, user_id: int
    ) -> None:
        recipe.name = request.name
        recipe.name_search = to_search_form(request.name) or ""
        recipe.description = request.description
        recipe.description_search = to_search_form(request.description)
        recipe.serves = request.serves
        recipe.method = request.method
        recipe.sources = list(request.sources)
        recipe.category_id = request.category_id
        recipe.modifier_id = user_id

    def _write_collections(
        self, db: Session, recipe: Recipe, request: CreateRecipeRequest
    ) -> None:
        self._update_sections(recipe, request.recipe_sections)
        self._update_tags(db, recipe.id, request.tags)
        self._update_associated_recipes(db, recipe.id, request.associated_recipes)
        self._update_pictures(db, recipe.id, request.pictures)
        db.flush()
        delete_orphaned_pictures(db)

    def _update_sections(
        self, recipe: Recipe, submitted: Sequence[RecipeSectionRequest]
    ) -> None:
        plan = reconcile(
            recipe.recipe_sections,
            submitted,
            existing_key=lambda section: section.id,
            desired_key=_submitted_id,
        )
        if plan.has_missing:
            raise NotFoundError("Recipe section", plan.missing)

        for section in plan.to_delete:
            recipe.recipe_sections.remove(section)
        for section, data in plan.to_update:
            section.name = data.name
            section.sort_number = data.sort_number
            section.method = data.method
            self._update_ingredients(section, data.ingredients)
        for data in plan.to_insert:
            section = RecipeSection(
                name=data.name,
                sort_number=data.sort_number,
                method=data.method,
                ingredients=[],
            )
            self._update_ingredients(section, data.ingredients)
            recipe.recipe_sections.append(section)

    def _update_ingredients(
        self, section: RecipeSection, submitted: Sequence[IngredientRequest]
    ) -> None:
        plan = reconcile(
            section.ingredients,
            submitted,
            existing_key=lambda ingredient: ingredient.id,
            desired_key=_submitted_id,
        )
        if plan.has_missing:
            raise NotFoundError("Ingredient", plan.missing)

        for ingredient in plan.to_delete:
            section.ingredients.remove(ingredient)
        for ingredient, data in plan.to_update:
            ingredient.name = data.name
            ingredient.sort_number = data.sort_number
            ingredient.value = data.value
            ingredient.unit_id = data.unit_id
        for data in plan.to_insert:
            section.ingredients.append(
                Ingredient(
                    name=data.name,
                    sort_number=data.sort_number,
                    value=data.value,
                    unit_id=data.unit_id,
                )
            )

    def _update_tags(self, db: Session, recipe_id: int, tag_ids: list[int]) -> None:
        links = db.scalars(select(RecipeTag).where(RecipeTag.recipe_id == recipe_id))
        plan = reconcile(
            links,
            tag_ids,
            existing_key=lambda link: link.tag_id,
            desired_key=lambda tag_id: tag_id,
            insert_unmatched=True,
        )
        for link in plan.to_delete:
            db.delete(link)
        db.add_all(
            RecipeTag(recipe_id=recipe_id, tag_id=tag_id) for tag_id in plan.to_insert
        )

    def _update_associated_recipes(
        self, db: Session, recipe_id: int, associated_ids: list[int]
    ) -> None:
        db.execute(delete(RecipeRecipe).where(RecipeRecipe.recipe_id == recipe_id))
        db.add_all(
            RecipeRecipe(recipe_id=recipe_id, associated_recipe_id=associated_id)
            for associated_id in dict.fromkeys(associated_ids)
            if associated_id != recipe_id
        )

    def _update_pictures(
        self,
        db: Session,
        recipe_id: int,
        submitted: Sequence[RecipePictureRequest],
    ) -> None:
        wanted = {picture.id: picture for picture in reversed(submitted)}
        db.execute(
            delete(Picture)
            .where(Picture.recipe_id == recipe_id, Picture.id.not_in(list(wanted)))
            .execution_options(synchronize_session="fetch")
        )
        if not wanted:
            return

        pictures = db.scalars(select(Picture).where(Picture.id.in_(list(wanted)))).all()
        missing = sorted(set(wanted) - {picture.id for picture in pictures})
        if missing:
            raise NotFoundError("Picture", missing)
        for picture in pictures:
            data = wanted[picture.id]
            picture.name = data.name
            picture.sort_number = data.sort_number
            picture.recipe_id = recipe_id
