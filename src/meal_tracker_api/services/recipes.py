"""Recipe service: AI drafting and CRUD for saved recipes."""

import logging

from meal_tracker_api.core.exceptions import NotFoundError
from meal_tracker_api.db.unit_of_work import UnitOfWork
from meal_tracker_api.models.estimation import CreateRecipeOutput, EstimationResult
from meal_tracker_api.models.recipe import Recipe, RecipeCreate, RecipeUpdate
from meal_tracker_api.services.estimation import EstimationService

logger = logging.getLogger(__name__)


class RecipeService:
    """Service for a user's recipe collection."""

    def __init__(self, uow: UnitOfWork, estimator: EstimationService):
        """Initialize recipe service."""
        self.uow = uow
        self.estimator = estimator

    async def generate(self, prompt: str) -> EstimationResult[CreateRecipeOutput]:
        """
        Draft a recipe from a description.

        The draft is not stored; the user reviews and edits it, then saves
        it with ``create``.
        """
        return await self.estimator.create_recipe(prompt)

    async def create(self, user_id: str, recipe: RecipeCreate) -> Recipe:
        """Save a recipe."""
        stored = await self.uow.recipes.insert_one(user_id, recipe.model_dump(by_alias=True))
        logger.info(f"Saved recipe {stored.id} '{stored.name}' for user {user_id}")
        return stored

    async def list(self, user_id: str) -> list[Recipe]:
        """All of a user's recipes, newest first."""
        return await self.uow.recipes.list_for_user(user_id)

    async def get(self, user_id: str, recipe_id: str) -> Recipe:
        recipe = await self.uow.recipes.find_by_id(user_id, recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return recipe

    async def update(self, user_id: str, recipe_id: str, update: RecipeUpdate) -> Recipe:
        """
        Apply a partial update; ``updatedAt`` is refreshed.

        Raises:
            NotFoundError: If the recipe does not exist for this user
        """
        fields = update.model_dump(exclude_unset=True, by_alias=True)
        if not fields:
            return await self.get(user_id, recipe_id)

        recipe = await self.uow.recipes.update_one(user_id, recipe_id, fields)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)
        return recipe

    async def delete(self, user_id: str, recipe_id: str) -> None:
        if not await self.uow.recipes.delete_one(user_id, recipe_id):
            raise NotFoundError("Recipe", recipe_id)
