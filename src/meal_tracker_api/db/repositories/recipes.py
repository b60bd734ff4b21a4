"""Repository for the recipes collection."""

from pymongo import DESCENDING

from meal_tracker_api.models.recipe import Recipe

from .base import BaseRepository


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for saved recipes; maintains ``createdAt``/``updatedAt``."""

    model_class = Recipe
    timestamps = True

    async def list_for_user(self, user_id: str, limit: int = 200) -> list[Recipe]:
        """Get a user's recipes, newest first."""
        return await self.find_many(
            user_id,
            sort=[("createdAt", DESCENDING)],
            limit=limit,
        )
