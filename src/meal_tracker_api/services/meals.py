"""Meal logging service."""

import logging
from datetime import datetime

from meal_tracker_api.core.exceptions import NotFoundError
from meal_tracker_api.db.unit_of_work import UnitOfWork
from meal_tracker_api.models.estimation import FoodItem, Suggestion
from meal_tracker_api.models.meal import Meal, MealLogResponse, MealUpdate
from meal_tracker_api.services.estimation import EstimationService
from meal_tracker_api.utils.dates import to_iso, utc_now
from meal_tracker_api.utils.nutrition import scale_nutrition, sum_nutrition

logger = logging.getLogger(__name__)


class MealService:
    """
    Creates, edits and lists a user's meals.

    Estimation happens before any write: when it fails nothing is stored
    and the caller gets ``success=False`` with the user-facing message.
    """

    def __init__(self, uow: UnitOfWork, estimator: EstimationService):
        """Initialize meal service."""
        self.uow = uow
        self.estimator = estimator

    async def log_text_meal(
        self,
        user_id: str,
        description: str,
        eaten_at: datetime | None = None,
        name: str = "Meal",
    ) -> MealLogResponse:
        """
        Estimate a text-described meal and store it.

        Args:
            user_id: Owning user
            description: What was eaten
            eaten_at: When it was eaten (defaults to now)
            name: Display name of the meal

        Returns:
            MealLogResponse with the stored meal, or the failure message
        """
        result = await self.estimator.log_meal(description)
        if not result.success:
            return MealLogResponse(success=False, error=result.error)

        estimate = result.data
        meal = await self.uow.meals.create(
            user_id,
            {
                "name": name,
                "date": to_iso(eaten_at or utc_now()),
                "description": description.strip(),
                "foodItems": estimate.food_items,
                "calories": estimate.estimated_calories,
                "protein": estimate.protein,
                "carbohydrates": estimate.carbohydrates,
                "fat": estimate.fat,
                "fiber": estimate.fiber,
            },
        )
        logger.info(f"Logged meal {meal.id} ({meal.calories} kcal) for user {user_id}")
        return MealLogResponse(success=True, meal=meal)

    async def log_photo_meal(
        self,
        user_id: str,
        items: list[FoodItem],
        name: str = "Photo Meal",
        description: str | None = None,
    ) -> Meal:
        """
        Store the user-verified items from a photo analysis as one meal.

        Totals treat unknown macros as zero.
        """
        totals = sum_nutrition(items)
        if description is None:
            description = ", ".join(
                f"{item.name} ({item.quantity})" if item.quantity else item.name for item in items
            )

        meal = await self.uow.meals.create(
            user_id,
            {
                "name": name,
                "date": to_iso(utc_now()),
                "description": description,
                "foodItems": [item.name for item in items],
                **totals.model_dump(),
            },
        )
        logger.info(f"Logged photo meal {meal.id} with {len(items)} items for user {user_id}")
        return meal

    async def log_recipe_meal(self, user_id: str, recipe_id: str, servings: float = 1) -> Meal:
        """
        Store ``servings`` of a saved recipe as a meal.

        Raises:
            NotFoundError: If the recipe does not exist for this user
        """
        recipe = await self.uow.recipes.find_by_id(user_id, recipe_id)
        if recipe is None:
            raise NotFoundError("Recipe", recipe_id)

        nutrition = scale_nutrition(recipe, servings)
        serving_label = f"{servings:g} serving" + ("" if servings == 1 else "s")
        return await self.uow.meals.create(
            user_id,
            {
                "name": recipe.name,
                "date": to_iso(utc_now()),
                "description": f"{serving_label} of {recipe.name}",
                "foodItems": [ingredient.name for ingredient in recipe.ingredients],
                **nutrition,
            },
        )

    async def log_suggestion_meal(self, user_id: str, suggestion: Suggestion) -> MealLogResponse:
        """Estimate a suggested dish from its recipe text and store it."""
        description = f"{suggestion.name}: {suggestion.recipe}"
        return await self.log_text_meal(user_id, description, name=suggestion.name)

    async def update_meal(self, user_id: str, meal_id: str, update: MealUpdate) -> Meal:
        """
        Apply a partial update to a meal.

        Raises:
            NotFoundError: If the meal does not exist for this user
        """
        fields = update.model_dump(exclude_unset=True, by_alias=True)
        if update.date is not None:
            fields["date"] = to_iso(update.date)
        if not fields:
            meal = await self.uow.meals.find_by_id(user_id, meal_id)
        else:
            meal = await self.uow.meals.update_one(user_id, meal_id, fields)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        return meal

    async def delete_meal(self, user_id: str, meal_id: str) -> None:
        """Delete a meal, raising NotFoundError if it does not exist."""
        if not await self.uow.meals.delete_one(user_id, meal_id):
            raise NotFoundError("Meal", meal_id)

    async def get_meal(self, user_id: str, meal_id: str) -> Meal:
        meal = await self.uow.meals.find_by_id(user_id, meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        return meal

    async def list_meals(self, user_id: str, start: datetime, end: datetime | None = None) -> list[Meal]:
        """Meals between ``start`` and ``end`` (inclusive), newest first."""
        return await self.uow.meals.get_in_range(
            user_id,
            to_iso(start),
            to_iso(end) if end is not None else None,
        )
