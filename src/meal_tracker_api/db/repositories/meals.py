"""Repository for the meals collection."""

from typing import Any

from pymongo import DESCENDING

from meal_tracker_api.models.meal import Meal

from .base import BaseRepository


class MealRepository(BaseRepository[Meal]):
    """
    Repository for logged meals.

    ``date`` is stored as a UTC ISO-8601 string, so range filters compare
    strings directly.
    """

    model_class = Meal

    async def create(self, user_id: str, meal: dict[str, Any]) -> Meal:
        """
        Store a new meal.

        Args:
            user_id: Owning user
            meal: Meal fields (camelCase, without id/userId)

        Returns:
            Stored Meal
        """
        return await self.insert_one(user_id, meal)

    async def get_in_range(
        self,
        user_id: str,
        start: str,
        end: str | None = None,
        limit: int | None = None,
    ) -> list[Meal]:
        """
        Get meals eaten within a date range, newest first.

        Args:
            user_id: Owning user
            start: Inclusive ISO-8601 lower bound
            end: Inclusive ISO-8601 upper bound (open-ended if omitted)
            limit: Maximum results to return (all matches by default)

        Returns:
            Meals ordered by ``date`` descending
        """
        date_filter: dict[str, str] = {"$gte": start}
        if end is not None:
            date_filter["$lte"] = end

        return await self.find_many(
            user_id,
            filter={"date": date_filter},
            sort=[("date", DESCENDING)],
            limit=limit,
        )
