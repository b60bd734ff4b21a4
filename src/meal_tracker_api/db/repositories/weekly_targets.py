"""Repository for the weekly_targets collection."""

import logging

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from meal_tracker_api.core.exceptions import DatabaseError
from meal_tracker_api.models.user_settings import WeeklyTarget

from .base import BaseRepository

logger = logging.getLogger(__name__)


class WeeklyTargetRepository(BaseRepository[WeeklyTarget]):
    """Repository for per-week calorie targets, unique per ``(userId, startDate)``."""

    model_class = WeeklyTarget

    async def get_for_week(self, user_id: str, start_date: str) -> WeeklyTarget | None:
        """
        Get the target whose ``startDate`` equals the given week start.

        Args:
            user_id: Owning user
            start_date: ISO-8601 start of week

        Returns:
            WeeklyTarget or None
        """
        return await self.find_one(user_id, {"startDate": start_date})

    async def get_or_create(self, user_id: str, start_date: str, target_calories: float) -> WeeklyTarget:
        """
        Get the week's target, storing ``target_calories`` if there is none.

        A single upsert, so concurrent callers end up with the same document
        and an existing target is never overwritten.
        """
        try:
            doc = await self.collection.find_one_and_update(
                {"userId": user_id, "startDate": start_date},
                {"$setOnInsert": {"targetCalories": target_calories}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Weekly target upsert failed for user {user_id}: {e}")
            raise DatabaseError("Failed to save weekly target") from e
        return self._to_model(doc)

    async def set_target(self, user_id: str, id: str, target_calories: float) -> WeeklyTarget | None:
        """Change the calorie target of an existing week."""
        return await self.update_one(user_id, id, {"targetCalories": target_calories})
