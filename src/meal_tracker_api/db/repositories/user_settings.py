"""Repository for the user_settings collection."""

import logging
from typing import Any

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from meal_tracker_api.core.exceptions import DatabaseError
from meal_tracker_api.models.user_settings import UserSettings

from .base import BaseRepository

logger = logging.getLogger(__name__)


class UserSettingsRepository(BaseRepository[UserSettings]):
    """Repository holding one settings document per user."""

    model_class = UserSettings

    async def get(self, user_id: str) -> UserSettings | None:
        """Get a user's settings document, if one exists."""
        return await self.find_one(user_id, {})

    async def upsert(self, user_id: str, fields: dict[str, Any]) -> UserSettings:
        """
        Merge ``fields`` into the user's settings, creating the document if needed.

        Args:
            user_id: Owning user
            fields: Settings fields (camelCase)

        Returns:
            Settings after the write
        """
        try:
            doc = await self.collection.find_one_and_update(
                {"userId": user_id},
                {"$set": {**fields, "userId": user_id}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"Settings upsert failed for user {user_id}: {e}")
            raise DatabaseError("Failed to save settings") from e
        return self._to_model(doc)
