"""User profile settings service."""

import logging

from meal_tracker_api.core.config import Settings, get_settings
from meal_tracker_api.db.unit_of_work import UnitOfWork
from meal_tracker_api.models.user_settings import UserSettings, UserSettingsUpdate

logger = logging.getLogger(__name__)


class ProfileService:
    """Reads and writes the per-user settings document."""

    def __init__(self, uow: UnitOfWork, settings: Settings | None = None):
        """Initialize profile service."""
        self.uow = uow
        self.settings = settings or get_settings()

    def defaults(self, user_id: str) -> UserSettings:
        """Settings a user has before saving any."""
        return UserSettings(user_id=user_id, protein_goal=self.settings.default_protein_goal)

    async def get_settings(self, user_id: str) -> UserSettings:
        """Stored settings, or the defaults when none were saved."""
        stored = await self.uow.user_settings.get(user_id)
        return stored or self.defaults(user_id)

    async def update_settings(self, user_id: str, update: UserSettingsUpdate) -> UserSettings:
        """
        Merge a partial update into the user's settings.

        Fields left out of the update keep their stored (or default) values.
        """
        fields = update.model_dump(exclude_unset=True, by_alias=True, mode="json")
        if not fields:
            return await self.get_settings(user_id)

        if await self.uow.user_settings.get(user_id) is None:
            defaults = self.defaults(user_id).model_dump(
                by_alias=True, mode="json", exclude={"id", "user_id"}
            )
            fields = {**defaults, **fields}

        saved = await self.uow.user_settings.upsert(user_id, fields)
        logger.info(f"Updated settings for user {user_id}: {sorted(fields)}")
        return saved

    async def get_ai_model(self, user_id: str) -> str | None:
        """The user's chosen model identifier, if any."""
        stored = await self.uow.user_settings.get(user_id)
        return stored.ai_model if stored else None
