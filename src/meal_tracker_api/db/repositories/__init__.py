"""Repository classes for database access."""

from .base import BaseRepository
from .meals import MealRepository
from .recipes import RecipeRepository
from .user_settings import UserSettingsRepository
from .weekly_targets import WeeklyTargetRepository

__all__ = [
    "BaseRepository",
    "MealRepository",
    "RecipeRepository",
    "UserSettingsRepository",
    "WeeklyTargetRepository",
]
