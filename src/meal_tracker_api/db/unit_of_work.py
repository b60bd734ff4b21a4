"""Unit of Work pattern for managing repository access."""

from motor.motor_asyncio import AsyncIOMotorDatabase

from .repositories.meals import MealRepository
from .repositories.recipes import RecipeRepository
from .repositories.user_settings import UserSettingsRepository
from .repositories.weekly_targets import WeeklyTargetRepository


class UnitOfWork:
    """
    Unit of Work pattern implementation.

    Groups repository access and provides a single injection point for services.

    Usage:
        uow = UnitOfWork(db)
        meals = await uow.meals.get_in_range(user_id, start, end)
        target = await uow.weekly_targets.get_for_week(user_id, week_start)
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initialize Unit of Work with database instance.

        Args:
            db: Motor database instance
        """
        self._db = db
        self._meals: MealRepository | None = None
        self._recipes: RecipeRepository | None = None
        self._weekly_targets: WeeklyTargetRepository | None = None
        self._user_settings: UserSettingsRepository | None = None

    @property
    def meals(self) -> MealRepository:
        """Get Meals repository (lazy loaded)."""
        if self._meals is None:
            self._meals = MealRepository(self._db["meals"])
        return self._meals

    @property
    def recipes(self) -> RecipeRepository:
        """Get Recipes repository (lazy loaded)."""
        if self._recipes is None:
            self._recipes = RecipeRepository(self._db["recipes"])
        return self._recipes

    @property
    def weekly_targets(self) -> WeeklyTargetRepository:
        """Get WeeklyTargets repository (lazy loaded)."""
        if self._weekly_targets is None:
            self._weekly_targets = WeeklyTargetRepository(self._db["weekly_targets"])
        return self._weekly_targets

    @property
    def user_settings(self) -> UserSettingsRepository:
        """Get UserSettings repository (lazy loaded)."""
        if self._user_settings is None:
            self._user_settings = UserSettingsRepository(self._db["user_settings"])
        return self._user_settings
