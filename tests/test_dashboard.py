"""Unit tests for DashboardService and ProfileService."""

from datetime import datetime

import pytest

from conftest import USER_ID
from meal_tracker_api.core.config import Settings
from meal_tracker_api.models.meal import Meal
from meal_tracker_api.models.user_settings import (
    DietaryPreference,
    UserSettings,
    UserSettingsUpdate,
    WeeklyTarget,
)
from meal_tracker_api.services.dashboard import (
    ON_TRACK_MESSAGE,
    OVER_AVERAGE_MESSAGE,
    DashboardService,
    weekly_guidance,
)
from meal_tracker_api.services.profile import ProfileService
from meal_tracker_api.utils.dates import UTC_TZ

# Wednesday; the week (starting Sunday) began 2025-01-05
WEDNESDAY = datetime(2025, 1, 8, 15, 30, tzinfo=UTC_TZ)
WEEK_START = "2025-01-05T00:00:00.000Z"


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, timezone="UTC", week_starts_on=0, default_weekly_target=14000)


def meal(calories: float, **fields) -> Meal:
    return Meal(id="m", user_id=USER_ID, date="2025-01-08T08:00:00.000Z", calories=calories, **fields)


def target(calories: float = 14000) -> WeeklyTarget:
    return WeeklyTarget(id="t-1", user_id=USER_ID, start_date=WEEK_START, target_calories=calories)


class TestWeeklyTarget:
    """Tests for weekly target lookup."""

    @pytest.mark.asyncio
    async def test_existing_target(self, uow, settings):
        uow.weekly_targets.get_for_week.return_value = target(10500)
        service = DashboardService(uow, settings)

        result = await service.get_weekly_target(USER_ID, WEDNESDAY)

        assert result.target_calories == 10500
        uow.weekly_targets.get_for_week.assert_called_once_with(USER_ID, WEEK_START)
        uow.weekly_targets.get_or_create.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_target_created_with_default(self, uow, settings):
        uow.weekly_targets.get_for_week.return_value = None
        uow.weekly_targets.get_or_create.return_value = target()
        service = DashboardService(uow, settings)

        await service.get_weekly_target(USER_ID, WEDNESDAY)

        uow.weekly_targets.get_or_create.assert_called_once_with(USER_ID, WEEK_START, 14000)

    @pytest.mark.asyncio
    async def test_daily_goal_is_weekly_over_seven(self, uow, settings):
        uow.weekly_targets.get_for_week.return_value = target(12600)
        service = DashboardService(uow, settings)

        assert await service.daily_calorie_goal(USER_ID, WEDNESDAY) == 1800

    @pytest.mark.asyncio
    async def test_update_target(self, uow, settings):
        uow.weekly_targets.get_for_week.return_value = target()
        uow.weekly_targets.set_target.return_value = target(9800)
        service = DashboardService(uow, settings)

        result = await service.update_weekly_target(USER_ID, 9800, WEDNESDAY)

        assert result.target_calories == 9800
        uow.weekly_targets.set_target.assert_called_once_with(USER_ID, "t-1", 9800)


class TestProgress:
    """Tests for today and weekly progress."""

    @pytest.mark.asyncio
    async def test_today(self, uow, settings):
        uow.weekly_targets.get_for_week.return_value = target()
        uow.meals.get_in_range.return_value = [meal(500, protein=20), meal(700)]
        service = DashboardService(uow, settings)

        today = await service.get_today(USER_ID, WEDNESDAY)

        assert today.date == "2025-01-08"
        assert today.totals.calories == 1200
        assert today.totals.protein == 20
        assert today.calorie_goal == 2000
        assert today.calories_remaining == 800
        uow.meals.get_in_range.assert_called_once_with(USER_ID, "2025-01-08T00:00:00.000Z")

    @pytest.mark.asyncio
    async def test_weekly_progress(self, uow, settings):
        uow.weekly_targets.get_for_week.return_value = target(14000)
        uow.meals.get_in_range.return_value = [meal(3000), meal(3000)]
        service = DashboardService(uow, settings)

        progress = await service.get_weekly_progress(USER_ID, WEDNESDAY)

        assert progress.consumed_calories == 6000
        assert progress.remaining_calories == 8000
        assert progress.days_remaining == 4
        assert progress.daily_average_remaining == 2000
        assert progress.progress_percentage == pytest.approx(42.857, rel=1e-3)
        assert progress.daily_calorie_goal == 2000
        assert progress.message == ON_TRACK_MESSAGE
        assert progress.start_date == WEEK_START
        assert progress.end_date == "2025-01-11T23:59:59.999Z"

    @pytest.mark.asyncio
    async def test_weekly_progress_over_target(self, uow, settings):
        uow.weekly_targets.get_for_week.return_value = target(7000)
        uow.meals.get_in_range.return_value = [meal(8000)]
        service = DashboardService(uow, settings)

        progress = await service.get_weekly_progress(USER_ID, WEDNESDAY)

        assert progress.daily_average_remaining == -250
        assert progress.message == OVER_AVERAGE_MESSAGE

    def test_guidance_text(self):
        assert weekly_guidance(-1) == OVER_AVERAGE_MESSAGE
        assert weekly_guidance(0) == "Looking good! Aim for around 0 kcal today."
        assert weekly_guidance(999) == "Looking good! Aim for around 999 kcal today."
        assert weekly_guidance(1000) == ON_TRACK_MESSAGE


class TestProtein:
    """Tests for protein intake."""

    @pytest.mark.asyncio
    async def test_uses_saved_goal(self, uow, settings):
        uow.meals.get_in_range.return_value = [meal(400, protein=30), meal(300, protein=None)]
        uow.user_settings.get.return_value = UserSettings(user_id=USER_ID, protein_goal=120)
        service = DashboardService(uow, settings)

        intake = await service.get_protein_intake(USER_ID, WEDNESDAY)

        assert intake.protein_goal == 120
        assert intake.total_protein == 30
        assert intake.consumed == 30
        assert intake.remaining == 90
        assert intake.percentage == 25
        assert intake.is_over_goal is False

    @pytest.mark.asyncio
    async def test_over_goal_is_capped(self, uow, settings):
        uow.meals.get_in_range.return_value = [meal(900, protein=180)]
        service = DashboardService(uow, settings)

        intake = await service.get_protein_intake(USER_ID, WEDNESDAY)

        assert intake.protein_goal == 150
        assert intake.consumed == 150
        assert intake.remaining == 0
        assert intake.percentage == 120
        assert intake.is_over_goal is True


class TestHistory:
    """Tests for history summaries."""

    @pytest.mark.asyncio
    async def test_totals_and_average(self, uow, settings):
        uow.meals.get_in_range.return_value = [meal(600, protein=20, fat=10), meal(400, carbohydrates=50)]
        service = DashboardService(uow, settings)

        summary = await service.get_history(USER_ID, datetime(2025, 1, 1), datetime(2025, 1, 7))

        assert summary.total_calories == 1000
        assert summary.average_calories == 500
        assert summary.total_protein == 20
        assert summary.total_carbohydrates == 50
        assert summary.total_fat == 10
        uow.meals.get_in_range.assert_called_once_with(
            USER_ID, "2025-01-01T00:00:00.000Z", "2025-01-07T23:59:59.999Z"
        )

    @pytest.mark.asyncio
    async def test_empty_history(self, uow, settings):
        uow.meals.get_in_range.return_value = []
        service = DashboardService(uow, settings)

        summary = await service.get_history(USER_ID, datetime(2025, 1, 1), datetime(2025, 1, 1))

        assert summary.average_calories == 0


class TestProfileService:
    """Tests for ProfileService."""

    @pytest.mark.asyncio
    async def test_defaults_when_nothing_saved(self, uow, settings):
        service = ProfileService(uow, settings)

        result = await service.get_settings(USER_ID)

        assert result.protein_goal == 150
        assert result.dietary_preference == DietaryPreference.VEGETARIAN_EGGLESS
        assert result.ai_model is None

    @pytest.mark.asyncio
    async def test_first_update_stores_defaults_too(self, uow, settings):
        uow.user_settings.upsert.return_value = UserSettings(user_id=USER_ID, ai_model="gemini-2.5-pro")
        service = ProfileService(uow, settings)

        await service.update_settings(USER_ID, UserSettingsUpdate(ai_model="gemini-2.5-pro"))

        uow.user_settings.upsert.assert_called_once_with(
            USER_ID,
            {"proteinGoal": 150, "dietaryPreference": "vegetarian-eggless", "aiModel": "gemini-2.5-pro"},
        )

    @pytest.mark.asyncio
    async def test_later_update_is_partial(self, uow, settings):
        uow.user_settings.get.return_value = UserSettings(user_id=USER_ID, protein_goal=100)
        uow.user_settings.upsert.return_value = UserSettings(user_id=USER_ID, protein_goal=130)
        service = ProfileService(uow, settings)

        await service.update_settings(USER_ID, UserSettingsUpdate(protein_goal=130))

        uow.user_settings.upsert.assert_called_once_with(USER_ID, {"proteinGoal": 130})

    @pytest.mark.asyncio
    async def test_ai_model(self, uow, settings):
        uow.user_settings.get.return_value = UserSettings(user_id=USER_ID, ai_model="gemini-2.0-flash")
        service = ProfileService(uow, settings)

        assert await service.get_ai_model(USER_ID) == "gemini-2.0-flash"
