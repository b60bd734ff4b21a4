"""Dashboard service for calorie and protein progress.

All day and week boundaries are computed in the configured timezone and
converted to stored UTC strings for the range queries.
"""

import logging
from datetime import datetime

from meal_tracker_api.core.config import Settings, get_settings
from meal_tracker_api.db.unit_of_work import UnitOfWork
from meal_tracker_api.models.dashboard import (
    HistorySummary,
    ProteinIntake,
    TodaySummary,
    WeeklyProgress,
)
from meal_tracker_api.models.user_settings import WeeklyTarget
from meal_tracker_api.utils.dates import (
    day_of_week,
    end_of_day,
    end_of_week,
    get_timezone,
    start_of_day,
    start_of_week,
    to_iso,
    utc_now,
)
from meal_tracker_api.utils.nutrition import sum_nutrition

logger = logging.getLogger(__name__)

OVER_AVERAGE_MESSAGE = "You're over your average. Try to consume less today."
ON_TRACK_MESSAGE = "You're on track for your weekly goal!"
LOW_REMAINING_THRESHOLD = 1000


def weekly_guidance(daily_average_remaining: int) -> str:
    """Guidance text for the weekly goal card."""
    if daily_average_remaining < 0:
        return OVER_AVERAGE_MESSAGE
    if daily_average_remaining < LOW_REMAINING_THRESHOLD:
        return f"Looking good! Aim for around {daily_average_remaining} kcal today."
    return ON_TRACK_MESSAGE


class DashboardService:
    """Service for dashboard data aggregation."""

    def __init__(self, uow: UnitOfWork, settings: Settings | None = None):
        """Initialize dashboard service."""
        self.uow = uow
        self.settings = settings or get_settings()
        self.tz = get_timezone(self.settings.timezone)

    def _now(self, reference: datetime | None) -> datetime:
        return reference or utc_now()

    async def get_weekly_target(self, user_id: str, reference: datetime | None = None) -> WeeklyTarget:
        """
        Get the current week's target, creating it with the default if absent.

        Args:
            user_id: Owning user
            reference: Any moment inside the week (defaults to now)

        Returns:
            WeeklyTarget for the week containing ``reference``
        """
        week_start = to_iso(start_of_week(self._now(reference), self.tz, self.settings.week_starts_on))
        target = await self.uow.weekly_targets.get_for_week(user_id, week_start)
        if target is None:
            logger.info(f"Creating default weekly target for user {user_id} (week {week_start})")
            target = await self.uow.weekly_targets.get_or_create(
                user_id, week_start, self.settings.default_weekly_target
            )
        return target

    async def update_weekly_target(
        self,
        user_id: str,
        target_calories: float,
        reference: datetime | None = None,
    ) -> WeeklyTarget:
        """Set the current week's calorie target."""
        target = await self.get_weekly_target(user_id, reference)
        updated = await self.uow.weekly_targets.set_target(user_id, target.id, target_calories)
        return updated or target.model_copy(update={"target_calories": target_calories})

    async def daily_calorie_goal(self, user_id: str, reference: datetime | None = None) -> int:
        """Weekly target spread evenly over seven days."""
        target = await self.get_weekly_target(user_id, reference)
        return round(target.target_calories / 7)

    async def get_today(self, user_id: str, reference: datetime | None = None) -> TodaySummary:
        """
        Meals and totals since local midnight.

        Returns:
            TodaySummary with meals newest first
        """
        now = self._now(reference)
        day_start = start_of_day(now, self.tz)
        meals = await self.uow.meals.get_in_range(user_id, to_iso(day_start))
        totals = sum_nutrition(meals)
        goal = await self.daily_calorie_goal(user_id, now)

        return TodaySummary(
            date=day_start.date().isoformat(),
            meals=meals,
            totals=totals,
            calorie_goal=goal,
            calories_remaining=goal - totals.calories,
        )

    async def get_weekly_progress(self, user_id: str, reference: datetime | None = None) -> WeeklyProgress:
        """
        Progress against the current week's target.

        Days remaining counts today, so it runs from 7 on the first day of
        the week down to 1 on the last.
        """
        now = self._now(reference)
        week_starts_on = self.settings.week_starts_on
        week_start = start_of_week(now, self.tz, week_starts_on)
        week_end = end_of_week(now, self.tz, week_starts_on)

        target = await self.get_weekly_target(user_id, now)
        meals = await self.uow.meals.get_in_range(user_id, to_iso(week_start), to_iso(week_end))
        consumed = sum_nutrition(meals).calories
        remaining = target.target_calories - consumed

        days_remaining = 7 - day_of_week(now, self.tz, week_starts_on)
        daily_average_remaining = round(remaining / days_remaining) if days_remaining > 0 else 0

        return WeeklyProgress(
            start_date=to_iso(week_start),
            end_date=to_iso(week_end),
            target_calories=target.target_calories,
            consumed_calories=consumed,
            remaining_calories=remaining,
            progress_percentage=consumed / target.target_calories * 100,
            days_remaining=days_remaining,
            daily_average_remaining=daily_average_remaining,
            daily_calorie_goal=round(target.target_calories / 7),
            message=weekly_guidance(daily_average_remaining),
        )

    async def get_protein_intake(self, user_id: str, date: datetime | None = None) -> ProteinIntake:
        """
        Protein eaten on one local day against the user's goal.

        Args:
            user_id: Owning user
            date: Any moment on the day of interest (defaults to today)
        """
        day = self._now(date)
        meals = await self.uow.meals.get_in_range(
            user_id,
            to_iso(start_of_day(day, self.tz)),
            to_iso(end_of_day(day, self.tz)),
        )
        total = sum_nutrition(meals).protein

        user_settings = await self.uow.user_settings.get(user_id)
        goal = user_settings.protein_goal if user_settings else self.settings.default_protein_goal

        return ProteinIntake(
            date=start_of_day(day, self.tz).date().isoformat(),
            protein_goal=goal,
            total_protein=total,
            consumed=min(total, goal),
            remaining=max(0, goal - total),
            percentage=round(total / goal * 100) if goal > 0 else 0,
            is_over_goal=total > goal,
        )

    async def get_history(self, user_id: str, start: datetime, end: datetime) -> HistorySummary:
        """
        Meals and totals between two local days, inclusive.

        Args:
            user_id: Owning user
            start: First day of the range
            end: Last day of the range
        """
        range_start = to_iso(start_of_day(start, self.tz))
        range_end = to_iso(end_of_day(end, self.tz))
        meals = await self.uow.meals.get_in_range(user_id, range_start, range_end)
        totals = sum_nutrition(meals)

        return HistorySummary(
            start=range_start,
            end=range_end,
            meals=meals,
            total_calories=totals.calories,
            average_calories=totals.calories / len(meals) if meals else 0,
            total_protein=totals.protein,
            total_carbohydrates=totals.carbohydrates,
            total_fat=totals.fat,
        )
