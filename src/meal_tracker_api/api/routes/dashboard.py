"""Dashboard API routes."""

from datetime import datetime

from fastapi import APIRouter, Query

from meal_tracker_api.api.dependencies import DashboardServiceDep, UserIdDep
from meal_tracker_api.core.exceptions import ValidationError
from meal_tracker_api.models.dashboard import (
    HistorySummary,
    ProteinIntake,
    TodaySummary,
    WeeklyProgress,
)
from meal_tracker_api.utils.dates import to_iso

router = APIRouter()


@router.get("/today", response_model=TodaySummary)
async def get_today(user_id: UserIdDep, service: DashboardServiceDep):
    """Today's meals, calorie and macro totals, and the remaining daily goal."""
    return await service.get_today(user_id)


@router.get("/weekly", response_model=WeeklyProgress)
async def get_weekly_progress(user_id: UserIdDep, service: DashboardServiceDep):
    """
    Progress against this week's calorie target.

    Includes the average calories left per remaining day and a short
    guidance message.
    """
    return await service.get_weekly_progress(user_id)


@router.get("/protein", response_model=ProteinIntake)
async def get_protein_intake(
    user_id: UserIdDep,
    service: DashboardServiceDep,
    date: datetime | None = Query(None, description="Day to report (defaults to today)"),
):
    """Protein eaten on a day against the user's protein goal."""
    return await service.get_protein_intake(user_id, date)


@router.get("/history", response_model=HistorySummary)
async def get_history(
    user_id: UserIdDep,
    service: DashboardServiceDep,
    start: datetime = Query(..., description="First day of the range"),
    end: datetime = Query(..., description="Last day of the range"),
):
    """Meals and nutrition totals over a date range."""
    # Naive bounds are read as UTC, the same way the service reads them
    if to_iso(end) < to_iso(start):
        raise ValidationError("end must not be before start")
    return await service.get_history(user_id, start, end)
