"""Pydantic models for dashboard and history views."""

from pydantic import Field

from .base import CamelModel
from .meal import Meal


class NutritionTotals(CamelModel):
    """Summed nutrition; unknown values were counted as zero."""

    calories: float = 0
    protein: float = 0
    carbohydrates: float = 0
    fat: float = 0
    fiber: float = 0


class TodaySummary(CamelModel):
    """Calories and macros logged since local midnight."""

    date: str
    meals: list[Meal] = Field(default_factory=list)
    totals: NutritionTotals = Field(default_factory=NutritionTotals)
    calorie_goal: float
    calories_remaining: float


class WeeklyProgress(CamelModel):
    """Progress against the current week's calorie target."""

    start_date: str
    end_date: str
    target_calories: float
    consumed_calories: float
    remaining_calories: float
    progress_percentage: float
    days_remaining: int
    daily_average_remaining: int
    daily_calorie_goal: int
    message: str


class ProteinIntake(CamelModel):
    """Protein eaten on one day against the user's goal."""

    date: str
    protein_goal: float
    total_protein: float
    consumed: float = Field(..., description="Total capped at the goal, for charting")
    remaining: float
    percentage: int
    is_over_goal: bool


class HistorySummary(CamelModel):
    """Meals and totals over a date range."""

    start: str
    end: str
    meals: list[Meal] = Field(default_factory=list)
    total_calories: float = 0
    average_calories: float = 0
    total_protein: float = 0
    total_carbohydrates: float = 0
    total_fat: float = 0
