"""Pydantic models for per-user settings and weekly targets."""

from enum import Enum

from pydantic import Field

from .base import CamelModel


class DietaryPreference(str, Enum):
    """Dietary preference used to tailor suggestions."""

    VEGETARIAN_EGGLESS = "vegetarian-eggless"
    NON_VEGETARIAN = "non-vegetarian"


class UserSettings(CamelModel):
    """Stored user settings document."""

    id: str | None = None
    user_id: str
    protein_goal: float = Field(150, ge=0, allow_inf_nan=False, description="Daily protein goal in grams")
    dietary_preference: DietaryPreference = DietaryPreference.VEGETARIAN_EGGLESS
    ai_model: str | None = Field(None, description="Model identifier, e.g. 'gemini-2.5-flash'")


class UserSettingsUpdate(CamelModel):
    """Partial update of user settings."""

    protein_goal: float | None = Field(None, ge=0, allow_inf_nan=False)
    dietary_preference: DietaryPreference | None = None
    ai_model: str | None = None


class WeeklyTarget(CamelModel):
    """Calorie target for one week, keyed by the week's start date."""

    id: str | None = None
    user_id: str
    start_date: str = Field(..., description="ISO-8601 start of week")
    target_calories: float = Field(..., gt=0, allow_inf_nan=False)


class WeeklyTargetUpdate(CamelModel):
    """Request body for changing the current week's target."""

    target_calories: float = Field(..., gt=0, allow_inf_nan=False, description="Weekly calorie target")
