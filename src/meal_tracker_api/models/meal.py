"""Pydantic models for logged meals."""

from datetime import datetime

from pydantic import Field, field_validator

from .base import CamelModel, MacroFields
from .estimation import FoodItem, Suggestion


class MealBase(MacroFields):
    """Fields shared by stored meals and meal writes."""

    name: str = "Meal"
    date: str = Field(..., description="ISO-8601 time the meal was eaten")
    description: str = ""
    food_items: list[str] = Field(default_factory=list)
    calories: float = Field(..., ge=0, allow_inf_nan=False)


class Meal(MealBase):
    """Stored meal document."""

    id: str
    user_id: str


class MealUpdate(CamelModel):
    """
    Partial update of a meal.

    Omitted fields are left alone. Macros may be set to null (unknown);
    the other fields may not.
    """

    name: str | None = None
    date: datetime | None = Field(None, description="When the meal was eaten")
    description: str | None = None
    food_items: list[str] | None = None
    calories: float | None = Field(None, ge=0, allow_inf_nan=False)
    protein: float | None = Field(None, ge=0, allow_inf_nan=False)
    carbohydrates: float | None = Field(None, ge=0, allow_inf_nan=False)
    fat: float | None = Field(None, ge=0, allow_inf_nan=False)
    fiber: float | None = Field(None, ge=0, allow_inf_nan=False)

    @field_validator("name", "date", "description", "food_items", "calories")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


# =============================================================================
# Logging requests
# =============================================================================


class TextMealRequest(CamelModel):
    """Log a meal from a free-text description."""

    description: str = Field(..., description="What was eaten, with rough quantities")


class QuickCheckRequest(CamelModel):
    """Estimate calories without logging anything."""

    description: str


class ImageAnalysisRequest(CamelModel):
    """Analyze a meal photo given as a URL or data URL."""

    image_url: str


class PhotoMealRequest(CamelModel):
    """Log the user-verified items from a photo analysis."""

    items: list[FoodItem] = Field(..., min_length=1)
    name: str = "Photo Meal"
    description: str | None = None


class RecipeMealRequest(CamelModel):
    """Log servings of a saved recipe."""

    recipe_id: str
    servings: float = Field(1, gt=0, allow_inf_nan=False)


class SuggestionMealRequest(CamelModel):
    """Log a dish picked from the suggestion dialogue."""

    suggestion: Suggestion


class MealLogResponse(CamelModel):
    """Outcome of a logging request."""

    success: bool
    meal: Meal | None = None
    error: str | None = None
