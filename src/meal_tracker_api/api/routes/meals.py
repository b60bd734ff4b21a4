"""Meal logging API routes."""

from datetime import datetime

from fastapi import APIRouter, Query, status

from meal_tracker_api.api.dependencies import MealServiceDep, SettingsDep, UserIdDep
from meal_tracker_api.models.meal import (
    Meal,
    MealLogResponse,
    MealUpdate,
    PhotoMealRequest,
    RecipeMealRequest,
    SuggestionMealRequest,
    TextMealRequest,
)
from meal_tracker_api.utils.dates import get_timezone, start_of_week, utc_now

router = APIRouter()


@router.post("", response_model=MealLogResponse)
async def log_text_meal(
    request: TextMealRequest,
    user_id: UserIdDep,
    service: MealServiceDep,
):
    """
    Log a meal from a text description.

    Nutrition is estimated first; if estimation fails nothing is stored
    and ``success`` is false with a short message.
    """
    return await service.log_text_meal(user_id, request.description)


@router.post("/photo", response_model=Meal, status_code=status.HTTP_201_CREATED)
async def log_photo_meal(
    request: PhotoMealRequest,
    user_id: UserIdDep,
    service: MealServiceDep,
):
    """Log the reviewed items from a photo analysis as one meal."""
    return await service.log_photo_meal(
        user_id,
        request.items,
        name=request.name,
        description=request.description,
    )


@router.post("/recipe", response_model=Meal, status_code=status.HTTP_201_CREATED)
async def log_recipe_meal(
    request: RecipeMealRequest,
    user_id: UserIdDep,
    service: MealServiceDep,
):
    """Log servings of a saved recipe."""
    return await service.log_recipe_meal(user_id, request.recipe_id, request.servings)


@router.post("/suggestion", response_model=MealLogResponse)
async def log_suggestion_meal(
    request: SuggestionMealRequest,
    user_id: UserIdDep,
    service: MealServiceDep,
):
    """Log a dish picked from the suggestion dialogue."""
    return await service.log_suggestion_meal(user_id, request.suggestion)


@router.get("", response_model=list[Meal])
async def list_meals(
    user_id: UserIdDep,
    service: MealServiceDep,
    settings: SettingsDep,
    start: datetime | None = Query(None, description="Range start (defaults to start of week)"),
    end: datetime | None = Query(None, description="Range end (defaults to open-ended)"),
):
    """List meals in a date range, newest first."""
    if start is None:
        start = start_of_week(utc_now(), get_timezone(settings.timezone), settings.week_starts_on)
    return await service.list_meals(user_id, start, end)


@router.get("/{meal_id}", response_model=Meal)
async def get_meal(meal_id: str, user_id: UserIdDep, service: MealServiceDep):
    """Get a single meal."""
    return await service.get_meal(user_id, meal_id)


@router.patch("/{meal_id}", response_model=Meal)
async def update_meal(
    meal_id: str,
    update: MealUpdate,
    user_id: UserIdDep,
    service: MealServiceDep,
):
    """Edit a logged meal. Only the provided fields change."""
    return await service.update_meal(user_id, meal_id, update)


@router.delete("/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(meal_id: str, user_id: UserIdDep, service: MealServiceDep):
    """Delete a logged meal."""
    await service.delete_meal(user_id, meal_id)
