"""Profile API routes: settings, weekly target and model selection."""

from fastapi import APIRouter

from meal_tracker_api.api.dependencies import (
    DashboardServiceDep,
    ModelCatalogDep,
    ProfileServiceDep,
    UserIdDep,
)
from meal_tracker_api.models.user_settings import (
    UserSettings,
    UserSettingsUpdate,
    WeeklyTarget,
    WeeklyTargetUpdate,
)
from meal_tracker_api.services.model_catalog import recommended_models

router = APIRouter()


@router.get("/settings", response_model=UserSettings)
async def get_settings(user_id: UserIdDep, service: ProfileServiceDep):
    """Get the user's settings (defaults if none were saved)."""
    return await service.get_settings(user_id)


@router.patch("/settings", response_model=UserSettings)
async def update_settings(
    update: UserSettingsUpdate,
    user_id: UserIdDep,
    service: ProfileServiceDep,
):
    """
    Update settings.

    - **proteinGoal**: Daily protein goal in grams
    - **dietaryPreference**: ``vegetarian-eggless`` or ``non-vegetarian``
    - **aiModel**: Model used for this user's estimates
    """
    return await service.update_settings(user_id, update)


@router.get("/weekly-target", response_model=WeeklyTarget)
async def get_weekly_target(user_id: UserIdDep, service: DashboardServiceDep):
    """This week's calorie target (created with the default if missing)."""
    return await service.get_weekly_target(user_id)


@router.put("/weekly-target", response_model=WeeklyTarget)
async def update_weekly_target(
    update: WeeklyTargetUpdate,
    user_id: UserIdDep,
    service: DashboardServiceDep,
):
    """Set this week's calorie target."""
    return await service.update_weekly_target(user_id, update.target_calories)


@router.get("/models")
async def list_models(_user_id: UserIdDep, catalog: ModelCatalogDep):
    """Models available for estimation, plus the recommended subset."""
    models = await catalog.list_models()
    return {
        "models": [model.model_dump(by_alias=True) for model in models],
        "recommended": recommended_models(),
    }
