"""FastAPI dependency injection factories."""

import logging
from typing import Annotated

from fastapi import Depends, Header
from motor.motor_asyncio import AsyncIOMotorDatabase

from meal_tracker_api.agents.llm import get_llm
from meal_tracker_api.core.config import Settings, get_settings
from meal_tracker_api.core.exceptions import AuthenticationError
from meal_tracker_api.db.mongo import MongoDB
from meal_tracker_api.db.unit_of_work import UnitOfWork
from meal_tracker_api.services.dashboard import DashboardService
from meal_tracker_api.services.estimation import EstimationService
from meal_tracker_api.services.meals import MealService
from meal_tracker_api.services.model_catalog import ModelCatalog, get_model_catalog
from meal_tracker_api.services.profile import ProfileService
from meal_tracker_api.services.recipes import RecipeService

logger = logging.getLogger(__name__)

# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_database() -> AsyncIOMotorDatabase:
    """
    Get the MongoDB database instance.

    Returns:
        Motor database instance
    """
    settings = get_settings()
    return MongoDB.get_database(settings.db_name)


def get_uow(db: AsyncIOMotorDatabase = Depends(get_database)) -> UnitOfWork:
    """
    Get Unit of Work instance.

    Args:
        db: Injected database instance

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(db)


# Type alias for UoW dependency
UoWDep = Annotated[UnitOfWork, Depends(get_uow)]


def get_current_user_id(
    x_user_id: Annotated[str | None, Header(alias="X-User-Id")] = None,
) -> str:
    """
    Identify the caller from the upstream-verified user header.

    Raises:
        AuthenticationError: If the header is missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise AuthenticationError()
    return x_user_id.strip()


UserIdDep = Annotated[str, Depends(get_current_user_id)]


def get_profile_service(uow: UoWDep, settings: SettingsDep) -> ProfileService:
    """Get ProfileService instance."""
    return ProfileService(uow, settings)


async def get_estimation_service(
    user_id: UserIdDep,
    settings: SettingsDep,
    profile: Annotated[ProfileService, Depends(get_profile_service)],
) -> EstimationService:
    """
    Get an EstimationService bound to the user's chosen model.

    When no provider is configured the service is still returned; its
    calls then fail with the usual user-facing messages.
    """
    model = await profile.get_ai_model(user_id)
    try:
        llm = get_llm(settings, model=model)
    except ValueError as e:
        logger.warning(f"LLM unavailable: {e}")
        llm = None
    return EstimationService(llm, timeout=settings.llm_timeout_seconds)


EstimationServiceDep = Annotated[EstimationService, Depends(get_estimation_service)]


def get_meal_service(uow: UoWDep, estimator: EstimationServiceDep) -> MealService:
    """
    Get MealService instance.

    Args:
        uow: Injected Unit of Work
        estimator: Injected estimation service

    Returns:
        MealService instance
    """
    return MealService(uow, estimator)


def get_recipe_service(uow: UoWDep, estimator: EstimationServiceDep) -> RecipeService:
    """Get RecipeService instance."""
    return RecipeService(uow, estimator)


def get_dashboard_service(uow: UoWDep, settings: SettingsDep) -> DashboardService:
    """
    Get DashboardService instance.

    Args:
        uow: Injected Unit of Work
        settings: Injected settings

    Returns:
        DashboardService instance
    """
    return DashboardService(uow, settings)


# Type aliases for service dependencies
MealServiceDep = Annotated[MealService, Depends(get_meal_service)]
RecipeServiceDep = Annotated[RecipeService, Depends(get_recipe_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
ModelCatalogDep = Annotated[ModelCatalog, Depends(get_model_catalog)]
