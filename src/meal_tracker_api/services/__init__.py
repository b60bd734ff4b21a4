"""Business logic services."""

from .dashboard import DashboardService
from .estimation import EstimationService
from .meals import MealService
from .model_catalog import ModelCatalog, get_model_catalog
from .profile import ProfileService
from .recipes import RecipeService
from .suggestions import InvalidTransition, SuggestionDialogue, resolve_answer

__all__ = [
    "DashboardService",
    "EstimationService",
    "InvalidTransition",
    "MealService",
    "ModelCatalog",
    "ProfileService",
    "RecipeService",
    "SuggestionDialogue",
    "get_model_catalog",
    "resolve_answer",
]
