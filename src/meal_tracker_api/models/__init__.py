"""Pydantic models for API schemas, stored documents and model output."""

from .dashboard import HistorySummary, NutritionTotals, ProteinIntake, TodaySummary, WeeklyProgress
from .estimation import (
    AnalyzeMealImageInput,
    AnalyzeMealImageOutput,
    ConversationTurn,
    CreateRecipeInput,
    CreateRecipeOutput,
    EstimationResult,
    FoodItem,
    FoodSuggestionsInput,
    FoodSuggestionsOutput,
    LogMealInput,
    LogMealOutput,
    NextQuestion,
    RecipeIngredient,
    Suggestion,
)
from .meal import Meal, MealUpdate
from .recipe import Recipe, RecipeCreate, RecipeUpdate
from .suggestion import (
    AwaitingInput,
    DietaryProfile,
    ErrorState,
    Idle,
    Loading,
    SuggestionState,
    SuggestionsReady,
)
from .user_settings import DietaryPreference, UserSettings, WeeklyTarget

__all__ = [
    # Estimation contracts
    "AnalyzeMealImageInput",
    "AnalyzeMealImageOutput",
    "ConversationTurn",
    "CreateRecipeInput",
    "CreateRecipeOutput",
    "EstimationResult",
    "FoodItem",
    "FoodSuggestionsInput",
    "FoodSuggestionsOutput",
    "LogMealInput",
    "LogMealOutput",
    "NextQuestion",
    "RecipeIngredient",
    "Suggestion",
    # Suggestion dialogue
    "AwaitingInput",
    "DietaryProfile",
    "ErrorState",
    "Idle",
    "Loading",
    "SuggestionState",
    "SuggestionsReady",
    # Documents
    "DietaryPreference",
    "Meal",
    "MealUpdate",
    "Recipe",
    "RecipeCreate",
    "RecipeUpdate",
    "UserSettings",
    "WeeklyTarget",
    # Dashboard
    "HistorySummary",
    "NutritionTotals",
    "ProteinIntake",
    "TodaySummary",
    "WeeklyProgress",
]
