"""Input and output schemas for every estimation call.

Output models are the contract the inference endpoint must satisfy. A
response that fails validation against them is rejected as a whole.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .base import CamelModel, MacroFields, RequiredText, StrictCount, StrictNumber, StrictText
from .user_settings import DietaryPreference


class ContractModel(CamelModel):
    """Base for model-facing schemas; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")


# =============================================================================
# Text meal logging
# =============================================================================


class LogMealInput(ContractModel):
    """Free-text meal description."""

    meal_description: RequiredText = Field(
        ..., description="A description of the meal, including all food items and approximate quantities."
    )


class LogMealOutput(ContractModel, MacroFields):
    """Estimate for a text-described meal."""

    estimated_calories: StrictNumber = Field(..., description="The estimated calorie count for the meal.")
    food_items: list[StrictText] = Field(
        ..., description="A list of the food items identified in the meal description."
    )


# =============================================================================
# Image meal logging
# =============================================================================


class AnalyzeMealImageInput(ContractModel):
    """Image reference: an http(s) URL or a base64 data URL."""

    image_url: RequiredText = Field(..., description="The URL or base64 data of the meal image to analyze.")


class FoodItem(ContractModel, MacroFields):
    """A detected food item with per-item nutrition."""

    name: RequiredText = Field(..., description="The name of the food item")
    quantity: StrictText = Field(..., description='The estimated quantity (e.g., "1 cup", "200g", "2 pieces")')
    calories: StrictNumber = Field(..., description="Estimated calories for this item")


class AnalyzeMealImageOutput(ContractModel):
    """Estimate for a meal photo."""

    food_items: list[FoodItem] = Field(..., description="List of detected food items with nutritional information")
    total_calories: StrictNumber = Field(..., description="Total estimated calories for the entire meal")
    total_protein: StrictNumber | None = Field(None, description="Total estimated grams of protein")
    total_carbohydrates: StrictNumber | None = Field(None, description="Total estimated grams of carbohydrates")
    total_fat: StrictNumber | None = Field(None, description="Total estimated grams of fat")
    total_fiber: StrictNumber | None = Field(None, description="Total estimated grams of fiber")
    confidence: StrictText | None = Field(None, description="Confidence level of the analysis (high, medium, low)")
    suggestions: StrictText | None = Field(None, description="Any suggestions or notes about the meal")


# =============================================================================
# Recipe generation
# =============================================================================


class CreateRecipeInput(ContractModel):
    """Free-text recipe request."""

    recipe_prompt: RequiredText = Field(
        ...,
        description="A description of the recipe, including the dish name and any specific requirements.",
    )


class RecipeIngredient(ContractModel):
    """One ingredient line of a recipe."""

    name: RequiredText = Field(..., description="Name of the ingredient")
    quantity: StrictText = Field(..., description='Quantity with unit (e.g., "2 cups", "100g", "1 tbsp")')
    notes: StrictText | None = Field(None, description="Optional notes about the ingredient")


class CreateRecipeOutput(ContractModel, MacroFields):
    """Generated recipe with per-serving nutrition."""

    name: RequiredText = Field(..., description="A clear, concise name for the recipe")
    description: StrictText | None = Field(None, description="A brief description of the dish")
    ingredients: list[RecipeIngredient] = Field(..., description="List of ingredients with quantities")
    servings: StrictCount = Field(..., ge=1, description="Number of servings this recipe makes")
    calories: StrictNumber = Field(..., description="Total calories per serving")


# =============================================================================
# Suggestion step
# =============================================================================


class ConversationTurn(CamelModel):
    """One asked question and the user's answer."""

    question: str
    answer: str


class FoodSuggestionsInput(ContractModel):
    """Profile and full ordered conversation so far."""

    dietary_preferences: DietaryPreference
    calorie_goal: float = Field(
        ..., ge=0, allow_inf_nan=False, description="The user's daily calorie goal."
    )
    conversation_history: list[ConversationTurn] = Field(default_factory=list)


class NextQuestion(ContractModel):
    """A clarifying question with selectable options."""

    question: RequiredText = Field(..., description="The next question to ask the user.")
    options: list[RequiredText] = Field(
        ..., min_length=1, description="A list of options for the user to choose from."
    )


class Suggestion(ContractModel):
    """A suggested dish."""

    name: RequiredText = Field(..., description="The name of the suggested dish.")
    recipe: RequiredText = Field(..., description="A brief recipe or preparation instructions.")


class FoodSuggestionsOutput(ContractModel):
    """Either the next question or exactly two final suggestions, never both."""

    next_question: NextQuestion | None = None
    suggestions: list[Suggestion] | None = Field(None, description="The final list of 2 meal suggestions.")

    @model_validator(mode="after")
    def exactly_one_outcome(self) -> "FoodSuggestionsOutput":
        has_question = self.next_question is not None
        has_suggestions = bool(self.suggestions)
        if has_question and has_suggestions:
            raise ValueError("nextQuestion and suggestions must not both be set")
        if not has_question and not has_suggestions:
            raise ValueError("one of nextQuestion or suggestions is required")
        if has_suggestions and len(self.suggestions) != 2:
            raise ValueError(f"expected exactly 2 suggestions, got {len(self.suggestions)}")
        return self


# =============================================================================
# Caller-facing result
# =============================================================================


T = TypeVar("T")


class EstimationResult(BaseModel, Generic[T]):
    """Uniform outcome of an estimation call: data on success, a user-facing message otherwise."""

    success: bool
    data: T | None = None
    error: str | None = None
