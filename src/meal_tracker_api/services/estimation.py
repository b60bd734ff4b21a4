"""Estimation service: the single boundary between callers and the inference endpoint."""

import logging
from typing import Any

from langchain_core.language_models import BaseChatModel
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from meal_tracker_api.agents.contracts import (
    ANALYZE_MEAL_IMAGE,
    CREATE_RECIPE,
    FOOD_SUGGESTIONS,
    LOG_MEAL,
    EstimationContract,
    invoke_contract,
)
from meal_tracker_api.core.exceptions import EndpointFailure, EstimationError, ValidationError
from meal_tracker_api.models.estimation import (
    AnalyzeMealImageInput,
    AnalyzeMealImageOutput,
    ConversationTurn,
    CreateRecipeInput,
    CreateRecipeOutput,
    EstimationResult,
    FoodSuggestionsInput,
    FoodSuggestionsOutput,
    LogMealInput,
    LogMealOutput,
)
from meal_tracker_api.models.suggestion import DietaryProfile

logger = logging.getLogger(__name__)

QUICK_CHECK_FAILURE = "Failed to estimate calories. Please try again."


class EstimationService:
    """
    Runs estimation contracts and turns every failure into a uniform result.

    Transport, endpoint and schema failures are logged with their kind and
    returned as ``EstimationResult(success=False, error=...)`` carrying only
    a short user-facing message. Invalid user input raises
    ``ValidationError`` before any call is made.
    """

    def __init__(self, llm: BaseChatModel | None, timeout: float | None = None):
        """
        Initialize estimation service.

        Args:
            llm: Chat model, or None when no provider is configured
                (every call then fails as an endpoint failure)
            timeout: Per-call timeout in seconds
        """
        self.llm = llm
        self.timeout = timeout

    @staticmethod
    def _build_input(model: type[BaseModel], message: str, **fields: Any) -> BaseModel:
        try:
            return model(**fields)
        except PydanticValidationError as e:
            raise ValidationError(
                message,
                details=e.errors(include_url=False, include_context=False),
            ) from e

    async def _run(
        self,
        contract: EstimationContract,
        payload: BaseModel,
        failure_message: str | None = None,
    ) -> EstimationResult:
        failure_message = failure_message or contract.failure_message
        try:
            if self.llm is None:
                raise EndpointFailure("No LLM provider configured", contract=contract.name)
            data = await invoke_contract(self.llm, contract, payload, timeout=self.timeout)
        except EstimationError as e:
            logger.warning(
                f"Estimation failed [{e.contract}/{e.kind}]: {e.message}",
                extra={"details": e.details},
            )
            return EstimationResult(success=False, error=failure_message)

        return EstimationResult(success=True, data=data)

    async def log_meal(self, description: str) -> EstimationResult[LogMealOutput]:
        """
        Estimate nutrition for a text-described meal.

        Args:
            description: What was eaten

        Returns:
            EstimationResult with LogMealOutput on success

        Raises:
            ValidationError: If the description is blank
        """
        payload = self._build_input(
            LogMealInput, "Meal description is required", meal_description=description
        )
        return await self._run(LOG_MEAL, payload)

    async def quick_check(self, description: str) -> EstimationResult[LogMealOutput]:
        """Estimate calories for a description without any intent to log it."""
        payload = self._build_input(
            LogMealInput, "Meal description is required", meal_description=description
        )
        return await self._run(LOG_MEAL, payload, failure_message=QUICK_CHECK_FAILURE)

    async def analyze_meal_image(self, image_url: str) -> EstimationResult[AnalyzeMealImageOutput]:
        """
        Identify food items in a meal photo and estimate their nutrition.

        Args:
            image_url: http(s) URL or ``data:image/...;base64,`` URL

        Returns:
            EstimationResult with AnalyzeMealImageOutput on success
        """
        payload = self._build_input(AnalyzeMealImageInput, "An image is required", image_url=image_url)
        return await self._run(ANALYZE_MEAL_IMAGE, payload)

    async def create_recipe(self, prompt: str) -> EstimationResult[CreateRecipeOutput]:
        """Draft a recipe with per-serving nutrition from a description."""
        payload = self._build_input(
            CreateRecipeInput, "Recipe description is required", recipe_prompt=prompt
        )
        return await self._run(CREATE_RECIPE, payload)

    async def suggest(
        self,
        profile: DietaryProfile,
        history: list[ConversationTurn],
    ) -> EstimationResult[FoodSuggestionsOutput]:
        """
        Run one suggestion step.

        The endpoint is stateless: the full ordered history is sent every
        time and prior model outputs are not.

        Args:
            profile: Dietary preference and daily calorie goal
            history: Question/answer pairs so far, oldest first

        Returns:
            EstimationResult with either a next question or two suggestions
        """
        payload = self._build_input(
            FoodSuggestionsInput,
            "Invalid suggestion request",
            dietary_preferences=profile.dietary_preference,
            calorie_goal=profile.calorie_goal,
            conversation_history=list(history),
        )
        return await self._run(FOOD_SUGGESTIONS, payload)
