"""LLM access and estimation contracts."""

from .contracts import (
    ANALYZE_MEAL_IMAGE,
    CREATE_RECIPE,
    FOOD_SUGGESTIONS,
    LOG_MEAL,
    EstimationContract,
    invoke_contract,
)
from .llm import get_llm, get_llm_info

__all__ = [
    "ANALYZE_MEAL_IMAGE",
    "CREATE_RECIPE",
    "FOOD_SUGGESTIONS",
    "LOG_MEAL",
    "EstimationContract",
    "get_llm",
    "get_llm_info",
    "invoke_contract",
]
