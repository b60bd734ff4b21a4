"""Prompt templates for the estimation contracts."""

from .analyze_meal_image import ANALYZE_MEAL_IMAGE_PROMPT
from .create_recipe import CREATE_RECIPE_PROMPT
from .food_suggestions import FOOD_SUGGESTIONS_PROMPT, render_food_suggestions_prompt
from .log_meal import LOG_MEAL_PROMPT

__all__ = [
    "ANALYZE_MEAL_IMAGE_PROMPT",
    "CREATE_RECIPE_PROMPT",
    "FOOD_SUGGESTIONS_PROMPT",
    "LOG_MEAL_PROMPT",
    "render_food_suggestions_prompt",
]
