"""Pydantic models for saved recipes."""

from pydantic import Field, field_validator

from .base import CamelModel, MacroFields
from .estimation import RecipeIngredient


class RecipeBase(MacroFields):
    """Recipe content; nutrition values are per serving."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    servings: int = Field(1, ge=1)
    calories: float = Field(..., ge=0, allow_inf_nan=False)


class RecipeCreate(RecipeBase):
    """Request body for saving a recipe."""


class Recipe(RecipeBase):
    """Stored recipe document."""

    id: str
    user_id: str
    created_at: str
    updated_at: str


class RecipeUpdate(CamelModel):
    """Partial update of a recipe; only ``description`` and the macros accept null."""

    name: str | None = Field(None, min_length=1)
    description: str | None = None
    ingredients: list[RecipeIngredient] | None = None
    servings: int | None = Field(None, ge=1)
    calories: float | None = Field(None, ge=0, allow_inf_nan=False)
    protein: float | None = Field(None, ge=0, allow_inf_nan=False)
    carbohydrates: float | None = Field(None, ge=0, allow_inf_nan=False)
    fat: float | None = Field(None, ge=0, allow_inf_nan=False)
    fiber: float | None = Field(None, ge=0, allow_inf_nan=False)

    @field_validator("name", "ingredients", "servings", "calories")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class RecipeGenerateRequest(CamelModel):
    """Describe a dish for the model to draft."""

    prompt: str
