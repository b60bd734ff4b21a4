"""Recipe API routes."""

from fastapi import APIRouter, status

from meal_tracker_api.api.dependencies import RecipeServiceDep, UserIdDep
from meal_tracker_api.models.estimation import CreateRecipeOutput, EstimationResult
from meal_tracker_api.models.recipe import (
    Recipe,
    RecipeCreate,
    RecipeGenerateRequest,
    RecipeUpdate,
)

router = APIRouter()


@router.post("/generate", response_model=EstimationResult[CreateRecipeOutput])
async def generate_recipe(
    request: RecipeGenerateRequest,
    _user_id: UserIdDep,
    service: RecipeServiceDep,
):
    """
    Draft a recipe with per-serving nutrition from a description.

    The draft is not saved. Review it, then ``POST /recipes``.
    """
    return await service.generate(request.prompt)


@router.post("", response_model=Recipe, status_code=status.HTTP_201_CREATED)
async def create_recipe(request: RecipeCreate, user_id: UserIdDep, service: RecipeServiceDep):
    """Save a recipe."""
    return await service.create(user_id, request)


@router.get("", response_model=list[Recipe])
async def list_recipes(user_id: UserIdDep, service: RecipeServiceDep):
    """List saved recipes, newest first."""
    return await service.list(user_id)


@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str, user_id: UserIdDep, service: RecipeServiceDep):
    return await service.get(user_id, recipe_id)


@router.patch("/{recipe_id}", response_model=Recipe)
async def update_recipe(
    recipe_id: str,
    update: RecipeUpdate,
    user_id: UserIdDep,
    service: RecipeServiceDep,
):
    """Edit a saved recipe. Only the provided fields change."""
    return await service.update(user_id, recipe_id, update)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(recipe_id: str, user_id: UserIdDep, service: RecipeServiceDep):
    await service.delete(user_id, recipe_id)
