"""Meal suggestion dialogue API routes.

The server keeps no session: each response carries the history, and the
client sends it back with the next answer.
"""

from fastapi import APIRouter

from meal_tracker_api.api.dependencies import (
    DashboardServiceDep,
    EstimationServiceDep,
    ProfileServiceDep,
    SettingsDep,
    UserIdDep,
)
from meal_tracker_api.models.suggestion import (
    DietaryProfile,
    SuggestionAnswerRequest,
    SuggestionStartRequest,
    SuggestionStepResponse,
)
from meal_tracker_api.services.suggestions import SuggestionDialogue, resolve_answer

router = APIRouter()


@router.post("/start", response_model=SuggestionStepResponse)
async def start_suggestions(
    user_id: UserIdDep,
    estimator: EstimationServiceDep,
    profile_service: ProfileServiceDep,
    dashboard: DashboardServiceDep,
    settings: SettingsDep,
    request: SuggestionStartRequest | None = None,
):
    """
    Start a suggestion dialogue.

    Omitted fields fall back to the saved dietary preference and the
    daily goal derived from this week's target.
    """
    request = request or SuggestionStartRequest()

    dietary_preference = request.dietary_preference
    if dietary_preference is None:
        dietary_preference = (await profile_service.get_settings(user_id)).dietary_preference

    calorie_goal = request.calorie_goal
    if calorie_goal is None:
        calorie_goal = await dashboard.daily_calorie_goal(user_id)

    profile = DietaryProfile(dietary_preference=dietary_preference, calorie_goal=calorie_goal)
    dialogue = SuggestionDialogue(estimator, max_questions=settings.suggestion_max_questions)
    state = await dialogue.start(profile)

    return SuggestionStepResponse(state=state, history=dialogue.history, profile=profile)


@router.post("/answer", response_model=SuggestionStepResponse)
async def answer_suggestion(
    request: SuggestionAnswerRequest,
    _user_id: UserIdDep,
    estimator: EstimationServiceDep,
    settings: SettingsDep,
):
    """
    Answer the last question and get the next step.

    - **selected**: The chosen option, or ``Other``
    - **otherText**: Required when ``Other`` is chosen
    """
    answer = resolve_answer(request.selected, request.other_text)
    dialogue = SuggestionDialogue.restore(
        estimator,
        request.profile,
        request.history,
        request.question,
        request.options,
        max_questions=settings.suggestion_max_questions,
    )
    state = await dialogue.submit_answer(answer)

    return SuggestionStepResponse(state=state, history=dialogue.history, profile=request.profile)
