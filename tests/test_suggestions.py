"""Unit tests for the suggestion dialogue controller."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError as PydanticValidationError

from conftest import make_estimator
from meal_tracker_api.core.exceptions import ValidationError
from meal_tracker_api.models.estimation import ConversationTurn
from meal_tracker_api.models.suggestion import (
    OTHER_OPTION,
    AwaitingInput,
    DietaryProfile,
    ErrorState,
    Idle,
    Loading,
    SuggestionsReady,
    with_other_option,
)
from meal_tracker_api.models.user_settings import DietaryPreference
from meal_tracker_api.services.suggestions import (
    NO_OUTCOME_MESSAGE,
    TOO_MANY_QUESTIONS_MESSAGE,
    InvalidTransition,
    SuggestionDialogue,
    resolve_answer,
)

MEAL_TYPE_QUESTION = {
    "nextQuestion": {
        "question": "What type of meal are you looking for?",
        "options": ["Breakfast", "Lunch", "Dinner", "Other"],
    }
}
PROTEIN_QUESTION = {
    "nextQuestion": {"question": "Protein?", "options": ["Paneer", "Tofu", "Paneer"]}
}
PANEER_SUGGESTIONS = {
    "suggestions": [
        {"name": "Paneer Bhurji", "recipe": "Scramble paneer with onion, tomato and spices."},
        {"name": "Palak Paneer", "recipe": "Simmer paneer cubes in spiced spinach puree."},
    ]
}


@pytest.fixture
def profile() -> DietaryProfile:
    return DietaryProfile(dietary_preference=DietaryPreference.VEGETARIAN_EGGLESS, calorie_goal=1800)


class Recorder:
    """Transition listener collecting (previous, current) statuses."""

    def __init__(self):
        self.transitions: list[tuple[str, str]] = []

    def __call__(self, previous, current):
        self.transitions.append((previous.status, current.status))


class TestStart:
    """Tests for SuggestionDialogue.start."""

    def test_new_dialogue_is_idle(self):
        dialogue = SuggestionDialogue(make_estimator(MEAL_TYPE_QUESTION))

        assert isinstance(dialogue.state, Idle)
        assert dialogue.history == []
        assert dialogue.profile is None

    @pytest.mark.asyncio
    async def test_start_goes_through_loading(self, profile):
        recorder = Recorder()
        dialogue = SuggestionDialogue(make_estimator(MEAL_TYPE_QUESTION), on_transition=recorder)

        await dialogue.start(profile)

        assert recorder.transitions == [("idle", "loading"), ("loading", "awaiting-input")]

    @pytest.mark.asyncio
    async def test_first_question_gets_other_once(self, profile):
        dialogue = SuggestionDialogue(make_estimator(MEAL_TYPE_QUESTION))

        state = await dialogue.start(profile)

        assert isinstance(state, AwaitingInput)
        assert state.question == "What type of meal are you looking for?"
        assert state.choices == ["Breakfast", "Lunch", "Dinner", "Other"]
        assert state.choices.count(OTHER_OPTION) == 1

    @pytest.mark.asyncio
    async def test_calorie_goal_zero_accepted(self):
        dialogue = SuggestionDialogue(make_estimator(MEAL_TYPE_QUESTION))
        profile = DietaryProfile(dietary_preference=DietaryPreference.NON_VEGETARIAN, calorie_goal=0)

        state = await dialogue.start(profile)

        assert isinstance(state, AwaitingInput)

    def test_negative_calorie_goal_rejected(self):
        with pytest.raises(PydanticValidationError):
            DietaryProfile(dietary_preference=DietaryPreference.NON_VEGETARIAN, calorie_goal=-1)

    @pytest.mark.parametrize("goal", [float("inf"), float("nan")])
    def test_non_finite_calorie_goal_rejected(self, goal):
        with pytest.raises(PydanticValidationError):
            DietaryProfile(dietary_preference=DietaryPreference.NON_VEGETARIAN, calorie_goal=goal)

    @pytest.mark.asyncio
    async def test_rejected_request_ends_in_error(self, profile):
        estimator = MagicMock()
        estimator.suggest = AsyncMock(side_effect=ValidationError("Invalid suggestion request"))
        dialogue = SuggestionDialogue(estimator)

        state = await dialogue.start(profile)

        assert isinstance(state, ErrorState)
        assert state.message == "Invalid suggestion request"
        assert isinstance(dialogue.state, ErrorState)

    @pytest.mark.asyncio
    async def test_failed_call_ends_in_error(self, profile):
        dialogue = SuggestionDialogue(make_estimator("I'd suggest dal."))

        state = await dialogue.start(profile)

        assert isinstance(state, ErrorState)
        assert state.message == "Failed to get suggestions. Please try again."

    @pytest.mark.asyncio
    async def test_restart_after_error_clears_history(self, profile):
        dialogue = SuggestionDialogue.restore(
            make_estimator("garbage", MEAL_TYPE_QUESTION),
            profile,
            [ConversationTurn(question="Meal type?", answer="Lunch")],
            "Protein?",
            ["Paneer"],
        )
        failed = await dialogue.submit_answer("Paneer")
        assert isinstance(failed, ErrorState)

        state = await dialogue.start(profile)

        assert isinstance(state, AwaitingInput)
        assert dialogue.history == []


class TestSubmitAnswer:
    """Tests for SuggestionDialogue.submit_answer."""

    @pytest.mark.asyncio
    async def test_two_answers_then_suggestions(self, profile):
        recorder = Recorder()
        dialogue = SuggestionDialogue(
            make_estimator(MEAL_TYPE_QUESTION, PROTEIN_QUESTION, PANEER_SUGGESTIONS),
            on_transition=recorder,
        )

        await dialogue.start(profile)
        second = await dialogue.submit_answer("Lunch")
        assert isinstance(second, AwaitingInput)
        assert second.choices == ["Paneer", "Tofu", "Other"]

        final = await dialogue.submit_answer("Paneer")

        assert isinstance(final, SuggestionsReady)
        assert [s.name for s in final.suggestions] == ["Paneer Bhurji", "Palak Paneer"]
        assert [(t.question, t.answer) for t in dialogue.history] == [
            ("What type of meal are you looking for?", "Lunch"),
            ("Protein?", "Paneer"),
        ]
        assert recorder.transitions[-2:] == [
            ("awaiting-input", "loading"),
            ("loading", "suggestions-ready"),
        ]

    @pytest.mark.asyncio
    async def test_restored_history_yields_suggestions_verbatim(self, profile):
        history = [ConversationTurn(question="Meal type?", answer="Lunch")]
        dialogue = SuggestionDialogue.restore(
            make_estimator(PANEER_SUGGESTIONS), profile, history, "Protein?", ["Paneer", "Tofu"]
        )

        state = await dialogue.submit_answer("Paneer")

        assert isinstance(state, SuggestionsReady)
        assert [s.model_dump() for s in state.suggestions] == PANEER_SUGGESTIONS["suggestions"]

    @pytest.mark.asyncio
    async def test_same_inputs_give_same_state(self, profile):
        history = [ConversationTurn(question="Meal type?", answer="Lunch")]

        states = []
        for _ in range(2):
            dialogue = SuggestionDialogue.restore(
                make_estimator(PROTEIN_QUESTION), profile, history, "Meal type?", ["Lunch"]
            )
            states.append(await dialogue.submit_answer("Dinner"))

        assert states[0] == states[1]

    @pytest.mark.asyncio
    async def test_answer_without_question_is_invalid(self, profile):
        dialogue = SuggestionDialogue(make_estimator(PANEER_SUGGESTIONS))

        with pytest.raises(InvalidTransition):
            await dialogue.submit_answer("Lunch")

        await dialogue.start(profile)
        with pytest.raises(InvalidTransition):
            await dialogue.submit_answer("Lunch")

    @pytest.mark.asyncio
    async def test_blank_answer_rejected(self, profile):
        dialogue = SuggestionDialogue(make_estimator(MEAL_TYPE_QUESTION))
        await dialogue.start(profile)

        with pytest.raises(ValidationError):
            await dialogue.submit_answer("  ")

        assert isinstance(dialogue.state, AwaitingInput)
        assert dialogue.history == []

    @pytest.mark.asyncio
    async def test_question_cap(self, profile):
        dialogue = SuggestionDialogue(
            make_estimator(MEAL_TYPE_QUESTION, PROTEIN_QUESTION),
            max_questions=1,
        )
        await dialogue.start(profile)

        state = await dialogue.submit_answer("Lunch")

        assert isinstance(state, ErrorState)
        assert state.message == TOO_MANY_QUESTIONS_MESSAGE

    @pytest.mark.asyncio
    async def test_history_is_a_copy(self, profile):
        dialogue = SuggestionDialogue(make_estimator(MEAL_TYPE_QUESTION, PROTEIN_QUESTION))
        await dialogue.start(profile)
        await dialogue.submit_answer("Lunch")

        dialogue.history.clear()

        assert len(dialogue.history) == 1


class TestStates:
    """Tests for the state models and presentation helpers."""

    def test_suggestions_ready_requires_two(self):
        with pytest.raises(PydanticValidationError):
            SuggestionsReady(suggestions=PANEER_SUGGESTIONS["suggestions"][:1])

    def test_state_serializes_with_status(self):
        state = AwaitingInput(question="Spice level?", options=["Mild"])

        data = state.model_dump(by_alias=True)

        assert data == {
            "status": "awaiting-input",
            "question": "Spice level?",
            "options": ["Mild"],
            "choices": ["Mild", "Other"],
        }

    def test_loading_and_idle_have_no_payload(self):
        assert Loading().model_dump() == {"status": "loading"}
        assert Idle().model_dump() == {"status": "idle"}

    def test_no_outcome_message(self):
        assert ErrorState(message=NO_OUTCOME_MESSAGE).message == "Something went wrong."

    def test_with_other_option_dedupes(self):
        assert with_other_option(["Mild", "Spicy", "Mild"]) == ["Mild", "Spicy", "Other"]


class TestResolveAnswer:
    """Tests for resolve_answer."""

    def test_regular_option(self):
        assert resolve_answer("Lunch") == "Lunch"

    def test_other_uses_free_text(self):
        assert resolve_answer(OTHER_OPTION, "  Brunch ") == "Brunch"

    def test_other_without_text(self):
        with pytest.raises(ValidationError):
            resolve_answer(OTHER_OPTION, "")

    def test_nothing_selected(self):
        with pytest.raises(ValidationError):
            resolve_answer(None)
