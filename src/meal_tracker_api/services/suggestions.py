"""Suggestion dialogue controller.

Drives a question/answer exchange with the inference endpoint until it
returns two meal suggestions. Runs follow

    idle -> loading -> (awaiting-input -> loading)* -> (suggestions-ready | error)

and every call is issued from ``loading``. Nothing is persisted here.
"""

import logging
from collections.abc import Callable

from meal_tracker_api.core.exceptions import ValidationError
from meal_tracker_api.models.estimation import ConversationTurn
from meal_tracker_api.models.suggestion import (
    OTHER_OPTION,
    AwaitingInput,
    DietaryProfile,
    ErrorState,
    Idle,
    Loading,
    SuggestionState,
    SuggestionsReady,
)
from meal_tracker_api.services.estimation import EstimationService

logger = logging.getLogger(__name__)

NO_OUTCOME_MESSAGE = "Something went wrong."
TOO_MANY_QUESTIONS_MESSAGE = "Couldn't settle on suggestions. Please start over."

# status -> statuses reachable from it
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    "idle": frozenset({"loading"}),
    "loading": frozenset({"awaiting-input", "suggestions-ready", "error"}),
    "awaiting-input": frozenset({"loading"}),
    "suggestions-ready": frozenset({"loading"}),
    "error": frozenset({"loading"}),
}

TransitionListener = Callable[[SuggestionState, SuggestionState], None]


class InvalidTransition(RuntimeError):
    """A state change the dialogue does not allow."""

    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot move from '{current}' to '{target}'")
        self.current = current
        self.target = target


def resolve_answer(selected: str | None, other_text: str | None = None) -> str:
    """
    Turn the user's selection into the answer to send.

    Args:
        selected: Chosen option, possibly the ``Other`` sentinel
        other_text: Free text typed after choosing ``Other``

    Returns:
        The non-empty answer

    Raises:
        ValidationError: If nothing was selected, or ``Other`` was chosen
            with an empty text field
    """
    answer = other_text if selected == OTHER_OPTION else selected
    answer = (answer or "").strip()
    if not answer:
        if selected == OTHER_OPTION:
            raise ValidationError("Please describe your answer for 'Other'")
        raise ValidationError("Please select an answer")
    return answer


class SuggestionDialogue:
    """
    One suggestion session.

    Usage:
        dialogue = SuggestionDialogue(estimator)
        state = await dialogue.start(profile)
        while isinstance(state, AwaitingInput):
            state = await dialogue.submit_answer(pick(state.choices))
    """

    def __init__(
        self,
        estimator: EstimationService,
        *,
        max_questions: int = 0,
        on_transition: TransitionListener | None = None,
    ):
        """
        Initialize a dialogue in the idle state.

        Args:
            estimator: Service used for each suggestion step
            max_questions: Fail the session once this many questions have
                been answered without suggestions (0 = no limit)
            on_transition: Called with (previous, current) on every change
        """
        self._estimator = estimator
        self._max_questions = max_questions
        self._on_transition = on_transition
        self._state: SuggestionState = Idle()
        self._profile: DietaryProfile | None = None
        self._history: list[ConversationTurn] = []

    @classmethod
    def restore(
        cls,
        estimator: EstimationService,
        profile: DietaryProfile,
        history: list[ConversationTurn],
        question: str,
        options: list[str] | None = None,
        **kwargs,
    ) -> "SuggestionDialogue":
        """
        Rebuild a session waiting on ``question``.

        Lets a stateless caller hold the history itself and resume with
        the next answer.
        """
        dialogue = cls(estimator, **kwargs)
        dialogue._profile = profile
        dialogue._history = list(history)
        dialogue._state = AwaitingInput(question=question, options=options or [OTHER_OPTION])
        return dialogue

    @property
    def state(self) -> SuggestionState:
        return self._state

    @property
    def profile(self) -> DietaryProfile | None:
        return self._profile

    @property
    def history(self) -> list[ConversationTurn]:
        """Question/answer pairs so far, oldest first (a copy)."""
        return list(self._history)

    def _set_state(self, new_state: SuggestionState) -> None:
        current = self._state.status
        if new_state.status not in ALLOWED_TRANSITIONS[current]:
            raise InvalidTransition(current, new_state.status)

        previous = self._state
        self._state = new_state
        logger.debug(f"Suggestion dialogue: {current} -> {new_state.status}")
        if self._on_transition is not None:
            self._on_transition(previous, new_state)

    async def start(self, profile: DietaryProfile) -> SuggestionState:
        """
        Begin (or restart) a session with an empty history.

        Args:
            profile: Validated dietary profile

        Returns:
            State after the first call resolves
        """
        self._set_state(Loading())
        self._profile = profile
        self._history = []
        return await self._advance()

    async def submit_answer(self, answer: str) -> SuggestionState:
        """
        Answer the pending question and fetch the next step.

        Args:
            answer: Non-empty answer text (see ``resolve_answer``)

        Returns:
            State after the call resolves

        Raises:
            InvalidTransition: If no question is pending
            ValidationError: If the answer is blank
        """
        if not isinstance(self._state, AwaitingInput):
            raise InvalidTransition(self._state.status, "loading")

        answer = (answer or "").strip()
        if not answer:
            raise ValidationError("Please select an answer")

        turn = ConversationTurn(question=self._state.question, answer=answer)
        self._set_state(Loading())
        self._history = [*self._history, turn]
        return await self._advance()

    async def _advance(self) -> SuggestionState:
        try:
            result = await self._estimator.suggest(self._profile, self._history)
        except ValidationError as e:
            logger.warning(f"Suggestion request rejected: {e.message}")
            next_state = ErrorState(message=e.message)
            self._set_state(next_state)
            return next_state

        if not result.success:
            next_state: SuggestionState = ErrorState(message=result.error or NO_OUTCOME_MESSAGE)
        elif result.data.suggestions:
            next_state = SuggestionsReady(suggestions=result.data.suggestions)
        elif result.data.next_question is not None:
            if self._max_questions and len(self._history) >= self._max_questions:
                logger.warning(
                    f"Suggestion dialogue hit {self._max_questions} questions without converging"
                )
                next_state = ErrorState(message=TOO_MANY_QUESTIONS_MESSAGE)
            else:
                next_state = AwaitingInput(
                    question=result.data.next_question.question,
                    options=result.data.next_question.options,
                )
        else:
            next_state = ErrorState(message=NO_OUTCOME_MESSAGE)

        self._set_state(next_state)
        return next_state
