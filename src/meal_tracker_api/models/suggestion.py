"""Pydantic models for the meal suggestion dialogue.

Session state is a tagged union on ``status`` so a state can never carry
both a pending question and final suggestions.
"""

from typing import Annotated, Literal, Union

from pydantic import Field, computed_field

from .base import CamelModel
from .estimation import ConversationTurn, Suggestion
from .user_settings import DietaryPreference

OTHER_OPTION = "Other"


def with_other_option(options: list[str]) -> list[str]:
    """
    Options as shown to the user: duplicates dropped, ``Other`` appended once.

    Args:
        options: Options returned by the model

    Returns:
        Ordered, de-duplicated options ending with the free-text sentinel
    """
    choices: list[str] = []
    for option in options:
        if option not in choices:
            choices.append(option)
    if OTHER_OPTION not in choices:
        choices.append(OTHER_OPTION)
    return choices


class DietaryProfile(CamelModel):
    """What the suggestion dialogue needs to know about the user."""

    dietary_preference: DietaryPreference
    calorie_goal: float = Field(..., ge=0, allow_inf_nan=False, description="Daily calorie goal")

    @classmethod
    def from_weekly_target(
        cls,
        dietary_preference: DietaryPreference,
        weekly_target: float,
    ) -> "DietaryProfile":
        """Build a profile whose daily goal is the weekly target spread over 7 days."""
        return cls(
            dietary_preference=dietary_preference,
            calorie_goal=round(weekly_target / 7),
        )


class Idle(CamelModel):
    """No session started."""

    status: Literal["idle"] = "idle"


class Loading(CamelModel):
    """A request to the inference endpoint is in flight."""

    status: Literal["loading"] = "loading"


class AwaitingInput(CamelModel):
    """The model asked a clarifying question."""

    status: Literal["awaiting-input"] = "awaiting-input"
    question: str
    options: list[str] = Field(..., min_length=1)

    @computed_field
    @property
    def choices(self) -> list[str]:
        return with_other_option(self.options)


class SuggestionsReady(CamelModel):
    """Terminal success: exactly two suggestions."""

    status: Literal["suggestions-ready"] = "suggestions-ready"
    suggestions: list[Suggestion] = Field(..., min_length=2, max_length=2)


class ErrorState(CamelModel):
    """Terminal failure; the user may start over."""

    status: Literal["error"] = "error"
    message: str


SuggestionState = Annotated[
    Union[Idle, Loading, AwaitingInput, SuggestionsReady, ErrorState],
    Field(discriminator="status"),
]


# =============================================================================
# HTTP request / response bodies
# =============================================================================


class SuggestionStartRequest(CamelModel):
    """Start a new dialogue. Omitted profile fields come from the user's settings."""

    dietary_preference: DietaryPreference | None = None
    calorie_goal: float | None = Field(None, ge=0, allow_inf_nan=False)


class SuggestionAnswerRequest(CamelModel):
    """Answer the last asked question; the client resends the whole history."""

    profile: DietaryProfile
    history: list[ConversationTurn] = Field(default_factory=list)
    question: str = Field(..., min_length=1)
    options: list[str] | None = None
    selected: str = Field(..., description="Chosen option, or 'Other'")
    other_text: str | None = Field(None, description="Free text when 'Other' is chosen")


class SuggestionStepResponse(CamelModel):
    """State after one step plus the history the client should keep."""

    state: SuggestionState
    history: list[ConversationTurn] = Field(default_factory=list)
    profile: DietaryProfile | None = None
