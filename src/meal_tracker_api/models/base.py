"""Shared Pydantic base classes and field types."""

from typing import Annotated

from pydantic import (
    AllowInfNan,
    BaseModel,
    ConfigDict,
    NonNegativeFloat,
    Strict,
    StrictStr,
    StringConstraints,
)
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base model serialized with camelCase keys.

    Stored documents and API payloads use camelCase (``foodItems``,
    ``userId``); Python code uses snake_case attributes.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Model output is never coerced: "120" is not a number, 120 is.
StrictNumber = Annotated[NonNegativeFloat, Strict(), AllowInfNan(False)]
StrictCount = Annotated[int, Strict()]
StrictText = StrictStr
RequiredText = Annotated[StrictStr, StringConstraints(strip_whitespace=True, min_length=1)]


class MacroFields(CamelModel):
    """Optional macronutrients in grams; ``None`` means unknown."""

    protein: StrictNumber | None = None
    carbohydrates: StrictNumber | None = None
    fat: StrictNumber | None = None
    fiber: StrictNumber | None = None
