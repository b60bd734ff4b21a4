"""Estimation contracts: instruction text bound to input and output schemas.

Every call to the inference endpoint goes through ``invoke_contract``,
which renders the instruction, asks for JSON matching the output schema
and validates the reply before anyone sees it.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from meal_tracker_api.agents.prompts import (
    ANALYZE_MEAL_IMAGE_PROMPT,
    CREATE_RECIPE_PROMPT,
    LOG_MEAL_PROMPT,
    render_food_suggestions_prompt,
)
from meal_tracker_api.core.exceptions import (
    EndpointFailure,
    SchemaValidationFailure,
    TransportFailure,
)
from meal_tracker_api.models.estimation import (
    AnalyzeMealImageInput,
    AnalyzeMealImageOutput,
    CreateRecipeInput,
    CreateRecipeOutput,
    FoodSuggestionsInput,
    FoodSuggestionsOutput,
    LogMealInput,
    LogMealOutput,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMAT_PROMPT = """Respond ONLY with a single valid JSON object that conforms to this JSON schema:

{schema}

Use exactly the property names from the schema. Numbers must be JSON numbers, not strings.
Do not include any text outside the JSON."""


def _format_instruction(contract: "EstimationContract", payload: BaseModel) -> str:
    return contract.instruction.format(**payload.model_dump())


@dataclass(frozen=True)
class EstimationContract:
    """
    One estimation use case.

    Attributes:
        name: Identifier used in logs
        instruction: Natural-language instruction template
        input_model: Schema the request payload must satisfy
        output_model: Schema the model's reply must satisfy
        failure_message: User-facing message when the call fails
        image_field: Input field holding an image URL to attach, if any
        render: Builds the final instruction from a validated payload
    """

    name: str
    instruction: str
    input_model: type[BaseModel]
    output_model: type[BaseModel]
    failure_message: str
    image_field: str | None = None
    render: Callable[["EstimationContract", BaseModel], str] = field(default=_format_instruction)

    def output_schema(self) -> str:
        """JSON schema of the output, with the wire (camelCase) names."""
        return json.dumps(self.output_model.model_json_schema(by_alias=True), indent=2)


LOG_MEAL = EstimationContract(
    name="log_meal",
    instruction=LOG_MEAL_PROMPT,
    input_model=LogMealInput,
    output_model=LogMealOutput,
    failure_message="Failed to log meal. Please try again.",
)

ANALYZE_MEAL_IMAGE = EstimationContract(
    name="analyze_meal_image",
    instruction=ANALYZE_MEAL_IMAGE_PROMPT,
    input_model=AnalyzeMealImageInput,
    output_model=AnalyzeMealImageOutput,
    failure_message="Failed to analyze the image. Please try again.",
    image_field="image_url",
)

CREATE_RECIPE = EstimationContract(
    name="create_recipe",
    instruction=CREATE_RECIPE_PROMPT,
    input_model=CreateRecipeInput,
    output_model=CreateRecipeOutput,
    failure_message="Failed to create recipe. Please try again.",
)

FOOD_SUGGESTIONS = EstimationContract(
    name="food_suggestions",
    instruction="",
    input_model=FoodSuggestionsInput,
    output_model=FoodSuggestionsOutput,
    failure_message="Failed to get suggestions. Please try again.",
    render=lambda _contract, payload: render_food_suggestions_prompt(payload),
)


def build_messages(contract: EstimationContract, payload: BaseModel) -> list:
    """
    Build the chat messages for one call.

    Args:
        contract: Contract being invoked
        payload: Validated instance of ``contract.input_model``

    Returns:
        System message with the output format, then the user message
        (text, plus inline image content for image contracts)
    """
    system = SystemMessage(content=OUTPUT_FORMAT_PROMPT.format(schema=contract.output_schema()))
    text = contract.render(contract, payload)

    if contract.image_field:
        image_url = getattr(payload, contract.image_field)
        content: Any = [
            {"type": "text", "text": text},
            {"type": "image_url", "image_url": {"url": image_url}},
        ]
        return [system, HumanMessage(content=content)]

    return [system, HumanMessage(content=text)]


def _response_text(response: Any) -> str:
    """Extract text from a chat model reply, joining multi-part content."""
    content = getattr(response, "content", response)
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        content = "".join(parts)
    return (content or "").strip()


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence, if present."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        lines = lines[1:]
        if lines and lines[-1].strip().startswith("```"):
            lines = lines[:-1]
        text = "\n".join(lines).strip()
    return text


def parse_output(contract: EstimationContract, text: str) -> BaseModel:
    """
    Parse and validate a raw reply against the contract's output schema.

    Args:
        contract: Contract the reply belongs to
        text: Raw model output

    Returns:
        Validated instance of ``contract.output_model``

    Raises:
        SchemaValidationFailure: If the reply is not JSON or does not match
    """
    cleaned = strip_code_fences(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise SchemaValidationFailure(
            message=f"Reply is not valid JSON: {e}",
            contract=contract.name,
            details={"raw": cleaned[:500]},
        ) from e

    if not isinstance(data, dict):
        raise SchemaValidationFailure(
            message=f"Expected a JSON object, got {type(data).__name__}",
            contract=contract.name,
        )

    try:
        return contract.output_model.model_validate(data)
    except PydanticValidationError as e:
        raise SchemaValidationFailure(
            message=f"Reply does not match {contract.output_model.__name__}",
            contract=contract.name,
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


async def invoke_contract(
    llm: BaseChatModel,
    contract: EstimationContract,
    payload: BaseModel,
    *,
    timeout: float | None = None,
) -> BaseModel:
    """
    Call the inference endpoint for one contract and validate the reply.

    Args:
        llm: Chat model to call
        contract: Use case being invoked
        payload: Instance of ``contract.input_model``
        timeout: Seconds to wait before giving up (None waits forever)

    Returns:
        Validated instance of ``contract.output_model``

    Raises:
        TypeError: If ``payload`` has the wrong type
        TransportFailure: Endpoint unreachable or timed out
        EndpointFailure: Request could not be built, or the endpoint
            returned an error or an empty reply
        SchemaValidationFailure: Reply did not match the output schema
    """
    if not isinstance(payload, contract.input_model):
        raise TypeError(
            f"{contract.name} expects {contract.input_model.__name__}, got {type(payload).__name__}"
        )

    try:
        messages = build_messages(contract, payload)
    except (ValueError, KeyError, OverflowError) as e:
        raise EndpointFailure(
            message=f"Failed to build request: {e}",
            contract=contract.name,
            details={"error_type": type(e).__name__},
        ) from e
    logger.info(f"Invoking {contract.name} contract")

    try:
        if timeout:
            response = await asyncio.wait_for(llm.ainvoke(messages), timeout=timeout)
        else:
            response = await llm.ainvoke(messages)
    except TimeoutError as e:
        raise TransportFailure(
            message=f"No reply within {timeout}s",
            contract=contract.name,
        ) from e
    except (httpx.TransportError, ConnectionError) as e:
        raise TransportFailure(
            message=f"Failed to reach inference endpoint: {e}",
            contract=contract.name,
        ) from e
    except Exception as e:
        raise EndpointFailure(
            message=f"Inference endpoint error: {e}",
            contract=contract.name,
            details={"error_type": type(e).__name__},
        ) from e

    text = _response_text(response)
    logger.debug(f"Raw {contract.name} reply: {text[:500]}")

    if not text:
        raise EndpointFailure(message="Empty reply", contract=contract.name)

    return parse_output(contract, text)
