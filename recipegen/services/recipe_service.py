"""Recipe idea generation and detail expansion.

Each operation builds a prompt, sends it through a gateway, parses the reply
as JSON and validates its shape:

- generate_ideas(): exactly IDEA_COUNT RecipeIdea objects
- generate_details(): one RecipeDetails with at least MIN_STEPS steps

Malformed JSON and well-formed JSON of the wrong shape both raise FormatError
with the same message; they differ only in `reason` and in how they are logged.
"""

import json
from typing import Any, Protocol, Sequence

from pydantic import ValidationError as PydanticValidationError

from recipegen.models.models import IDEA_COUNT, IDEA_LIST_ADAPTER, RecipeDetails, RecipeIdea
from recipegen.prompts.prompts import get_details_prompt, get_ideas_prompt
from recipegen.utils.exceptions import FormatError
from recipegen.utils.logger import logger


IDEAS_FORMAT_MESSAGE = "Unexpected recipe response format."
DETAILS_FORMAT_MESSAGE = "Unexpected recipe detail response format."


class JsonGateway(Protocol):
    """Anything that turns a prompt into the model's raw JSON text."""

    async def generate_json(self, prompt_text: str) -> str: ...


def parse_json_reply(text: str, message: str) -> Any:
    """Parse the model reply, raising FormatError(reason="parse") on bad JSON."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Model reply is not valid JSON ({e.msg} at pos {e.pos}): {text[:200]!r}")
        raise FormatError(message, reason="parse") from e


class RecipeService:
    """Generate recipe ideas and expand one into a full recipe."""

    def __init__(self, gateway: JsonGateway) -> None:
        self.gateway = gateway

    async def generate_ideas(self, prompt: str, previous_ideas: Sequence[RecipeIdea] = ()) -> list[RecipeIdea]:
        """Ask for IDEA_COUNT recipe ideas matching `prompt`.

        Args:
            prompt: User's cooking request.
            previous_ideas: Ideas already shown; the model is told to avoid them.

        Returns:
            Exactly IDEA_COUNT validated ideas, in the model's order.

        Raises:
            FormatError: Reply is not JSON, not a list of IDEA_COUNT elements, or
                an element is missing a field / has a bad difficulty.
            RecipeGenError: Propagated unchanged from the gateway.
        """
        text = await self.gateway.generate_json(get_ideas_prompt(prompt, previous_ideas))
        parsed = parse_json_reply(text, IDEAS_FORMAT_MESSAGE)

        if not isinstance(parsed, list) or len(parsed) != IDEA_COUNT:
            count = len(parsed) if isinstance(parsed, list) else type(parsed).__name__
            logger.warning(f"Idea reply has wrong shape: expected a list of {IDEA_COUNT}, got {count}")
            raise FormatError(IDEAS_FORMAT_MESSAGE, reason="shape")

        try:
            ideas = IDEA_LIST_ADAPTER.validate_python(parsed)
        except PydanticValidationError as e:
            logger.warning(f"Idea reply failed validation: {e.error_count()} error(s): {e.errors()[0]['msg']}")
            raise FormatError(IDEAS_FORMAT_MESSAGE, reason="shape") from e

        logger.info(f"Generated {len(ideas)} ideas: {', '.join(idea.id for idea in ideas)}")
        return ideas

    async def generate_details(self, prompt: str, idea: RecipeIdea) -> RecipeDetails:
        """Expand `idea` into servings, ingredients and steps.

        Raises:
            FormatError: Reply is not JSON, or servings is not a string,
                ingredients/steps are not string arrays, or there are too few steps.
            RecipeGenError: Propagated unchanged from the gateway.
        """
        text = await self.gateway.generate_json(get_details_prompt(prompt, idea))
        parsed = parse_json_reply(text, DETAILS_FORMAT_MESSAGE)

        if not isinstance(parsed, dict):
            logger.warning(f"Detail reply for '{idea.id}' is a {type(parsed).__name__}, not an object")
            raise FormatError(DETAILS_FORMAT_MESSAGE, reason="shape")

        try:
            details = RecipeDetails.model_validate(parsed)
        except PydanticValidationError as e:
            logger.warning(f"Detail reply for '{idea.id}' failed validation: {e.error_count()} error(s): {e.errors()[0]['msg']}")
            raise FormatError(DETAILS_FORMAT_MESSAGE, reason="shape") from e

        logger.info(f"Expanded '{idea.id}': {len(details.ingredients)} ingredients, {len(details.steps)} steps")
        return details
