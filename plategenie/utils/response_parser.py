# Model answer text -> recipe list; pure functions of the response text
import json
import logging
import re
from typing import Any, List

from pydantic import ValidationError

from plategenie.core.errors import MalformedResponse
from plategenie.models.recipe_model import RecipeSuggestion

logger = logging.getLogger(__name__)

# ```json anywhere, or ``` with a tag only when the line ends there (```python\n)
FENCE_PATTERN = re.compile(r"```(?:json\b|[\w+-]+(?=[ \t]*\r?\n))?")
EXCERPT_LENGTH = 200


def _excerpt(text: str) -> str:
    if len(text) <= EXCERPT_LENGTH:
        return text
    return text[:EXCERPT_LENGTH] + "..."


def strip_code_fences(text: str) -> str:
    """Remove every fence marker anywhere in the text and trim whitespace."""
    return FENCE_PATTERN.sub("", text).strip()


def check_array_delimiters(text: str) -> None:
    if not text.startswith("[") or not text.endswith("]"):
        raise MalformedResponse("Model did not return a JSON array", raw_text=text)


def parse_recipe_response(raw_text: str) -> List[Any]:
    """
    Sanitize, bracket-check and decode a raw model response.

    Returns the decoded list unchanged. Raises MalformedResponse when the text
    is not shaped like an array or is not valid JSON.
    """
    cleaned = strip_code_fences(raw_text or "")
    try:
        check_array_delimiters(cleaned)
    except MalformedResponse:
        logger.warning(f"Response is not a JSON array: {_excerpt(cleaned)!r}")
        raise

    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Response failed JSON decode ({e.msg} at pos {e.pos}): {_excerpt(cleaned)!r}")
        raise MalformedResponse(f"Invalid JSON in model response: {e.msg}", raw_text=cleaned) from e

    if not isinstance(decoded, list):
        raise MalformedResponse("Model did not return a JSON array", raw_text=cleaned)
    return decoded


def validate_recipes(items: List[Any]) -> List[RecipeSuggestion]:
    recipes = []
    for index, item in enumerate(items):
        try:
            recipes.append(RecipeSuggestion.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Recipe #{index} does not match the recipe schema: {e.error_count()} error(s)")
            raise MalformedResponse(f"Recipe #{index} does not match the recipe schema") from e
    return recipes
