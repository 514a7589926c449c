# Prompt building and the single model call per generation request
import logging
from typing import Any, List, Optional, Sequence

from plategenie.config import DEFAULT_MODEL
from plategenie.core.errors import GenerationError, InvalidInput, TransportError
from plategenie.services.gemini_client import TextModel
from plategenie.utils.response_parser import parse_recipe_response, validate_recipes

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = """Based on these ingredients: [{ingredients}], suggest a few creative and easy-to-make recipes. The recipes must be strictly in the following JSON format. Do not include any other text, explanation, or notes outside of the JSON. If you cannot generate any recipe, return an empty JSON array.

[
  {{
    "name": "...",
    "ingredients": ["...", "..."],
    "instructions": "..."
  }},
  {{
    "name": "...",
    "ingredients": ["...", "..."],
    "instructions": "..."
  }}
]"""


def clean_ingredients(ingredients: Optional[Sequence[str]]) -> List[str]:
    """Drop blank entries; raise InvalidInput if nothing is left."""
    if not ingredients:
        raise InvalidInput("No ingredients provided")
    cleaned = [item for item in ingredients if isinstance(item, str) and item.strip()]
    if not cleaned:
        raise InvalidInput("No ingredients provided")
    return cleaned


def build_prompt(ingredients: Sequence[str]) -> str:
    return PROMPT_TEMPLATE.format(ingredients=", ".join(ingredients))


class RecipeGenerationService:
    def __init__(self, text_model: TextModel, model_name: str = DEFAULT_MODEL, schema_validation: bool = False):
        self.text_model = text_model
        self.model_name = model_name
        self.schema_validation = schema_validation

    def generate(self, ingredients: Optional[Sequence[str]]) -> List[Any]:
        items = clean_ingredients(ingredients)
        prompt = build_prompt(items)
        logger.debug(f"Prompt for {len(items)} ingredient(s), {len(prompt)} chars, model={self.model_name}")

        try:
            raw_text = self.text_model.generate_text(self.model_name, prompt)
        except GenerationError:
            raise
        except Exception as e:
            raise TransportError.from_exception(e) from e

        raw_text = raw_text or ""
        logger.debug(f"Gemini API raw response: {raw_text[:500]!r}")
        recipes = parse_recipe_response(raw_text)

        if self.schema_validation:
            validate_recipes(recipes)
        return recipes
