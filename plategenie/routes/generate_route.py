import asyncio
import logging
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.concurrency import run_in_threadpool

from plategenie.config import Settings, get_settings
from plategenie.core.dependencies import get_generation_service
from plategenie.core.errors import GenerationError, InvalidInput, TransportError
from plategenie.models.recipe_model import ErrorOut, GeneratePlanRequest
from plategenie.services.generation_service import RecipeGenerationService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run_generation(service: RecipeGenerationService, ingredients: List[str], timeout: Optional[float]):
    if timeout is None:
        return await run_in_threadpool(service.generate, ingredients)
    # Executor future so the wait ends on time; the worker thread still finishes its call
    loop = asyncio.get_running_loop()
    call = loop.run_in_executor(None, service.generate, ingredients)
    try:
        return await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError as e:
        raise TransportError(f"Recipe generation timed out after {timeout}s") from e


# Generate recipes from pantry ingredients
@router.post(
    "/generate-plan",
    response_model=List[Any],
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def generate_plan(
    payload: Optional[GeneratePlanRequest] = Body(default=None),
    service: RecipeGenerationService = Depends(get_generation_service),
    settings: Settings = Depends(get_settings),
):
    ingredients = payload.ingredients if payload else None
    if not ingredients:
        raise InvalidInput("No ingredients provided")

    logger.info(f"Generating recipes for {len(ingredients)} ingredient(s)")
    try:
        recipes = await _run_generation(service, ingredients, settings.generation_timeout)
    except TransportError as e:
        logger.error(f"API call failed: {e.message} overloaded={e.overloaded} ({e.user_message})")
        raise
    except GenerationError as e:
        logger.warning(f"Generation failed with {e.__class__.__name__}: {e.message}")
        raise

    logger.info(f"Returning {len(recipes)} recipe(s)")
    return recipes
