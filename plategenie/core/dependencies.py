import threading
from typing import Dict, Optional

from fastapi import Depends

from plategenie.config import Settings, get_settings
from plategenie.services.gemini_client import GeminiTextModel, TextModel
from plategenie.services.generation_service import RecipeGenerationService

# One Gemini client per API key for the whole process
_text_models: Dict[Optional[str], GeminiTextModel] = {}
_text_models_lock = threading.Lock()


def shared_text_model(api_key: Optional[str]) -> GeminiTextModel:
    with _text_models_lock:
        model = _text_models.get(api_key)
        if model is None:
            model = GeminiTextModel(api_key=api_key)
            _text_models[api_key] = model
        return model


def close_text_models():
    with _text_models_lock:
        models = list(_text_models.values())
        _text_models.clear()
    for model in models:
        model.close()


def get_text_model(settings: Settings = Depends(get_settings)) -> TextModel:
    return shared_text_model(settings.gemini_api_key)


def get_generation_service(
    text_model: TextModel = Depends(get_text_model),
    settings: Settings = Depends(get_settings),
) -> RecipeGenerationService:
    return RecipeGenerationService(
        text_model,
        model_name=settings.gemini_model,
        schema_validation=settings.schema_validation,
    )
