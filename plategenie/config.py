# Environment settings for the generation API, loaded from .env when present

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"


@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str]
    gemini_model: str = DEFAULT_MODEL
    generation_timeout: Optional[float] = None
    schema_validation: bool = False
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        logger.warning(f"Ignoring invalid GENERATION_TIMEOUT_SECONDS={value!r}")
        return None
    if timeout <= 0:
        logger.warning(f"Ignoring non-positive GENERATION_TIMEOUT_SECONDS={value!r}")
        return None
    return timeout


def _parse_bool(value: Optional[str], name: str) -> bool:
    if not value:
        return False
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    logger.warning(f"Ignoring invalid {name}={value!r}")
    return False


def _parse_origins(value: Optional[str]) -> List[str]:
    if not value:
        return ["*"]
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins or ["*"]


def load_settings() -> Settings:
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        generation_timeout=_parse_timeout(os.getenv("GENERATION_TIMEOUT_SECONDS")),
        schema_validation=_parse_bool(os.getenv("RECIPE_SCHEMA_VALIDATION"), "RECIPE_SCHEMA_VALIDATION"),
        cors_origins=_parse_origins(os.getenv("CORS_ORIGINS")),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


# Read once per process; tests call get_settings.cache_clear() after patching env
@lru_cache()
def get_settings() -> Settings:
    return load_settings()
