# Failure kinds of a generation request and the HTTP status/message each renders as
from typing import Optional

GENERIC_FAILURE_MESSAGE = "Failed to generate meal plan. Please check your API key or try again."
OVERLOADED_MESSAGE = "Our recipe service is currently busy. Please try again shortly."

# Substrings providers use when they are out of capacity
OVERLOAD_MARKERS = (
    "overloaded",
    "resource_exhausted",
    "resource exhausted",
    "quota",
    "capacity",
    "rate limit",
    "too many requests",
    "unavailable",
)
OVERLOAD_STATUS_CODES = (429, 503)


class GenerationError(Exception):
    status_code = 500
    public_message = GENERIC_FAILURE_MESSAGE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(GenerationError):
    status_code = 400
    public_message = "No ingredients provided"


class MalformedResponse(GenerationError):
    def __init__(self, message: str, raw_text: str = ""):
        super().__init__(message)
        self.raw_text = raw_text


class TransportError(GenerationError):
    def __init__(self, message: str, overloaded: bool = False):
        super().__init__(message)
        self.overloaded = overloaded

    @property
    def user_message(self) -> str:
        return OVERLOADED_MESSAGE if self.overloaded else GENERIC_FAILURE_MESSAGE

    @classmethod
    def from_exception(cls, exc: Exception) -> "TransportError":
        text = str(exc) or exc.__class__.__name__
        return cls(text, overloaded=is_overload_error(exc))


def _status_code_of(exc: Exception) -> Optional[int]:
    # google-genai APIError exposes .code, HTTP client errors usually .status_code
    for attr in ("code", "status_code"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def is_overload_error(exc: Exception) -> bool:
    """True when the provider reported it is busy rather than broken."""
    if _status_code_of(exc) in OVERLOAD_STATUS_CODES:
        return True
    text = f"{exc.__class__.__name__} {exc}".lower()
    return any(marker in text for marker in OVERLOAD_MARKERS)
