import threading
from typing import Optional, Protocol

from google import genai
from google.genai import errors as genai_errors

from plategenie.core.errors import TransportError, is_overload_error


class TextModel(Protocol):
    def generate_text(self, model: str, prompt: str) -> str:
        ...


class GeminiTextModel:
    """Gemini text completion; the SDK client is built on first call, not at startup."""

    def __init__(self, api_key: Optional[str] = None, client=None):
        self._api_key = api_key
        self._client = client
        self._lock = threading.Lock()

    def _get_client(self):
        with self._lock:
            if self._client is None:
                if not self._api_key:
                    raise TransportError("GEMINI_API_KEY is not set")
                self._client = genai.Client(api_key=self._api_key)
            return self._client

    def close(self):
        with self._lock:
            client, self._client = self._client, None
        close = getattr(client, "close", None)
        if close is not None:
            close()

    def generate_text(self, model: str, prompt: str) -> str:
        client = self._get_client()
        try:
            response = client.models.generate_content(model=model, contents=prompt)
        except genai_errors.APIError as e:
            raise TransportError(
                f"Gemini API error {e.code} ({e.status}): {e.message}", overloaded=is_overload_error(e)
            ) from e
        except Exception as e:
            raise TransportError.from_exception(e) from e
        return response.text or ""
