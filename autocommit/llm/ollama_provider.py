"""Ollama (local inference) provider implementation."""

from pydantic import ValidationError

from autocommit.llm.base import (
    BackendError,
    BaseLLMProvider,
    EmptyCompletionError,
)
from autocommit.llm.schemas import OllamaGenerateRequest, OllamaGenerateResponse


class OllamaProvider(BaseLLMProvider):
    """Local Ollama server, called through /api/generate."""

    display_name = "Ollama"

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/api/generate"

    def build_request(self, prompt: str) -> OllamaGenerateRequest:
        """Build a non-streaming generate request."""
        return OllamaGenerateRequest(model=self.model, prompt=prompt)

    def extract_completion(self, data: dict) -> str:
        """Extract the `response` field.

        Raises:
            BackendError: If the body has an `error` field.
            EmptyCompletionError: If `response` is missing, null or empty.
        """
        try:
            parsed = OllamaGenerateResponse.model_validate(data)
        except ValidationError as e:
            raise BackendError(f"Unexpected Ollama response: {e}")

        if parsed.has_error():
            raise BackendError(f"Ollama API Error: {parsed.error}")

        if not parsed.response:
            raise EmptyCompletionError(
                "Model returned empty response. Try reducing diff size or using a different model."
            )

        return parsed.response
