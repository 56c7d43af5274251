"""OpenAI-compatible provider implementation.

Covers OpenAI, Groq, Mistral, OpenRouter and any custom endpoint that
implements POST {base_url}/chat/completions.
"""

from pydantic import ValidationError

from autocommit.llm.base import (
    BackendError,
    BaseLLMProvider,
    EmptyCompletionError,
)
from autocommit.llm.prompts import SYSTEM_PROMPT
from autocommit.llm.schemas import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
)


class OpenAICompatibleProvider(BaseLLMProvider):
    """Chat-completions provider for OpenAI-style APIs."""

    display_name = "API"

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/chat/completions"

    def get_headers(self) -> dict[str, str]:
        """Add a bearer token when an API key is configured."""
        headers = super().get_headers()
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def build_request(self, prompt: str) -> ChatCompletionRequest:
        """Build a system + user chat request."""
        return ChatCompletionRequest(
            model=self.model,
            messages=[
                ChatMessage(role="system", content=SYSTEM_PROMPT),
                ChatMessage(role="user", content=prompt),
            ],
        )

    def extract_completion(self, data: dict) -> str:
        """Extract the first choice's message content.

        Raises:
            BackendError: If the body has an `error` field.
            EmptyCompletionError: If there is no content.
        """
        try:
            parsed = ChatCompletionResponse.model_validate(data)
        except ValidationError as e:
            raise BackendError(f"Unexpected API response: {e}")

        if parsed.has_error():
            raise BackendError(f"API Error: {parsed.error_message()}")

        content = parsed.first_content()
        if not content:
            raise EmptyCompletionError("Model returned empty response.")

        return content
