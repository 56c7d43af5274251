"""Typed request and response bodies for the provider HTTP contracts.

Response models accept unknown fields and treat absent ones as None, so
"field missing" and "field null" are handled the same way.
"""

from typing import Any, Optional

from pydantic import BaseModel

from autocommit.config import MAX_TOKENS, OLLAMA_NUM_CTX, TEMPERATURE


# ============================================================
# OLLAMA (POST {base_url}/api/generate)
# ============================================================


class OllamaOptions(BaseModel):
    """Sampling options for an Ollama generate call."""

    temperature: float = TEMPERATURE
    num_predict: int = MAX_TOKENS
    num_ctx: int = OLLAMA_NUM_CTX


class OllamaGenerateRequest(BaseModel):
    """Request body for /api/generate."""

    model: str
    prompt: str
    stream: bool = False
    options: OllamaOptions = OllamaOptions()


class OllamaGenerateResponse(BaseModel):
    """Response body for /api/generate."""

    response: Optional[str] = None
    error: Any = None

    def has_error(self) -> bool:
        """Check for an error field. Only null and false count as absent."""
        return self.error is not None and self.error is not False


# ============================================================
# OPENAI-COMPATIBLE (POST {base_url}/chat/completions)
# ============================================================


class ChatMessage(BaseModel):
    """A single chat message."""

    role: str
    content: str


class ChatCompletionRequest(BaseModel):
    """Request body for /chat/completions."""

    model: str
    messages: list[ChatMessage]
    max_tokens: int = MAX_TOKENS
    temperature: float = TEMPERATURE


class ChatResponseMessage(BaseModel):
    """Message part of a completion choice."""

    content: Optional[str] = None


class ChatChoice(BaseModel):
    """A single completion choice."""

    message: Optional[ChatResponseMessage] = None


class ChatCompletionResponse(BaseModel):
    """Response body for /chat/completions.

    The error field is kept loose: OpenAI-style servers send
    {"message": ...}, some compatible servers send a bare string.
    """

    choices: Optional[list[ChatChoice]] = None
    error: Any = None

    def has_error(self) -> bool:
        """Check for an error field. Only null and false count as absent."""
        return self.error is not None and self.error is not False

    def first_content(self) -> Optional[str]:
        """Get the first choice's message content, if any."""
        if not self.choices:
            return None
        message = self.choices[0].message
        return message.content if message else None

    def error_message(self) -> str:
        """Get a human-readable message from the error field."""
        if isinstance(self.error, dict):
            return self.error.get("message") or "Unknown error"
        if isinstance(self.error, str) and self.error:
            return self.error
        return "Unknown error"
