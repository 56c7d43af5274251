"""LLM provider module for autocommit.

Two client variants cover every supported backend:
- OllamaProvider: local inference through /api/generate
- OpenAICompatibleProvider: /chat/completions (openai, groq, mistral,
  openrouter, custom)
"""

from typing import Optional

import requests

from autocommit.config import LLMProvider
from autocommit.llm.base import (
    BackendError,
    BaseLLMProvider,
    ConnectionFailedError,
    EmptyCompletionError,
    LLMError,
    LLMResult,
    UnknownProviderError,
)
from autocommit.llm.prompts import PromptPayload
from autocommit.resolver import RuntimeConfig


OPENAI_COMPATIBLE_PROVIDERS = {
    LLMProvider.OPENAI,
    LLMProvider.GROQ,
    LLMProvider.MISTRAL,
    LLMProvider.OPENROUTER,
    LLMProvider.CUSTOM,
}


def get_provider(
    config: RuntimeConfig,
    session: Optional[requests.Session] = None,
) -> BaseLLMProvider:
    """Get the provider client for a resolved configuration.

    Args:
        config: The resolved runtime configuration.
        session: Optional HTTP session for the client.

    Returns:
        An instance of the matching LLM provider.

    Raises:
        UnknownProviderError: If the provider has no client variant. No
            network activity happens in that case.
    """
    try:
        provider = LLMProvider(config.provider)
    except ValueError:
        raise UnknownProviderError(f"Unknown provider: {config.provider}")

    if provider == LLMProvider.OLLAMA:
        from autocommit.llm.ollama_provider import OllamaProvider

        return OllamaProvider(config, session=session)

    elif provider in OPENAI_COMPATIBLE_PROVIDERS:
        from autocommit.llm.openai_compatible_provider import OpenAICompatibleProvider

        return OpenAICompatibleProvider(config, session=session)

    else:
        raise UnknownProviderError(
            f"Unknown provider: {config.provider} (no supported API for this provider)"
        )


def generate_commit_message(
    config: RuntimeConfig,
    payload: PromptPayload,
    session: Optional[requests.Session] = None,
) -> LLMResult:
    """Generate a commit message for the assembled prompt.

    This is the main entry point for generating commit messages.

    Args:
        config: The resolved runtime configuration.
        payload: The assembled prompt.
        session: Optional HTTP session.

    Returns:
        An LLMResult with the sanitized commit message.

    Raises:
        LLMError: For any generation failure (see autocommit.llm.exceptions).
    """
    with get_provider(config, session=session) as provider:
        return provider.generate(payload)


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "UnknownProviderError",
    "ConnectionFailedError",
    "BackendError",
    "EmptyCompletionError",
    "LLMResult",
    "get_provider",
    "generate_commit_message",
]
