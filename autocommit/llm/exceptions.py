"""LLM-related exception classes.

Contains all exception classes for provider operations:
- LLMError: Base exception; every generation failure is one of these
- UnknownProviderError: Provider name has no client variant
- ConnectionFailedError: Transport failure or empty response body
- BackendError: The backend reported an error or sent an unreadable body
- EmptyCompletionError: The backend replied without a usable completion
"""


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class UnknownProviderError(LLMError):
    """Raised when a provider name maps to no client variant."""

    pass


class ConnectionFailedError(LLMError):
    """Raised when the backend cannot be reached or returns nothing."""

    pass


class BackendError(LLMError):
    """Raised when the backend returns an error payload."""

    pass


class EmptyCompletionError(LLMError):
    """Raised when the backend returns no completion text."""

    pass
