"""Base classes and shared utilities for LLM providers."""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import requests
import typer
from pydantic import BaseModel

from autocommit.config import DEBUG_DUMP_LIMIT, REQUEST_TIMEOUT
from autocommit.llm.exceptions import (
    BackendError,
    ConnectionFailedError,
    EmptyCompletionError,
    LLMError,
    UnknownProviderError,
)
from autocommit.llm.prompts import PromptPayload
from autocommit.resolver import RuntimeConfig


@dataclass
class LLMResult:
    """Result from an LLM generation call."""

    message: str
    model: str
    provider: str


def debug_dump(label: str, content: str, enabled: bool = True) -> None:
    """Print a labelled diagnostic block to stderr.

    Content longer than DEBUG_DUMP_LIMIT characters is cut, with the
    original length noted.

    Args:
        label: Heading for the block.
        content: The text to show.
        enabled: Nothing is printed when False.
    """
    if not enabled:
        return

    typer.secho(f"\n[DEBUG] {label}", fg=typer.colors.BLUE, err=True)
    if len(content) > DEBUG_DUMP_LIMIT:
        typer.echo(content[:DEBUG_DUMP_LIMIT], err=True)
        typer.echo(f"[...truncated {len(content)} chars total...]", err=True)
    else:
        typer.echo(content, err=True)


def sanitize_message(raw_message: str) -> str:
    """Clean up a completion into a plain commit message.

    Trims surrounding whitespace, drops a leading and a trailing markdown
    fence line, then strips a single leading and trailing backtick.

    Args:
        raw_message: The completion text from the backend.

    Returns:
        The cleaned message (may be empty).
    """
    cleaned = raw_message.strip()

    lines = cleaned.split("\n")
    if lines and lines[0].strip().startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    cleaned = "\n".join(lines).strip()

    if cleaned.startswith("`"):
        cleaned = cleaned[1:]
    if cleaned.endswith("`"):
        cleaned = cleaned[:-1]

    return cleaned.strip()


class BaseLLMProvider(ABC):
    """Abstract base class for LLM providers.

    Subclasses describe one HTTP contract: where to POST, how to build the
    body from the rendered prompt, and how to pull the completion out of
    the decoded reply. Transport, diagnostics and sanitization are shared.
    """

    #: Human-readable name used in error messages
    display_name = "API"

    def __init__(self, config: RuntimeConfig, session: Optional[requests.Session] = None):
        """Initialize the provider.

        Args:
            config: The resolved runtime configuration.
            session: HTTP session to send requests with. A new one is
                created if not given, and closed by close().
        """
        self.config = config
        self.model = config.model
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this provider created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "BaseLLMProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Full URL the request is POSTed to."""
        pass

    @abstractmethod
    def build_request(self, prompt: str) -> BaseModel:
        """Build the request body for the rendered prompt."""
        pass

    @abstractmethod
    def extract_completion(self, data: dict) -> str:
        """Extract the completion text from a decoded response body.

        Raises:
            BackendError: If the body carries an error.
            EmptyCompletionError: If there is no completion text.
        """
        pass

    def get_headers(self) -> dict[str, str]:
        """Get the HTTP headers for the request."""
        return {"Content-Type": "application/json"}

    def generate(self, payload: PromptPayload) -> LLMResult:
        """Generate a commit message from a prompt payload.

        Args:
            payload: The assembled prompt.

        Returns:
            An LLMResult containing the sanitized commit message.

        Raises:
            ConnectionFailedError: If the backend cannot be reached.
            BackendError: If the backend returns an error.
            EmptyCompletionError: If no completion text is produced.
        """
        prompt = payload.render()
        debug_dump("Prompt Size", f"{len(prompt.encode('utf-8'))} bytes", self.config.debug)

        body = self.build_request(prompt).model_dump()
        debug_dump(f"{self.display_name} Payload", json.dumps(body, indent=2), self.config.debug)

        raw_response = self._post(body)
        data = self._decode(raw_response)

        completion = self.extract_completion(data)
        message = sanitize_message(completion)
        if not message:
            raise EmptyCompletionError(
                "Model returned empty response. Try reducing diff size or using a different model."
            )

        return LLMResult(
            message=message,
            model=self.model,
            provider=self.config.provider,
        )

    def _post(self, body: dict[str, Any]) -> str:
        """POST the body and return the raw response text.

        Raises:
            ConnectionFailedError: On transport failure or an empty body.
        """
        try:
            response = self.session.post(
                self.endpoint,
                json=body,
                headers=self.get_headers(),
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as e:
            raise ConnectionFailedError(
                f"Failed to connect to {self.display_name} at {self.config.base_url}: {e}"
            )

        raw_response = response.text or ""
        if not raw_response.strip():
            raise ConnectionFailedError(
                f"Empty response from {self.display_name} at {self.config.base_url} "
                f"(HTTP {response.status_code})"
            )

        debug_dump(f"{self.display_name} Response", raw_response, self.config.debug)
        return raw_response

    def _decode(self, raw_response: str) -> dict:
        """Decode a JSON object from the raw response.

        Raises:
            BackendError: If the body is not a JSON object.
        """
        try:
            data = json.loads(raw_response)
        except json.JSONDecodeError as e:
            raise BackendError(f"{self.display_name} returned invalid JSON: {e}")

        if not isinstance(data, dict):
            raise BackendError(f"{self.display_name} returned an unexpected response: {raw_response[:200]}")

        return data


__all__ = [
    "BaseLLMProvider",
    "LLMResult",
    "LLMError",
    "UnknownProviderError",
    "ConnectionFailedError",
    "BackendError",
    "EmptyCompletionError",
    "debug_dump",
    "sanitize_message",
]
