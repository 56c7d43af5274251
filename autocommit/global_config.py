"""Global configuration management for autocommit.

Handles user-level configuration stored in ~/.autocommit/:
- config.json: Provider, model, API key, and flag settings
- instructions.txt: Optional replacement for the built-in instructions
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ValidationError, field_validator


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class InvalidPersistedFormatError(ConfigError):
    """Raised when the on-disk settings cannot be parsed."""

    pass


class IncompleteConfigError(ConfigError):
    """Raised when provider or model is missing after resolution."""

    pass


class PersistedSettings(BaseModel):
    """On-disk mirror of the runtime configuration.

    Flag and limit fields are None when absent from the file, so the
    resolver can tell "unset" apart from an explicit 0.
    """

    provider: str = ""
    api_key: str = ""
    model: str = ""
    base_url: str = ""
    relax: Optional[bool] = None
    debug: Optional[bool] = None
    write_back: Optional[bool] = None
    max_diff_chars: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @field_validator("provider", "api_key", "model", "base_url", mode="before")
    @classmethod
    def null_to_empty(cls, v: Any) -> Any:
        """Treat JSON null as an unset string."""
        return "" if v is None else v

    @field_validator("relax", "debug", "write_back", "max_diff_chars", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Any:
        """Treat empty strings as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_record(self) -> dict[str, Any]:
        """Serialize to the on-disk record.

        Booleans are written as 0/1 integers to match the original flag
        semantics of the file format.
        """
        record: dict[str, Any] = {
            "provider": self.provider,
            "api_key": self.api_key,
            "model": self.model,
            "base_url": self.base_url,
        }
        for name in ("relax", "debug", "write_back"):
            value = getattr(self, name)
            if value is not None:
                record[name] = int(value)
        if self.max_diff_chars is not None:
            record["max_diff_chars"] = self.max_diff_chars
        if self.created_at:
            record["created_at"] = self.created_at
        if self.updated_at:
            record["updated_at"] = self.updated_at
        return record


_CONFIG_DIR = Path.home() / ".autocommit"


def get_global_config_dir() -> Path:
    """Get the global autocommit configuration directory.

    Returns:
        Path to ~/.autocommit/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.autocommit/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.json file.

    Returns:
        Path to ~/.autocommit/config.json
    """
    return get_global_config_dir() / "config.json"


def get_instructions_file_path() -> Path:
    """Get path to the custom instructions file.

    Returns:
        Path to ~/.autocommit/instructions.txt
    """
    return get_global_config_dir() / "instructions.txt"


def load_settings() -> PersistedSettings:
    """Load persisted settings from ~/.autocommit/config.json.

    Returns:
        The persisted settings. Empty settings if the file doesn't exist.

    Raises:
        InvalidPersistedFormatError: If the file is not a valid settings record.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return PersistedSettings()

    try:
        with open(config_file, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidPersistedFormatError(
            f"Invalid configuration file at {config_file}: {e}"
        )

    if not isinstance(data, dict):
        raise InvalidPersistedFormatError(
            f"Invalid configuration file at {config_file}: expected a JSON object"
        )

    try:
        return PersistedSettings(**data)
    except ValidationError as e:
        raise InvalidPersistedFormatError(
            f"Invalid configuration file at {config_file}: {e}"
        )


def save_settings(settings: PersistedSettings) -> None:
    """Save settings to ~/.autocommit/config.json.

    Args:
        settings: The settings to persist.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            json.dump(settings.to_record(), f, indent=2)
            f.write("\n")
    except OSError as e:
        raise ConfigError(f"Failed to save config to {config_file}: {e}")


def current_timestamp() -> str:
    """Get the current local time in the record's timestamp format."""
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def is_configured() -> bool:
    """Check if autocommit has been configured.

    Returns:
        True if config.json exists, False otherwise.
    """
    return get_config_file_path().exists()


def load_custom_instructions() -> Optional[str]:
    """Load user-supplied instructions from ~/.autocommit/instructions.txt.

    Returns:
        The instructions text, or None if the file is missing or blank.
    """
    instructions_file = get_instructions_file_path()

    if not instructions_file.exists():
        return None

    try:
        text = instructions_file.read_text()
    except OSError as e:
        raise ConfigError(f"Failed to read instructions from {instructions_file}: {e}")

    return text.rstrip("\n") if text.strip() else None
