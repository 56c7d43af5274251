"""Runtime configuration resolution.

Merges three sources into one RuntimeConfig, in precedence order:
1. OverrideSet (AUTOCOMMIT_* environment values, CLI flags)
2. PersistedSettings (~/.autocommit/config.json)
3. Per-provider defaults (base URL) and built-in fallbacks

API keys follow their own chain: the generic AUTOCOMMIT_API_KEY, then the
provider's conventional variable (e.g. GROQ_API_KEY), then the persisted key.
"""

from typing import Callable, Mapping, Optional

from pydantic import BaseModel

from autocommit.config import (
    API_KEY_ENV_VARS,
    DEFAULT_MAX_DIFF_CHARS,
    DEFAULT_MODELS,
    ENV_API_KEY,
    ENV_BASE_URL,
    ENV_DEBUG,
    ENV_MAX_DIFF_CHARS,
    ENV_MODEL,
    ENV_OLLAMA_HOST,
    ENV_PROVIDER,
    ENV_RELAX,
    ENV_WRITE_BACK,
    LLMProvider,
    default_base_url_for,
    get_api_key_env_vars,
)
from autocommit.global_config import (
    ConfigError,
    IncompleteConfigError,
    PersistedSettings,
    current_timestamp,
    save_settings,
)


_TRUE_VALUES = {"1", "true", "yes", "on"}


class OverrideSet(BaseModel):
    """Ambient override values for one resolution call.

    Every field is a raw string as it would appear in the environment;
    None or "" means "not overridden".
    """

    provider: Optional[str] = None
    model: Optional[str] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    relax: Optional[str] = None
    debug: Optional[str] = None
    max_diff_chars: Optional[str] = None
    write_back: Optional[str] = None
    ollama_host: Optional[str] = None
    provider_api_keys: dict[str, str] = {}

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "OverrideSet":
        """Build an override set from an environment mapping.

        Args:
            environ: Mapping such as os.environ.

        Returns:
            The overrides found in the mapping.
        """
        key_names = {name for names in API_KEY_ENV_VARS.values() for name in names}
        return cls(
            provider=environ.get(ENV_PROVIDER),
            model=environ.get(ENV_MODEL),
            base_url=environ.get(ENV_BASE_URL),
            api_key=environ.get(ENV_API_KEY),
            relax=environ.get(ENV_RELAX),
            debug=environ.get(ENV_DEBUG),
            max_diff_chars=environ.get(ENV_MAX_DIFF_CHARS),
            write_back=environ.get(ENV_WRITE_BACK),
            ollama_host=environ.get(ENV_OLLAMA_HOST),
            provider_api_keys={
                name: environ[name] for name in key_names if environ.get(name)
            },
        )

    def with_flags(self, relax: bool = False, debug: bool = False) -> "OverrideSet":
        """Return a copy with command-line flags applied on top.

        Flags only ever switch a setting on; an unset flag leaves the
        existing override in place.
        """
        update = {}
        if relax:
            update["relax"] = "1"
        if debug:
            update["debug"] = "1"
        return self.model_copy(update=update)


class RuntimeConfig(BaseModel):
    """The resolved, authoritative settings for one invocation."""

    provider: str
    model: str
    base_url: str = ""
    api_key: str = ""
    relax: bool = False
    debug: bool = False
    max_diff_chars: int = DEFAULT_MAX_DIFF_CHARS
    write_back: bool = False

    def to_settings(self, created_at: Optional[str] = None) -> PersistedSettings:
        """Convert to a persisted settings record stamped with the current time."""
        return PersistedSettings(
            provider=self.provider,
            api_key=self.api_key,
            model=self.model,
            base_url=self.base_url,
            relax=self.relax,
            debug=self.debug,
            write_back=self.write_back,
            max_diff_chars=self.max_diff_chars,
            created_at=created_at,
            updated_at=current_timestamp(),
        )


def _present(value: Optional[str]) -> bool:
    return value is not None and value != ""


def parse_flag(value: str) -> bool:
    """Parse an environment-style boolean ("1", "true", "yes", "on")."""
    return value.strip().lower() in _TRUE_VALUES


def parse_max_diff_chars(value: str) -> int:
    """Parse an environment-style character limit.

    Raises:
        ConfigError: If the value is not an integer.
    """
    try:
        return int(value.strip())
    except ValueError:
        raise ConfigError(f"Invalid max diff chars value: {value!r} (expected an integer)")


def _merge_str(override: Optional[str], persisted: str) -> str:
    if _present(override):
        return override
    return persisted or ""


def _merge_flag(override: Optional[str], persisted: Optional[bool], fallback: bool) -> bool:
    if _present(override):
        return parse_flag(override)
    if persisted is not None:
        return persisted
    return fallback


def resolve_api_key(provider: str, persisted_key: str, overrides: OverrideSet) -> str:
    """Resolve the API key for a provider.

    Args:
        provider: The resolved provider name.
        persisted_key: The key stored in config.json.
        overrides: The active override set.

    Returns:
        The API key, or an empty string. Ollama never uses a key.
    """
    if provider == LLMProvider.OLLAMA.value:
        return ""

    if _present(overrides.api_key):
        return overrides.api_key

    if provider:
        for env_var in get_api_key_env_vars(provider):
            key = overrides.provider_api_keys.get(env_var)
            if key:
                return key

    return persisted_key or ""


def merge_settings(persisted: PersistedSettings, overrides: OverrideSet) -> RuntimeConfig:
    """Merge persisted settings and overrides without checking completeness.

    Provider and model may come back empty.

    Raises:
        ConfigError: If an override value cannot be parsed.
    """
    provider = _merge_str(overrides.provider, persisted.provider)
    base_url = _merge_str(overrides.base_url, persisted.base_url)
    if not base_url and provider:
        base_url = default_base_url_for(provider, overrides.ollama_host)

    if _present(overrides.max_diff_chars):
        max_diff_chars = parse_max_diff_chars(overrides.max_diff_chars)
    elif persisted.max_diff_chars is not None:
        max_diff_chars = persisted.max_diff_chars
    else:
        max_diff_chars = DEFAULT_MAX_DIFF_CHARS

    return RuntimeConfig(
        provider=provider,
        model=_merge_str(overrides.model, persisted.model),
        base_url=base_url,
        api_key=resolve_api_key(provider, persisted.api_key, overrides),
        relax=_merge_flag(overrides.relax, persisted.relax, False),
        debug=_merge_flag(overrides.debug, persisted.debug, False),
        max_diff_chars=max_diff_chars,
        write_back=_merge_flag(overrides.write_back, persisted.write_back, False),
    )


def resolve(
    persisted: PersistedSettings,
    overrides: OverrideSet,
    store: Optional[Callable[[PersistedSettings], None]] = None,
) -> RuntimeConfig:
    """Merge persisted settings and overrides into a RuntimeConfig.

    Args:
        persisted: Settings loaded from disk.
        overrides: Override values for this invocation.
        store: Callable used to persist the result when write-back is on.
            Defaults to save_settings.

    Returns:
        The resolved runtime configuration.

    Raises:
        IncompleteConfigError: If provider or model is empty after merging.
        ConfigError: If an override value cannot be parsed.
    """
    config = merge_settings(persisted, overrides)

    if not config.provider or not config.model:
        raise IncompleteConfigError(
            "No complete configuration found. Run: autocommit configure"
        )

    if config.write_back:
        (store or save_settings)(config.to_settings(created_at=persisted.created_at))

    return config


def default_settings_for(provider: LLMProvider, overrides: OverrideSet) -> dict[str, str]:
    """Get the interactive defaults offered by `autocommit configure`.

    Overrides take precedence over the built-in defaults, as they do at
    resolution time.

    Args:
        provider: The provider being configured.
        overrides: The active override set.

    Returns:
        Dictionary with "base_url", "model" and "api_key" defaults.
    """
    if provider == LLMProvider.CUSTOM:
        return {"base_url": "", "model": "", "api_key": ""}

    base_url = overrides.base_url or default_base_url_for(provider.value, overrides.ollama_host)
    model = overrides.model or DEFAULT_MODELS[provider]
    api_key = resolve_api_key(provider.value, "", overrides)

    return {"base_url": base_url, "model": model, "api_key": api_key}


def configure_settings(
    provider: str,
    model: str,
    base_url: str,
    api_key: str,
    relax: bool,
    debug: bool,
    max_diff_chars: int,
    write_back: bool,
    store: Optional[Callable[[PersistedSettings], None]] = None,
) -> PersistedSettings:
    """Create and persist a fresh settings record.

    Returns:
        The saved settings.

    Raises:
        IncompleteConfigError: If provider or model is empty.
    """
    if not provider or not model:
        raise IncompleteConfigError("Provider and model are required.")

    settings = PersistedSettings(
        provider=provider,
        api_key=api_key,
        model=model,
        base_url=base_url,
        relax=relax,
        debug=debug,
        write_back=write_back,
        max_diff_chars=max_diff_chars,
        created_at=current_timestamp(),
    )
    (store or save_settings)(settings)
    return settings
