"""Static configuration tables for autocommit providers.

Persisted settings live in ~/.autocommit/config.json (see global_config.py)
and are merged with environment overrides by resolver.py. This module only
holds the fixed tables the merge consults.
"""

from enum import Enum


class LLMProvider(Enum):
    """Known provider names."""

    OPENAI = "openai"
    OLLAMA = "ollama"
    MISTRAL = "mistral"
    GOOGLE = "google"
    GROQ = "groq"
    OPENROUTER = "openrouter"
    CUSTOM = "custom"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================

DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_MAX_DIFF_CHARS = 15360

# Sampling settings shared by both client variants
TEMPERATURE = 0.2
MAX_TOKENS = 400
OLLAMA_NUM_CTX = 8192

# Seconds before an outbound HTTP call is abandoned
REQUEST_TIMEOUT = 60

# Debug dumps are cut to this many characters
DEBUG_DUMP_LIMIT = 2000


# ============================================================
# DEFAULT BASE URLS PER PROVIDER
# ============================================================

# Ollama is absent: its URL comes from OLLAMA_HOST (see default_base_url_for)
DEFAULT_BASE_URLS = {
    LLMProvider.OPENAI: "https://api.openai.com/v1",
    LLMProvider.GROQ: "https://api.groq.com/openai/v1",
    LLMProvider.MISTRAL: "https://api.mistral.ai/v1",
    LLMProvider.GOOGLE: "https://generativelanguage.googleapis.com/v1beta",
    LLMProvider.OPENROUTER: "https://openrouter.ai/api/v1",
    LLMProvider.CUSTOM: "",
}


def default_base_url_for(provider: str, ollama_host: str | None = None) -> str:
    """Get the default base URL for a provider name.

    Args:
        provider: Provider name (e.g., "groq").
        ollama_host: Value of OLLAMA_HOST, if set.

    Returns:
        The default base URL, or an empty string for custom/unknown providers.
    """
    try:
        llm_provider = LLMProvider(provider)
    except ValueError:
        return ""

    if llm_provider == LLMProvider.OLLAMA:
        return ollama_host or DEFAULT_OLLAMA_HOST
    return DEFAULT_BASE_URLS[llm_provider]


# ============================================================
# DEFAULT MODELS (offered by `autocommit configure`)
# ============================================================

DEFAULT_MODELS = {
    LLMProvider.OPENAI: "gpt-4o",
    LLMProvider.OLLAMA: "gemma2:9b-instruct-q4_K_M",
    LLMProvider.MISTRAL: "mistral-large-latest",
    LLMProvider.GOOGLE: "gemini-1.5-flash-latest",
    LLMProvider.GROQ: "llama-3.1-70b-versatile",
    LLMProvider.OPENROUTER: "nousresearch/nous-hermes-2-mixtral-8x7b-dpo",
    LLMProvider.CUSTOM: "",
}


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

# Checked in order; Ollama and custom endpoints have no conventional key
API_KEY_ENV_VARS = {
    LLMProvider.OPENAI: ["OPENAI_API_KEY"],
    LLMProvider.OLLAMA: [],
    LLMProvider.MISTRAL: ["MISTRAL_API_KEY"],
    LLMProvider.GOOGLE: ["GOOGLE_API_KEY", "GEMINI_API_KEY"],
    LLMProvider.GROQ: ["GROQ_API_KEY"],
    LLMProvider.OPENROUTER: ["OPENROUTER_API_KEY"],
    LLMProvider.CUSTOM: [],
}


def get_api_key_env_vars(provider: str) -> list[str]:
    """Get the environment variable names holding a provider's API key.

    Args:
        provider: Provider name.

    Returns:
        The variable names in lookup order (empty for unknown providers).
    """
    try:
        return API_KEY_ENV_VARS[LLMProvider(provider)]
    except ValueError:
        return []


# ============================================================
# OVERRIDE ENVIRONMENT VARIABLES
# ============================================================

ENV_PROVIDER = "AUTOCOMMIT_PROVIDER"
ENV_MODEL = "AUTOCOMMIT_MODEL"
ENV_BASE_URL = "AUTOCOMMIT_BASE_URL"
ENV_API_KEY = "AUTOCOMMIT_API_KEY"
ENV_RELAX = "AUTOCOMMIT_RELAX"
ENV_DEBUG = "AUTOCOMMIT_DEBUG"
ENV_MAX_DIFF_CHARS = "AUTOCOMMIT_MAX_DIFF_CHARS"
ENV_WRITE_BACK = "AUTOCOMMIT_WRITE_BACK"
ENV_OLLAMA_HOST = "OLLAMA_HOST"
