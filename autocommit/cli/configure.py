"""CLI command for configuring the AI provider."""

import requests
import typer

from autocommit.config import DEFAULT_MAX_DIFF_CHARS, LLMProvider
from autocommit.global_config import ConfigError, get_config_file_path
from autocommit.resolver import (
    OverrideSet,
    configure_settings,
    default_settings_for,
    parse_flag,
    parse_max_diff_chars,
)
from autocommit.cli.utils import load_overrides


# Menu order of `autocommit configure`
PROVIDER_MENU = [
    (LLMProvider.OPENAI, "OpenAI"),
    (LLMProvider.OLLAMA, "Ollama (local)"),
    (LLMProvider.MISTRAL, "Mistral"),
    (LLMProvider.GOOGLE, "Google AI (Gemini)"),
    (LLMProvider.GROQ, "Groq"),
    (LLMProvider.OPENROUTER, "OpenRouter"),
    (LLMProvider.CUSTOM, "Custom (OpenAI-compatible)"),
]


def _flag_default(override: str | None) -> bool:
    return parse_flag(override) if override else False


def _prompt_custom_endpoint() -> tuple[str, str, str]:
    """Prompt for a custom OpenAI-compatible endpoint."""
    base_url = typer.prompt("Enter custom OpenAI-compatible base URL", default="", show_default=False)
    if not base_url:
        typer.secho("Base URL is required.", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    model = typer.prompt("Enter custom model name", default="", show_default=False)
    if not model:
        typer.secho("Model name is required.", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    api_key = typer.prompt("Enter API key (optional)", default="", show_default=False, hide_input=True)
    return base_url, model, api_key


def _prompt_known_endpoint(provider: LLMProvider, overrides: OverrideSet) -> tuple[str, str, str]:
    """Prompt for key, model and base URL, offering the provider defaults."""
    defaults = default_settings_for(provider, overrides)
    base_url, model, api_key = defaults["base_url"], defaults["model"], defaults["api_key"]

    if not api_key and provider != LLMProvider.OLLAMA:
        api_key = typer.prompt("Enter API key", default="", show_default=False, hide_input=True)

    if not overrides.model:
        model = typer.prompt("Enter model name", default=model)

    if overrides.base_url:
        typer.echo(f"Using base URL from env: {base_url}")
    else:
        base_url = typer.prompt("Enter base URL", default=base_url)

    return base_url, model, api_key


def check_ollama_connection(base_url: str) -> bool:
    """Check whether an Ollama server answers at base_url."""
    try:
        response = requests.get(f"{base_url.rstrip('/')}/api/tags", timeout=5)
    except requests.RequestException:
        return False
    return response.ok


def configure_command() -> None:
    """Configure AI provider and settings."""
    overrides = load_overrides()

    typer.secho("Select AI Provider:", fg=typer.colors.BLUE)
    for number, (_, label) in enumerate(PROVIDER_MENU, 1):
        typer.echo(f"{number}) {label}")

    choice = typer.prompt(f"Enter choice (1-{len(PROVIDER_MENU)})", type=int, default=2)
    if choice < 1 or choice > len(PROVIDER_MENU):
        typer.secho("Invalid choice", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    provider = PROVIDER_MENU[choice - 1][0]

    if provider == LLMProvider.CUSTOM:
        base_url, model, api_key = _prompt_custom_endpoint()
    else:
        base_url, model, api_key = _prompt_known_endpoint(provider, overrides)

    relax = typer.confirm(
        "Relaxed validation (skips strict Conventional Commit check)?",
        default=_flag_default(overrides.relax),
    )
    debug = typer.confirm(
        "Enable DEBUG mode (show API requests/responses)?",
        default=_flag_default(overrides.debug),
    )
    try:
        default_max = (
            parse_max_diff_chars(overrides.max_diff_chars)
            if overrides.max_diff_chars
            else DEFAULT_MAX_DIFF_CHARS
        )
    except ConfigError:
        default_max = DEFAULT_MAX_DIFF_CHARS
    max_diff_chars = typer.prompt(
        "Max diff chars sent to model (0 = unlimited)",
        type=int,
        default=default_max,
    )
    write_back = typer.confirm(
        "Save env variables to config file on each run (WRITE_BACK)?",
        default=_flag_default(overrides.write_back),
    )

    try:
        configure_settings(
            provider=provider.value,
            model=model,
            base_url=base_url,
            api_key=api_key,
            relax=relax,
            debug=debug,
            max_diff_chars=max_diff_chars,
            write_back=write_back,
        )
    except ConfigError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.secho(f"Configuration saved to {get_config_file_path()}", fg=typer.colors.GREEN)

    if provider == LLMProvider.OLLAMA:
        typer.secho("Testing Ollama connection...", fg=typer.colors.YELLOW)
        if check_ollama_connection(base_url):
            typer.secho("Ollama connection successful!", fg=typer.colors.GREEN)
        else:
            typer.secho("Warning: Ollama server not responding. Run 'ollama serve'.", fg=typer.colors.YELLOW)
