"""Shared utility functions for CLI commands."""

import os
import shutil
import subprocess
from typing import Optional

import typer
from dotenv import find_dotenv, load_dotenv

from autocommit.git import get_name_status, get_numstat, get_staged_diff
from autocommit.global_config import ConfigError, get_config_file_path, load_settings
from autocommit.llm import LLMResult, generate_commit_message
from autocommit.llm.prompts import build_changes_summary, build_prompt, load_instructions
from autocommit.resolver import OverrideSet, RuntimeConfig, resolve


# Clipboard tools in lookup order, with the label shown after copying
CLIPBOARD_COMMANDS = [
    (["pbcopy"], "macOS"),
    (["xclip", "-selection", "clipboard"], "X11"),
    (["wl-copy"], "Wayland"),
]

SEPARATOR = "━" * 51


def load_overrides(relax: bool = False, debug: bool = False) -> OverrideSet:
    """Collect overrides from the environment (and a .env file) plus CLI flags.

    Variables already set in the environment win over .env entries.
    """
    load_dotenv(find_dotenv(usecwd=True))
    return OverrideSet.from_env(os.environ).with_flags(relax=relax, debug=debug)


def load_runtime_config(relax: bool = False, debug: bool = False) -> RuntimeConfig:
    """Resolve the runtime configuration or exit with a message.

    Raises:
        typer.Exit: If the configuration is invalid or incomplete.
    """
    try:
        return resolve(load_settings(), load_overrides(relax=relax, debug=debug))
    except ConfigError as e:
        typer.secho(str(e), fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(1)


def generate_message(config: RuntimeConfig, user_context: Optional[str] = None) -> LLMResult:
    """Run one inspect-build-call cycle.

    Args:
        config: The resolved runtime configuration.
        user_context: Optional extra guidance from the user.

    Returns:
        The generation result.

    Raises:
        GitError: If the staged changes cannot be read.
        ConfigError: If the instructions file cannot be read.
        LLMError: If generation fails.
    """
    changes_summary = build_changes_summary(get_name_status(), get_numstat())
    diff = get_staged_diff()

    typer.secho(f"📊 Diff size: {len(diff)} chars", fg=typer.colors.BLUE, err=True)

    payload = build_prompt(
        load_instructions(),
        changes_summary,
        diff,
        config.max_diff_chars,
        user_context=user_context,
    )
    if payload.truncated:
        typer.secho(
            f"⚠️ Truncating diff to {config.max_diff_chars} chars for model reliability",
            fg=typer.colors.YELLOW,
            err=True,
        )

    typer.secho(
        f"🤖 Generating commit message with {config.provider} ({config.model})...",
        fg=typer.colors.BLUE,
        err=True,
    )
    return generate_commit_message(config, payload)


def mask_api_key(api_key: str) -> str:
    """Mask an API key for display."""
    if not api_key or api_key == "null":
        return "Not set"
    return f"{api_key[:8]}..."


def show_config(config: RuntimeConfig) -> None:
    """Print the resolved configuration with the API key masked."""
    typer.echo(SEPARATOR)
    typer.secho("Current Configuration:", fg=typer.colors.BLUE)
    typer.echo(f"Provider: {config.provider}")
    typer.echo(f"Model: {config.model}")
    typer.echo(f"API Key: {mask_api_key(config.api_key)}")
    typer.echo(f"Base URL: {config.base_url}")
    typer.echo(
        f"Flags: relax={int(config.relax)}, debug={int(config.debug)}, "
        f"write_back={int(config.write_back)}, max_diff_chars={config.max_diff_chars}"
    )
    typer.echo(f"Config file: {get_config_file_path()}")
    typer.echo(SEPARATOR)


def copy_to_clipboard(message: str) -> Optional[str]:
    """Copy a message using the first available clipboard tool.

    Returns:
        Label of the tool used, or None if no tool is available.
    """
    for command, label in CLIPBOARD_COMMANDS:
        if shutil.which(command[0]):
            subprocess.run(command, input=message, text=True, check=False)
            return label
    return None
