"""CLI commands for showing the current configuration."""

import typer

from autocommit.global_config import ConfigError, load_settings
from autocommit.resolver import merge_settings
from autocommit.cli.utils import load_overrides, load_runtime_config, show_config


def _flags(ctx: typer.Context) -> dict:
    return ctx.obj or {"relax": False, "debug": False}


def config_command(ctx: typer.Context) -> None:
    """Show current configuration."""
    show_config(load_runtime_config(**_flags(ctx)))


def status_command(ctx: typer.Context) -> None:
    """Show current configuration, even if it is incomplete."""
    try:
        config = merge_settings(load_settings(), load_overrides(**_flags(ctx)))
    except ConfigError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if not config.provider or not config.model:
        typer.secho(
            "No complete configuration found. Run: autocommit configure",
            fg=typer.colors.YELLOW,
        )
        config = config.model_copy(update={
            "provider": config.provider or "not set",
            "model": config.model or "not set",
        })

    show_config(config)
