"""CLI entry point for autocommit.

This module provides the main CLI application that combines all commands
into a single unified interface.
"""

import typer

from autocommit.cli.config import config_command, status_command
from autocommit.cli.configure import configure_command
from autocommit.cli.main import main_command

# Main application
app = typer.Typer(
    name="autocommit",
    help="autocommit: AI-powered Git commit helper for Conventional Commits",
    add_completion=False,
)

# Add individual commands
app.command("configure")(configure_command)
app.command("config")(config_command)
app.command("status")(status_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "main_command",
    "configure_command",
    "config_command",
    "status_command",
]
