"""Main CLI command for generating commit messages."""

from typing import Optional

import typer

from autocommit import __version__
from autocommit.formatters import validate_commit_message
from autocommit.git import (
    GitError,
    NoStagedChangesError,
    create_commit,
    ensure_repository,
    require_staged_changes,
)
from autocommit.global_config import ConfigError
from autocommit.llm import LLMError
from autocommit.cli.utils import (
    SEPARATOR,
    copy_to_clipboard,
    generate_message,
    load_runtime_config,
)


MENU_CHOICES = {
    1: "📝 Commit with this message",
    2: "📋 Copy to clipboard",
    3: "🔄 Regenerate message",
    4: "💬 Regenerate with additional context",
    5: "❌ Exit without committing",
}


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        typer.echo(f"autocommit {__version__}")
        raise typer.Exit()


def show_message(message: str, relax: bool) -> None:
    """Display a generated message with its format status."""
    typer.echo()
    typer.secho("Generated commit message:", fg=typer.colors.GREEN)
    typer.echo(SEPARATOR)
    typer.echo(message)
    typer.echo(SEPARATOR)

    passed = validate_commit_message(message, relax=relax)
    if relax:
        if passed:
            typer.secho("✅ Contains a ':' (Relaxed Mode)", fg=typer.colors.GREEN)
        else:
            typer.secho("⚠️  Missing ':' (Relaxed Mode)", fg=typer.colors.YELLOW)
    else:
        if passed:
            typer.secho("✅ Follows Conventional Commits format", fg=typer.colors.GREEN)
        else:
            typer.secho("⚠️  May not follow Conventional Commits format", fg=typer.colors.YELLOW)


def prompt_menu_choice() -> int:
    """Show the action menu and read a choice between 1 and 5."""
    typer.echo()
    typer.echo("What would you like to do?")
    for number, label in MENU_CHOICES.items():
        typer.echo(f"{number}) {label}")
    typer.echo()

    while True:
        choice = typer.prompt("Enter choice (1-5)", default="", show_default=False)
        if choice.strip().isdigit() and int(choice) in MENU_CHOICES:
            return int(choice)
        typer.secho("Invalid choice. Please enter 1-5.", fg=typer.colors.RED)


def main_command(
    ctx: typer.Context,
    relax: bool = typer.Option(
        False,
        "--relax",
        help="Only require a ':' in the message instead of strict Conventional Commits",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Show API requests and responses",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Generate a Conventional Commits message from staged changes."""
    # Stash flags for subcommands such as `config`
    ctx.obj = {"relax": relax, "debug": debug}

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    try:
        ensure_repository()
        require_staged_changes()
    except NoStagedChangesError as e:
        typer.secho(str(e), fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(1)
    except GitError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    config = load_runtime_config(relax=relax, debug=debug)

    typer.secho("🔍 Analyzing staged changes...", fg=typer.colors.BLUE, err=True)

    additional_context = None
    while True:
        try:
            result = generate_message(config, additional_context)
        except (LLMError, GitError, ConfigError) as e:
            typer.secho(f"❌ {e}", fg=typer.colors.RED, err=True)
            typer.secho("Failed to generate message. Try again or exit.", fg=typer.colors.RED, err=True)
            if not typer.confirm("Retry?", default=False):
                raise typer.Exit(1)
            continue

        # Context applies to one regeneration only
        additional_context = None
        message = result.message
        show_message(message, config.relax)
        choice = prompt_menu_choice()

        if choice == 1:
            typer.secho("📝 Committing changes...", fg=typer.colors.BLUE)
            commit_result = create_commit(message)
            if commit_result.success:
                typer.echo(commit_result.output.rstrip())
                typer.secho("✅ Committed successfully!", fg=typer.colors.GREEN)
                break
            typer.echo(commit_result.output.rstrip(), err=True)
            typer.secho("❌ Commit failed", fg=typer.colors.RED, err=True)

        elif choice == 2:
            label = copy_to_clipboard(message)
            if label:
                typer.secho(f"📋 Copied ({label})!", fg=typer.colors.GREEN)
            else:
                typer.secho("Clipboard utility not found. Here's the message:", fg=typer.colors.YELLOW)
                typer.echo()
                typer.echo(message)

        elif choice == 3:
            typer.secho("🔄 Regenerating...", fg=typer.colors.BLUE)

        elif choice == 4:
            typer.secho("💬 Please provide additional context:", fg=typer.colors.BLUE)
            additional_context = typer.prompt(">", default="", show_default=False)
            typer.secho("🔄 Regenerating with new context...", fg=typer.colors.BLUE)

        else:
            typer.secho("❌ Exiting without committing", fg=typer.colors.YELLOW)
            break
