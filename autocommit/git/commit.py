"""Commit creation."""

import subprocess
from dataclasses import dataclass


@dataclass
class CommitResult:
    """Outcome of a `git commit` call."""

    success: bool
    output: str


def create_commit(message: str) -> CommitResult:
    """Commit the staged changes with the given message.

    Args:
        message: The commit message.

    Returns:
        A CommitResult with git's stdout on success, stderr on failure.
    """
    try:
        result = subprocess.run(
            ["git", "commit", "-m", message],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        return CommitResult(success=False, output="Git is not installed or not in PATH.")

    if result.returncode == 0:
        return CommitResult(success=True, output=result.stdout)
    return CommitResult(success=False, output=result.stderr or result.stdout)
