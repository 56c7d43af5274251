"""Staged change inspection.

Contains:
- get_name_status: Per-file add/modify/delete markers
- get_numstat: Per-file added/deleted line counts
- get_staged_diff: The staged diff text
- DEFAULT_DIFF_EXCLUDE_PATTERNS: Lockfiles left out of all three
"""

from typing import Optional

from autocommit.git.runner import _run_git_command


# Lockfiles inflate the diff without adding useful context
DEFAULT_DIFF_EXCLUDE_PATTERNS = [
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
]


def _exclude_pathspecs(exclude: Optional[list[str]]) -> list[str]:
    """Build the pathspec arguments that exclude the given patterns."""
    patterns = DEFAULT_DIFF_EXCLUDE_PATTERNS if exclude is None else exclude
    return ["--", "."] + [f":!{pattern}" for pattern in patterns]


def get_name_status(exclude: Optional[list[str]] = None) -> str:
    """Get `git diff --cached --name-status` output.

    Args:
        exclude: Patterns to leave out. Defaults to lockfiles.

    Returns:
        One "<marker>\\t<path>" line per staged file.
    """
    return _run_git_command(["diff", "--cached", "--name-status"] + _exclude_pathspecs(exclude))


def get_numstat(exclude: Optional[list[str]] = None) -> str:
    """Get `git diff --cached --numstat` output.

    Args:
        exclude: Patterns to leave out. Defaults to lockfiles.

    Returns:
        One "<added>\\t<deleted>\\t<path>" line per staged file.
    """
    return _run_git_command(["diff", "--cached", "--numstat"] + _exclude_pathspecs(exclude))


def get_staged_diff(exclude: Optional[list[str]] = None) -> str:
    """Get the staged diff without color codes.

    Args:
        exclude: Patterns to leave out. Defaults to lockfiles.

    Returns:
        The staged diff string.
    """
    return _run_git_command(["diff", "--cached", "--no-color"] + _exclude_pathspecs(exclude))
