"""Git command runner and repository checks.

Contains:
- _run_git_command: Run a git command and return its output
- ensure_repository: Fail unless inside a git working tree
- has_staged_changes: Check whether anything is staged
- require_staged_changes: Fail unless something is staged
"""

import subprocess

from autocommit.git.exceptions import GitError, NoStagedChangesError, NotARepositoryError


def _run_git_command(args: list[str]) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.

    Returns:
        The stdout of the git command, without trailing whitespace.

    Raises:
        GitError: If the command fails.
    """
    try:
        result = subprocess.run(
            ["git"] + args,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.rstrip()
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{(e.stderr or '').strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")


def ensure_repository() -> None:
    """Ensure the current directory is inside a git repository.

    Raises:
        NotARepositoryError: If not in a git repository.
    """
    try:
        _run_git_command(["rev-parse", "--git-dir"])
    except GitError:
        raise NotARepositoryError("Not in a git repository")


def has_staged_changes() -> bool:
    """Check whether the index differs from HEAD.

    Returns:
        True if there are staged changes.
    """
    try:
        result = subprocess.run(
            ["git", "diff", "--cached", "--quiet"],
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    # --quiet exits 1 when there are differences
    if result.returncode not in (0, 1):
        raise GitError(f"Git command failed: git diff --cached --quiet\n{result.stderr.strip()}")
    return result.returncode == 1


def require_staged_changes() -> None:
    """Ensure there is something to commit.

    Raises:
        NoStagedChangesError: If nothing is staged.
    """
    if not has_staged_changes():
        raise NoStagedChangesError("No staged changes found. Stage changes with 'git add' first.")
