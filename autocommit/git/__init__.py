"""Git access for autocommit.

This package provides the staged-change queries and the commit operation:
- exceptions: GitError, NotARepositoryError, NoStagedChangesError
- runner: _run_git_command, ensure_repository, has_staged_changes, require_staged_changes
- diff: get_name_status, get_numstat, get_staged_diff, DEFAULT_DIFF_EXCLUDE_PATTERNS
- commit: create_commit, CommitResult
"""

# Exceptions
from autocommit.git.exceptions import (
    GitError,
    NotARepositoryError,
    NoStagedChangesError,
)

# Runner utilities
from autocommit.git.runner import (
    _run_git_command,
    ensure_repository,
    has_staged_changes,
    require_staged_changes,
)

# Staged change queries
from autocommit.git.diff import (
    DEFAULT_DIFF_EXCLUDE_PATTERNS,
    get_name_status,
    get_numstat,
    get_staged_diff,
)

# Commit
from autocommit.git.commit import (
    CommitResult,
    create_commit,
)


__all__ = [
    # Exceptions
    "GitError",
    "NotARepositoryError",
    "NoStagedChangesError",
    # Runner
    "_run_git_command",
    "ensure_repository",
    "has_staged_changes",
    "require_staged_changes",
    # Diff
    "DEFAULT_DIFF_EXCLUDE_PATTERNS",
    "get_name_status",
    "get_numstat",
    "get_staged_diff",
    # Commit
    "CommitResult",
    "create_commit",
]
