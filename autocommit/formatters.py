"""Commit message format checks.

The check never blocks a commit; the CLI uses it to pick the status line
shown under a generated message.
"""

import re


# Valid conventional commit types
CONVENTIONAL_TYPES = [
    "feat",
    "fix",
    "docs",
    "style",
    "refactor",
    "test",
    "chore",
    "build",
    "ci",
    "perf",
    "revert",
]

# <type>[(scope)][!]: <description>
CONVENTIONAL_PATTERN = re.compile(
    r"^(" + "|".join(CONVENTIONAL_TYPES) + r")(\(.+\))?!?: .+"
)


def is_conventional(message: str) -> bool:
    """Check whether the first line follows Conventional Commits.

    Args:
        message: The commit message.

    Returns:
        True if the first line matches `<type>[(scope)][!]: <description>`.
    """
    first_line = message.split("\n", 1)[0]
    return CONVENTIONAL_PATTERN.match(first_line) is not None


def validate_commit_message(message: str, relax: bool = False) -> bool:
    """Check a generated message against the active format rules.

    Args:
        message: The commit message.
        relax: When True, only require a ':' somewhere in the message.

    Returns:
        True if the message passes.
    """
    if relax:
        return ":" in message
    return is_conventional(message)
