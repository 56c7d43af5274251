"""Prompt assembly for commit message generation.

The section order of PromptPayload.render() is fixed: instructions,
change summary, diff, optional user context, closing instruction.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from autocommit import global_config
from autocommit.llm.prompts.system import (
    DEFAULT_INSTRUCTIONS,
    DIFF_HEADER,
    FINAL_INSTRUCTION,
    TRUNCATION_NOTICE,
    USER_CONTEXT_HEADER,
)


class PromptPayload(BaseModel):
    """Everything sent to the backend for one generation attempt."""

    model_config = ConfigDict(frozen=True)

    instructions: str
    changes_summary: str
    diff_text: str
    user_context: Optional[str] = None
    truncated: bool = False

    def render(self) -> str:
        """Render the full prompt text."""
        text = "\n".join([
            self.instructions,
            "",
            self.changes_summary,
            "",
            DIFF_HEADER,
            self.diff_text,
        ])

        if self.user_context:
            text += f"\n\n{USER_CONTEXT_HEADER}\n{self.user_context}"

        return f"{text}\n\n{FINAL_INSTRUCTION}\n"


def load_instructions() -> str:
    """Get the instructions text: the user's override, or the default."""
    return global_config.load_custom_instructions() or DEFAULT_INSTRUCTIONS


def truncate_diff(diff_text: str, max_chars: int) -> tuple[str, bool]:
    """Cut a diff to max_chars characters, appending a notice when cut.

    Args:
        diff_text: The full staged diff.
        max_chars: Character limit; zero or negative disables the limit.

    Returns:
        Tuple of (diff text, whether it was truncated).
    """
    if max_chars <= 0 or len(diff_text) <= max_chars:
        return diff_text, False
    return f"{diff_text[:max_chars]}\n{TRUNCATION_NOTICE}", True


def build_prompt(
    instructions: str,
    changes_summary: str,
    diff_text: str,
    max_diff_chars: int,
    user_context: Optional[str] = None,
) -> PromptPayload:
    """Build the prompt payload for one generation attempt.

    Args:
        instructions: Instructions text (see load_instructions).
        changes_summary: Output of build_changes_summary.
        diff_text: The staged diff.
        max_diff_chars: Diff character limit; zero or negative disables it.
        user_context: Optional extra guidance typed by the user.

    Returns:
        The assembled PromptPayload.
    """
    diff, truncated = truncate_diff(diff_text, max_diff_chars)
    return PromptPayload(
        instructions=instructions,
        changes_summary=changes_summary,
        diff_text=diff,
        user_context=user_context.strip() if user_context and user_context.strip() else None,
        truncated=truncated,
    )


def build_changes_summary(name_status: str, numstat: str) -> str:
    """Summarize staged changes for the prompt.

    Args:
        name_status: Output of `git diff --cached --name-status`.
        numstat: Output of `git diff --cached --numstat`.

    Returns:
        File and line counts followed by the status lines.
    """
    status_lines = [line for line in name_status.splitlines() if line.strip()]
    added = sum(1 for line in status_lines if line.startswith("A"))
    modified = sum(1 for line in status_lines if line.startswith("M"))
    deleted = sum(1 for line in status_lines if line.startswith("D"))

    total_add = 0
    total_del = 0
    for line in numstat.splitlines():
        parts = line.split("\t")
        if len(parts) < 3 or not parts[2]:
            continue
        # Binary files report "-" for both counts
        total_add += int(parts[0]) if parts[0].isdigit() else 0
        total_del += int(parts[1]) if parts[1].isdigit() else 0

    return "\n".join([
        f"File changes: +{added} new, ~{modified} modified, -{deleted} deleted",
        f"Line changes: +{total_add} additions, -{total_del} deletions",
        "",
        "Files:",
        "\n".join(status_lines),
    ])
