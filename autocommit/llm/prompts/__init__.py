"""LLM prompt text and prompt assembly.

- system: The system message, default instructions and fixed section text
- builder: PromptPayload, build_prompt, build_changes_summary
"""

from autocommit.llm.prompts.system import (
    DEFAULT_INSTRUCTIONS,
    DIFF_HEADER,
    FINAL_INSTRUCTION,
    SYSTEM_PROMPT,
    TRUNCATION_NOTICE,
    USER_CONTEXT_HEADER,
)
from autocommit.llm.prompts.builder import (
    PromptPayload,
    build_changes_summary,
    build_prompt,
    load_instructions,
    truncate_diff,
)


__all__ = [
    # Fixed text
    "SYSTEM_PROMPT",
    "DEFAULT_INSTRUCTIONS",
    "DIFF_HEADER",
    "USER_CONTEXT_HEADER",
    "FINAL_INSTRUCTION",
    "TRUNCATION_NOTICE",
    # Assembly
    "PromptPayload",
    "build_prompt",
    "build_changes_summary",
    "load_instructions",
    "truncate_diff",
]
