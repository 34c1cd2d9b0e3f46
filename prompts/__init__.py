"""Prompt templates and rendering."""
from .render import render_prompt
from .templates import (
    CODE_EXECUTION_FOLLOW_UP_PROMPT,
    CODING_GRADING_FEEDBACK_PROMPT,
    CODING_INTERVIEWER_PROMPT,
    HINT_SYSTEM_PROMPT,
    HINT_USER_PROMPT,
    JSON_ONLY_SUFFIX,
    PRIOR_HINTS_NOTE,
    PROBLEM_USER_PROMPT,
    PROGRESSIVE_HINT_PROMPTS,
    REPORT_USER_PROMPT,
)

__all__ = [
    "CODE_EXECUTION_FOLLOW_UP_PROMPT",
    "CODING_GRADING_FEEDBACK_PROMPT",
    "CODING_INTERVIEWER_PROMPT",
    "HINT_SYSTEM_PROMPT",
    "HINT_USER_PROMPT",
    "JSON_ONLY_SUFFIX",
    "PRIOR_HINTS_NOTE",
    "PROBLEM_USER_PROMPT",
    "PROGRESSIVE_HINT_PROMPTS",
    "REPORT_USER_PROMPT",
    "render_prompt",
]
