"""Grading report synthesis against the language model."""
from __future__ import annotations

import logging
from typing import Optional

from pydantic import ValidationError

from agents.types import Report
from errors import MalformedReport
from llm_gateway import CompletionClient, CompletionOptions
from prompts import CODING_GRADING_FEEDBACK_PROMPT, JSON_ONLY_SUFFIX, REPORT_USER_PROMPT, render_prompt
from transcript import Transcript

logger = logging.getLogger(__name__)

RAW_LOG_LIMIT = 4000


def build_report_prompts(transcript: Transcript) -> tuple[str, str]:
    system_prompt = CODING_GRADING_FEEDBACK_PROMPT + "\n" + JSON_ONLY_SUFFIX
    user_prompt = render_prompt(REPORT_USER_PROMPT, {"TRANSCRIPT": transcript.text})
    return system_prompt, user_prompt


def parse_report(raw: str) -> Report:
    """Validate raw model text as a report or raise :class:`MalformedReport`.

    No recovery is attempted: no fence stripping, no clamping, no defaults.
    """

    try:
        return Report.model_validate_json(raw)
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
        reason = f"{location}: {first.get('msg', 'invalid report')}"
        clipped = raw if len(raw) <= RAW_LOG_LIMIT else raw[:RAW_LOG_LIMIT] + "...[truncated]"
        logger.warning("Malformed report from model (%s); raw=%r", reason, clipped)
        raise MalformedReport(reason, raw) from exc


class ReportEngine:  # Two-phase protocol: transcript in, validated report out
    def __init__(self, llm: CompletionClient, *, temperature: Optional[float] = None) -> None:
        self._llm = llm
        self._temperature = temperature

    def synthesize(self, transcript: Transcript) -> Report:
        system_prompt, user_prompt = build_report_prompts(transcript)
        options = CompletionOptions(
            temperature=self._temperature,
            json_mode=bool(getattr(self._llm, "supports_json_mode", False)),
        )
        # Single call; retries belong to the caller.
        raw = self._llm.complete(system_prompt, user_prompt, options)
        return parse_report(raw)


__all__ = ["ReportEngine", "build_report_prompts", "parse_report"]
