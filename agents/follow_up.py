from __future__ import annotations  # Spoken follow-up after a code run

from llm_gateway import CompletionClient, CompletionOptions
from prompts import CODE_EXECUTION_FOLLOW_UP_PROMPT, CODING_INTERVIEWER_PROMPT, render_prompt
from storage.models import CodeSubmissionPayload
from errors import UpstreamError


def build_follow_up_prompt(submission: CodeSubmissionPayload) -> str:
    return render_prompt(
        CODE_EXECUTION_FOLLOW_UP_PROMPT,
        {
            "CODE": submission.code,
            "STATUS": submission.status,
            "OUTPUT": submission.output,
            "ERROR": submission.error,
        },
    )


class FollowUpAgent:  # Generates the interviewer's next line from an execution result
    def __init__(self, llm: CompletionClient, *, temperature: float = 0.6) -> None:
        self._llm = llm
        self._temperature = temperature

    def next_line(self, submission: CodeSubmissionPayload) -> str:
        raw = self._llm.complete(
            CODING_INTERVIEWER_PROMPT,
            build_follow_up_prompt(submission),
            CompletionOptions(temperature=self._temperature, max_tokens=200),
        )
        line = (raw or "").strip()
        if not line:
            raise UpstreamError("Model returned an empty follow-up")
        return line


__all__ = ["FollowUpAgent", "build_follow_up_prompt"]
