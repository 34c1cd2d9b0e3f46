from __future__ import annotations  # Coding problem generation

from llm_gateway import CompletionClient, CompletionOptions
from prompts import CODING_INTERVIEWER_PROMPT, PROBLEM_USER_PROMPT, render_prompt
from errors import UpstreamError


class ProblemGenerator:  # Asks the model for a fresh problem statement
    def __init__(self, llm: CompletionClient, *, temperature: float = 0.7) -> None:
        self._llm = llm
        self._temperature = temperature

    def generate(self, topic: str, difficulty: str) -> str:
        prompt = render_prompt(PROBLEM_USER_PROMPT, {"TOPIC": topic, "DIFFICULTY": difficulty})
        raw = self._llm.complete(
            CODING_INTERVIEWER_PROMPT,
            prompt,
            CompletionOptions(temperature=self._temperature),
        )
        problem = (raw or "").strip()
        if not problem:
            raise UpstreamError("Model returned an empty problem")
        return problem


__all__ = ["ProblemGenerator"]
