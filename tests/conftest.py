import os
import sys
import tempfile
from pathlib import Path
from types import SimpleNamespace

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENABLE_FILE_LOGS", "0")

from agents.types import ExecutionResult
from config.settings import settings
from services.interview import InterviewServices
from storage.migrate import migrate


VALID_REPORT = """{
  "technical_skills": {"score": 82, "justification": "Solved the problem with a hash map."},
  "code_quality": {"score": 74.5, "justification": "Readable, a few long lines."},
  "complexity_analysis": {"score": 90, "justification": "Stated O(n) time and space."},
  "communication_skills": {"score": 68, "justification": "Explained the approach clearly."},
  "overall_summary": "Strong problem solver with clear reasoning."
}"""


class FakeLLM:
    """Records every completion call and replays scripted replies."""

    def __init__(self, replies=None, *, supports_json_mode=True, delay=0.0):
        self.replies = list(replies or [])
        self.supports_json_mode = supports_json_mode
        self.delay = delay
        self.calls = []

    def complete(self, system_prompt, user_prompt, options=None):
        self.calls.append({"system": system_prompt, "user": user_prompt, "options": options})
        if self.delay:
            import time

            time.sleep(self.delay)
        if not self.replies:
            return "default reply"
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeSandbox:
    def __init__(self, result=None):
        self.result = result or ExecutionResult(output="1\n", status="Accepted", execution_time=0.01, memory=1024)
        self.calls = []

    def execute(self, code, language):
        self.calls.append((code, language))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture(autouse=True)
def tmp_db(monkeypatch):
    td = tempfile.TemporaryDirectory()
    db_path = os.path.join(td.name, "test.db")
    monkeypatch.setattr(settings, "DB_PATH", db_path, raising=False)
    migrate(db_path)
    try:
        yield db_path
    finally:
        td.cleanup()


@pytest.fixture
def fakes():
    return SimpleNamespace(
        hints=FakeLLM(["Think about what you need to look up quickly."]),
        report=FakeLLM([VALID_REPORT]),
        follow_up=FakeLLM(["Nice work. What is the time complexity?"]),
        problem=FakeLLM(["Given an array of integers, return indices of two numbers adding to a target."]),
        sandbox=FakeSandbox(),
    )


@pytest.fixture
def services(fakes, tmp_db):
    return InterviewServices.build(
        settings,
        llms={
            "hints": fakes.hints,
            "report": fakes.report,
            "follow_up": fakes.follow_up,
            "problem": fakes.problem,
        },
        sandbox=fakes.sandbox,
    )


@pytest.fixture
def make_llm():
    return FakeLLM


@pytest.fixture
def valid_report():
    return VALID_REPORT
