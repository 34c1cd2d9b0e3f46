"""Interview operations composed from stores, agents and external clients."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional

from pydantic import BaseModel

from agents.follow_up import FollowUpAgent
from agents.hint_agent import HintAgent
from agents.problem_generator import ProblemGenerator
from agents.report_engine import ReportEngine
from agents.types import ExecutionResult, HintResult
from config import Settings, load_config, resolve_all
from errors import NoTranscriptData, SessionNotFound, StoreUnavailable, UpstreamError
from llm_gateway import CompletionClient, HttpClient, LanguageModelClient
from observability import log_event, span
from sandbox import SandboxClient, SandboxRunner
from storage import (
    CodeSubmissionPayload,
    Event,
    EventKind,
    EventStore,
    NewEvent,
    ReportStore,
    Session,
    SessionStore,
    StoredReport,
    migrate,
)
from transcript import assemble

logger = logging.getLogger(__name__)


class CodeRun(BaseModel):
    result: ExecutionResult
    event_id: int
    follow_up: Optional[str] = None


class InterviewServices:
    """Explicitly constructed context shared by the HTTP handlers.

    Holds no per-request state; everything durable lives in SQLite.
    """

    def __init__(
        self,
        *,
        sessions: SessionStore,
        events: EventStore,
        reports: ReportStore,
        hint_agent: HintAgent,
        report_engine: ReportEngine,
        follow_up: FollowUpAgent,
        problems: ProblemGenerator,
        sandbox: SandboxRunner,
    ) -> None:
        self.sessions = sessions
        self.events = events
        self.reports = reports
        self.hint_agent = hint_agent
        self.report_engine = report_engine
        self.follow_up = follow_up
        self.problems = problems
        self.sandbox = sandbox

    @classmethod
    def build(
        cls,
        settings: Settings,
        *,
        llms: Mapping[str, CompletionClient],
        sandbox: SandboxRunner,
    ) -> "InterviewServices":
        """Wire stores and agents around already-constructed clients.

        ``llms`` maps each task (``hints``, ``report``, ``follow_up``,
        ``problem``) to its model client.
        """

        migrate(settings.DB_PATH)
        events = EventStore(settings.DB_PATH)
        return cls(
            sessions=SessionStore(settings.DB_PATH),
            events=events,
            reports=ReportStore(settings.DB_PATH),
            hint_agent=HintAgent(events, llms["hints"], temperature=settings.HINT_TEMPERATURE),
            report_engine=ReportEngine(llms["report"], temperature=settings.REPORT_TEMPERATURE),
            follow_up=FollowUpAgent(llms["follow_up"], temperature=settings.FOLLOW_UP_TEMPERATURE),
            problems=ProblemGenerator(llms["problem"], temperature=settings.PROBLEM_TEMPERATURE),
            sandbox=sandbox,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        llm_http_client: Optional[HttpClient] = None,
    ) -> "InterviewServices":
        cfg = load_config(Path(settings.APP_CONFIG_PATH))
        llms = {
            task: LanguageModelClient(route, http_client=llm_http_client)
            for task, route in resolve_all(cfg).items()
        }
        return cls.build(settings, llms=llms, sandbox=SandboxClient(settings))

    # Sessions

    def create_session(
        self,
        *,
        interviewer_id: Optional[str] = None,
        questions: Optional[List[str]] = None,
        duration_minutes: Optional[int] = None,
    ) -> Session:
        session = self.sessions.create_session(
            interviewer_id=interviewer_id,
            questions=questions or [],
            duration_minutes=duration_minutes,
        )
        log_event("session_created", session.session_id, questions=len(session.questions))
        return session

    def require_session(self, session_id: str) -> Session:
        session = self.sessions.get_session(session_id)
        if session is None:
            raise SessionNotFound(session_id)
        return session

    # Event producers

    def record_voice_turn(self, session_id: str, candidate_id: str, text: str) -> Event:
        self.require_session(session_id)
        event = self.events.append_event(
            NewEvent(
                session_id=session_id,
                candidate_id=candidate_id,
                kind=EventKind.VOICE_TURN.value,
                payload={"text": text},
            )
        )
        log_event("voice_turn", session_id, candidate_id=candidate_id, event_kind=event.kind)
        return event

    def run_code(self, session_id: str, candidate_id: str, *, code: str, language: str) -> CodeRun:
        """Execute code remotely, record the submission and draft a follow-up line.

        The follow-up is best-effort: a model failure there leaves it ``None``
        because the run itself is already recorded.
        """

        self.require_session(session_id)
        with span("execute_code", session_id, candidate_id=candidate_id):
            result = self.sandbox.execute(code, language)
        submission = CodeSubmissionPayload(code=code, language=language, **result.model_dump())
        try:
            event = self.events.append_event(
                NewEvent(
                    session_id=session_id,
                    candidate_id=candidate_id,
                    kind=EventKind.CODE_SUBMISSION.value,
                    payload=submission.model_dump(),
                )
            )
        except StoreUnavailable as exc:
            logger.error("Code run finished but not recorded session=%s candidate=%s", session_id, candidate_id)
            raise StoreUnavailable(
                "Code ran but the submission could not be recorded",
                generated=result.model_dump_json(),
            ) from exc
        log_event("code_submission", session_id, candidate_id=candidate_id, status=result.status)

        follow_up: Optional[str] = None
        try:
            follow_up = self.follow_up.next_line(submission)
        except UpstreamError as exc:
            logger.warning("Follow-up generation failed session=%s: %s", session_id, exc)
        return CodeRun(result=result, event_id=event.event_id, follow_up=follow_up)

    def issue_hint(self, session_id: str, candidate_id: str, *, problem: str, code: str) -> HintResult:
        self.require_session(session_id)
        with span("issue_hint", session_id, candidate_id=candidate_id):
            result = self.hint_agent.issue_hint(session_id, candidate_id, problem=problem, code=code)
        log_event("hint_issued", session_id, candidate_id=candidate_id, level=result.level.value)
        return result

    def generate_problem(self, topic: str, difficulty: str) -> str:
        return self.problems.generate(topic, difficulty)

    # Reports

    def generate_report(self, session_id: str) -> StoredReport:
        """Rebuild the transcript from current events, grade it and store the result."""

        self.require_session(session_id)
        events = self.events.list_events(session_id)
        if not events:
            raise NoTranscriptData(session_id)
        transcript = assemble(events)
        with span("generate_report", session_id, events=transcript.event_count):
            report = self.report_engine.synthesize(transcript)
        try:
            stored = self.reports.save_report(session_id, report)
        except StoreUnavailable as exc:
            logger.error("Report generated but not recorded session=%s", session_id)
            raise StoreUnavailable(
                "Report generated but could not be recorded",
                generated=report.model_dump_json(),
            ) from exc
        log_event("report_generated", session_id, outcome="stored")
        return stored

    def latest_report(self, session_id: str) -> Optional[StoredReport]:
        self.require_session(session_id)
        return self.reports.latest_report(session_id)


__all__ = ["CodeRun", "InterviewServices"]
