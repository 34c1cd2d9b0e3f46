"""Typed failures shared by the hint, transcript and report pipelines."""
from __future__ import annotations

from typing import Optional


class InterviewError(RuntimeError):  # Base error for the interview service
    pass


class NoTranscriptData(InterviewError):  # Session has no events to grade
    def __init__(self, session_id: Optional[str] = None) -> None:
        self.session_id = session_id
        message = "No events recorded for this interview"
        if session_id:
            message += f" ({session_id})"
        super().__init__(message)


class MalformedReport(InterviewError):
    """Model output did not match the grading schema.

    ``raw`` keeps the untouched model text for postmortems. It must never be
    returned to API clients.
    """

    def __init__(self, reason: str, raw: str) -> None:
        self.reason = reason
        self.raw = raw
        super().__init__(f"Report failed validation: {reason}")


class UpstreamError(InterviewError):  # Model or sandbox collaborator failed
    pass


class SandboxError(UpstreamError):  # Remote code execution failed or timed out
    pass


class StoreReadError(UpstreamError):  # Store lookup failed before anything was generated
    pass


class UnsupportedLanguage(InterviewError):  # Sandbox has no runtime for the language
    def __init__(self, language: str) -> None:
        self.language = language
        super().__init__(f"Unsupported language: {language}")


class StoreUnavailable(InterviewError):
    """Persistence failed.

    When raised after a successful model call, ``generated`` holds the output
    that was produced but not recorded so operators can reconcile it.
    """

    def __init__(self, message: str, *, generated: Optional[str] = None) -> None:
        self.generated = generated
        super().__init__(message)


class SessionNotFound(InterviewError):  # Unknown interview/session id
    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Interview not found: {session_id}")


__all__ = [
    "InterviewError",
    "MalformedReport",
    "NoTranscriptData",
    "SandboxError",
    "SessionNotFound",
    "StoreReadError",
    "StoreUnavailable",
    "UnsupportedLanguage",
    "UpstreamError",
]
