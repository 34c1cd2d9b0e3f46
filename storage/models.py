from __future__ import annotations  # Persistence-facing domain models

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EventKind(str, Enum):  # Event kinds written by the action handlers
    VOICE_TURN = "voice_turn"
    CODE_SUBMISSION = "code_submission"
    HINT = "hint"


class Session(BaseModel):  # One scheduled interview instance
    session_id: str
    interviewer_id: Optional[str] = None
    questions: List[str] = Field(default_factory=list)
    duration_minutes: Optional[int] = None
    is_active: bool = True
    created_at: str


class NewEvent(BaseModel):  # Event before the store assigns id and timestamp
    session_id: str
    candidate_id: str
    kind: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class Event(NewEvent):  # Immutable stored event
    event_id: int
    created_at: str

    model_config = {"frozen": True}


class CodeSubmissionPayload(BaseModel):  # Payload of a code_submission event
    code: str
    language: str
    status: str
    output: Optional[str] = None
    error: Optional[str] = None
    execution_time: Optional[float] = None
    memory: Optional[int] = None


__all__ = ["CodeSubmissionPayload", "Event", "EventKind", "NewEvent", "Session"]
