"""Pydantic schemas for the coding interview API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class CreateInterviewReq(BaseModel):
    interviewer_id: Optional[str] = None
    questions: List[str] = Field(default_factory=list)
    duration_minutes: Optional[int] = Field(default=None, ge=1)


class VoiceTurnReq(BaseModel):
    interview_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    text: str = Field(min_length=1)


class ExecuteReq(BaseModel):
    code: str = Field(min_length=1)
    language: str = Field(min_length=1)
    interview_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)


class HintReq(BaseModel):
    code: str = Field(min_length=1)
    problem: str = Field(min_length=1)
    interview_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)


class ProblemReq(BaseModel):
    topic: str = Field(min_length=1)
    difficulty: str = Field(min_length=1)


class ReportReq(BaseModel):
    interview_id: str = Field(min_length=1)


class EventResp(BaseModel):
    event_id: int
    kind: str
    created_at: str
    payload: Dict[str, Any] = Field(default_factory=dict)


class ExecuteResp(BaseModel):
    output: Optional[str] = None
    error: Optional[str] = None
    execution_time: Optional[float] = None
    memory: Optional[int] = None
    status: str
    event_id: int
    follow_up: Optional[str] = None


class HintResp(BaseModel):
    hint: str


class ProblemResp(BaseModel):
    problem: str
