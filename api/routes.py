"""FastAPI routes for coding interview sessions."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Request

from agents.types import Report
from api.schemas import (
    CreateInterviewReq,
    EventResp,
    ExecuteReq,
    ExecuteResp,
    HintReq,
    HintResp,
    ProblemReq,
    ProblemResp,
    ReportReq,
    VoiceTurnReq,
)
from errors import (
    MalformedReport,
    NoTranscriptData,
    SessionNotFound,
    StoreReadError,
    StoreUnavailable,
    UnsupportedLanguage,
    UpstreamError,
)
from services.interview import InterviewServices
from storage import Session, StoredReport


router = APIRouter(prefix="/api")


def get_services(request: Request) -> InterviewServices:
    return request.app.state.services


@contextmanager
def _http_errors() -> Iterator[None]:
    try:
        yield
    except SessionNotFound as exc:
        raise HTTPException(status_code=404, detail="interview not found") from exc
    except NoTranscriptData as exc:
        raise HTTPException(status_code=404, detail="nothing to grade for this interview") from exc
    except UnsupportedLanguage as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except MalformedReport as exc:
        # Raw model output stays in the logs.
        raise HTTPException(status_code=502, detail="report generation failed") from exc
    except StoreReadError as exc:
        raise HTTPException(status_code=503, detail=f"store lookup failed, retry later: {exc}") from exc
    except StoreUnavailable as exc:
        raise HTTPException(status_code=500, detail=f"persistence failed: {exc}") from exc
    except UpstreamError as exc:
        raise HTTPException(status_code=503, detail=f"upstream service failed: {exc}") from exc


@router.post("/interviews", response_model=Session)
def create_interview(req: CreateInterviewReq, services: InterviewServices = Depends(get_services)) -> Session:
    with _http_errors():
        return services.create_session(
            interviewer_id=req.interviewer_id,
            questions=req.questions,
            duration_minutes=req.duration_minutes,
        )


@router.get("/interviews/{interview_id}", response_model=Session)
def get_interview(interview_id: str, services: InterviewServices = Depends(get_services)) -> Session:
    with _http_errors():
        return services.require_session(interview_id)


@router.post("/coding/voice-turn", response_model=EventResp)
def voice_turn(req: VoiceTurnReq, services: InterviewServices = Depends(get_services)) -> EventResp:
    with _http_errors():
        event = services.record_voice_turn(req.interview_id, req.user_id, req.text)
    return EventResp(event_id=event.event_id, kind=event.kind, created_at=event.created_at, payload=event.payload)


@router.post("/coding/execute", response_model=ExecuteResp)
def execute(req: ExecuteReq, services: InterviewServices = Depends(get_services)) -> ExecuteResp:
    with _http_errors():
        run = services.run_code(req.interview_id, req.user_id, code=req.code, language=req.language)
    return ExecuteResp(**run.result.model_dump(), event_id=run.event_id, follow_up=run.follow_up)


@router.post("/coding/get-hint", response_model=HintResp)
def get_hint(req: HintReq, services: InterviewServices = Depends(get_services)) -> HintResp:
    with _http_errors():
        result = services.issue_hint(req.interview_id, req.user_id, problem=req.problem, code=req.code)
    return HintResp(hint=result.hint)


@router.post("/coding/generate-problem", response_model=ProblemResp)
def generate_problem(req: ProblemReq, services: InterviewServices = Depends(get_services)) -> ProblemResp:
    with _http_errors():
        return ProblemResp(problem=services.generate_problem(req.topic, req.difficulty))


@router.post("/coding/generate-full-report", response_model=Report)
def generate_full_report(req: ReportReq, services: InterviewServices = Depends(get_services)) -> Report:
    with _http_errors():
        return services.generate_report(req.interview_id).report


@router.get("/coding/reports/{interview_id}", response_model=StoredReport)
def latest_report(interview_id: str, services: InterviewServices = Depends(get_services)) -> StoredReport:
    with _http_errors():
        stored = services.latest_report(interview_id)
    if stored is None:
        raise HTTPException(status_code=404, detail="no report generated yet")
    return stored
