"""Shared type definitions for agents."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from agents.escalation import HintLevel

DIMENSIONS = ("technical_skills", "code_quality", "complexity_analysis", "communication_skills")


class DimensionScore(BaseModel):
    score: float = Field(ge=0, le=100, strict=True)
    justification: StrictStr


class Report(BaseModel):
    """Validated grading report; unknown top-level keys are dropped."""

    model_config = ConfigDict(extra="ignore")

    technical_skills: DimensionScore
    code_quality: DimensionScore
    complexity_analysis: DimensionScore
    communication_skills: DimensionScore
    overall_summary: StrictStr


class HintResult(BaseModel):
    hint: str
    level: HintLevel


class ExecutionResult(BaseModel):
    output: Optional[str] = None
    error: Optional[str] = None
    execution_time: Optional[float] = None  # seconds
    memory: Optional[int] = None  # KB
    status: str
