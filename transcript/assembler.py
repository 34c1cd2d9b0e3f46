"""Fold a session's ordered event log into one transcript document."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from pydantic import BaseModel

from errors import NoTranscriptData
from storage.models import Event, EventKind

TRANSCRIPT_HEADER = "Interview Transcript:\n\n"


class Transcript(BaseModel):
    text: str
    event_count: int


def assemble(events: Iterable[Event]) -> Transcript:
    """Render events in the order given.

    The input is trusted to be chronological; it is neither re-sorted nor
    de-duplicated. Kinds without a renderer (hints included) are skipped, so
    new event kinds never break assembly but stay out of the transcript until
    a renderer is added here. When nothing renders there is nothing to grade
    and :class:`NoTranscriptData` is raised as for an empty log.
    """

    items = list(events)
    if not items:
        raise NoTranscriptData()

    blocks: List[str] = [TRANSCRIPT_HEADER]
    for event in items:
        renderer = _RENDERERS.get(event.kind)
        if renderer is None:
            continue
        blocks.append(renderer(event.payload))
    if len(blocks) == 1:
        raise NoTranscriptData(items[0].session_id)
    return Transcript(text="".join(blocks), event_count=len(items))


def _voice_block(payload: Dict[str, Any]) -> str:
    return f"[VOICE] {_text(payload.get('text'))}\n"


def _code_block(payload: Dict[str, Any]) -> str:
    result = payload.get("output") or payload.get("error") or ""
    return (
        "[CODE SUBMISSION]\n"
        f"Status: {_text(payload.get('status'))}\n"
        "---\n"
        f"{_text(payload.get('code'))}\n"
        "---\n"
        f"Result: {result}\n\n"
    )


def _text(value: Any) -> str:
    return "" if value is None else str(value)


_RENDERERS = {
    EventKind.VOICE_TURN.value: _voice_block,
    EventKind.CODE_SUBMISSION.value: _code_block,
}


__all__ = ["TRANSCRIPT_HEADER", "Transcript", "assemble"]
