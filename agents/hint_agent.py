"""Progressive hint agent backed by the language model and the event log."""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Tuple

from agents.escalation import next_hint_level
from agents.types import HintResult
from errors import StoreUnavailable, UpstreamError
from llm_gateway import CompletionClient, CompletionOptions
from prompts import HINT_SYSTEM_PROMPT, HINT_USER_PROMPT, PRIOR_HINTS_NOTE, PROGRESSIVE_HINT_PROMPTS, render_prompt
from storage.events import EventStore
from storage.models import Event, EventKind, NewEvent

logger = logging.getLogger(__name__)

MAX_PRIOR_HINTS = 3

PairKey = Tuple[str, str]


class PairLocks:
    """Locks keyed by (session, candidate), dropped once no request holds them."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: Dict[PairKey, List] = {}  # key -> [lock, holders]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, session_id: str, candidate_id: str) -> Iterator[None]:
        key = (session_id, candidate_id)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = [threading.Lock(), 0]
                self._entries[key] = entry
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]


def _prior_texts(hints: List[Event]) -> List[str]:
    texts = [str(event.payload.get("hintText", "")).strip() for event in hints]
    return [text for text in texts if text][-MAX_PRIOR_HINTS:]


def build_hint_prompt(problem: str, code: str, instruction: str, prior_hints: List[str]) -> str:
    prompt = render_prompt(
        HINT_USER_PROMPT,
        {"PROBLEM": problem, "CODE": code, "INSTRUCTION": instruction},
    )
    if prior_hints:
        listed = "\n".join(f"- {text}" for text in prior_hints)
        prompt += "\n\n" + render_prompt(PRIOR_HINTS_NOTE, {"HINTS": listed})
    return prompt


class HintAgent:
    """Issues the next hint for a (session, candidate) pair.

    Issuance is serialized per pair inside this process so two concurrent
    requests cannot both read the same prior count. Separate worker processes
    sharing one database can still race; see DESIGN.md.
    """

    def __init__(self, store: EventStore, llm: CompletionClient, *, temperature: float = 0.5) -> None:
        self._store = store
        self._llm = llm
        self._temperature = temperature
        self.pair_locks = PairLocks()

    def issue_hint(self, session_id: str, candidate_id: str, *, problem: str, code: str) -> HintResult:
        with self.pair_locks.hold(session_id, candidate_id):
            prior = self._store.list_events(
                session_id,
                candidate_id=candidate_id,
                kind=EventKind.HINT.value,
            )
            level = next_hint_level(len(prior))
            user_prompt = build_hint_prompt(
                problem,
                code,
                PROGRESSIVE_HINT_PROMPTS[level],
                _prior_texts(prior),
            )
            raw = self._llm.complete(
                HINT_SYSTEM_PROMPT,
                user_prompt,
                CompletionOptions(temperature=self._temperature),
            )
            hint = (raw or "").strip()
            if not hint:
                raise UpstreamError("Model returned an empty hint")

            # Only a completed round trip is recorded.
            try:
                self._store.append_event(
                    NewEvent(
                        session_id=session_id,
                        candidate_id=candidate_id,
                        kind=EventKind.HINT.value,
                        payload={"hintText": hint, "hintLevel": level.value},
                    )
                )
            except StoreUnavailable as exc:
                logger.error(
                    "Hint generated but not recorded session=%s candidate=%s level=%s",
                    session_id,
                    candidate_id,
                    level.value,
                )
                raise StoreUnavailable("Hint generated but could not be recorded", generated=hint) from exc
        return HintResult(hint=hint, level=level)


__all__ = ["HintAgent", "PairLocks", "build_hint_prompt"]
