"""Persistence helpers for interview sessions."""
from __future__ import annotations

import datetime as dt
import json
from typing import List, Optional
from uuid import uuid4

from .models import Session
from .sqlite import get_conn


class SessionStore:  # SQLite-backed interview session registry
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def create_session(
        self,
        *,
        interviewer_id: Optional[str],
        questions: List[str],
        duration_minutes: Optional[int],
    ) -> Session:
        """Insert a new active session and return it."""

        session = Session(
            session_id=uuid4().hex,
            interviewer_id=interviewer_id,
            questions=list(questions),
            duration_minutes=duration_minutes,
            is_active=True,
            created_at=dt.datetime.now(dt.timezone.utc).isoformat(timespec="seconds"),
        )
        with get_conn(self._db_path) as conn:
            conn.execute(
                """INSERT INTO interview_sessions
                   (session_id, interviewer_id, questions_json, duration_minutes, is_active, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (
                    session.session_id,
                    session.interviewer_id,
                    json.dumps(session.questions, ensure_ascii=False),
                    session.duration_minutes,
                    1,
                    session.created_at,
                ),
            )
        return session

    def get_session(self, session_id: str) -> Optional[Session]:
        """Return the session or ``None`` when unknown."""

        with get_conn(self._db_path, read_only=True) as conn:
            row = conn.execute(
                """SELECT session_id, interviewer_id, questions_json, duration_minutes, is_active, created_at
                   FROM interview_sessions WHERE session_id = ?""",
                (session_id,),
            ).fetchone()
        if row is None:
            return None
        return Session(
            session_id=row["session_id"],
            interviewer_id=row["interviewer_id"],
            questions=json.loads(row["questions_json"]),
            duration_minutes=row["duration_minutes"],
            is_active=bool(row["is_active"]),
            created_at=row["created_at"],
        )


__all__ = ["SessionStore"]
