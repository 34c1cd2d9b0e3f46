from __future__ import annotations  # Append-only session event log

import datetime as dt
import json
from typing import Any, List, Optional, Tuple

from .models import Event, NewEvent
from .sqlite import get_conn


class EventStore:  # SQLite-backed append-only event log
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def append_event(self, event: NewEvent) -> Event:  # Persist an event and assign id/timestamp
        created_at = dt.datetime.now(dt.timezone.utc).isoformat(timespec="microseconds")
        with get_conn(self._db_path) as conn:
            cur = conn.execute(
                """INSERT INTO session_events (session_id, candidate_id, kind, payload_json, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    event.session_id,
                    event.candidate_id,
                    event.kind,
                    json.dumps(event.payload, ensure_ascii=False),
                    created_at,
                ),
            )
            event_id = int(cur.lastrowid)
        return Event(event_id=event_id, created_at=created_at, **event.model_dump())

    def list_events(
        self,
        session_id: str,
        *,
        candidate_id: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> List[Event]:  # Events for a session, oldest first
        where, params = _filters(session_id, candidate_id, kind)
        with get_conn(self._db_path, read_only=True) as conn:
            rows = conn.execute(
                f"""SELECT id, session_id, candidate_id, kind, payload_json, created_at
                    FROM session_events
                    WHERE {where}
                    ORDER BY created_at ASC, id ASC""",
                params,
            ).fetchall()
        return [
            Event(
                event_id=row["id"],
                session_id=row["session_id"],
                candidate_id=row["candidate_id"],
                kind=row["kind"],
                payload=json.loads(row["payload_json"]),
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def count_events(
        self,
        session_id: str,
        *,
        candidate_id: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> int:
        where, params = _filters(session_id, candidate_id, kind)
        with get_conn(self._db_path, read_only=True) as conn:
            row = conn.execute(
                f"SELECT COUNT(*) AS n FROM session_events WHERE {where}",
                params,
            ).fetchone()
        return int(row["n"])


def _filters(session_id: str, candidate_id: Optional[str], kind: Optional[str]) -> Tuple[str, Tuple[Any, ...]]:
    clauses = ["session_id = ?"]
    params: List[Any] = [session_id]
    if candidate_id is not None:
        clauses.append("candidate_id = ?")
        params.append(candidate_id)
    if kind is not None:
        clauses.append("kind = ?")
        params.append(kind)
    return " AND ".join(clauses), tuple(params)


__all__ = ["EventStore"]
