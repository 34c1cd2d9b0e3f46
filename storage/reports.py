"""Persistence helpers for generated grading reports."""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel

from agents.types import Report

from .sqlite import get_conn


class StoredReport(BaseModel):
    report_id: int
    session_id: str
    report: Report
    created_at: str


class ReportStore:  # SQLite-backed report history, newest wins
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def save_report(self, session_id: str, report: Report) -> StoredReport:
        """Insert a report row and return the stored record."""

        created_at = dt.datetime.now(dt.timezone.utc).isoformat(timespec="microseconds")
        with get_conn(self._db_path) as conn:
            cur = conn.execute(
                "INSERT INTO session_reports (session_id, report_json, created_at) VALUES (?, ?, ?)",
                (session_id, report.model_dump_json(), created_at),
            )
            report_id = int(cur.lastrowid)
        return StoredReport(report_id=report_id, session_id=session_id, report=report, created_at=created_at)

    def latest_report(self, session_id: str) -> Optional[StoredReport]:
        with get_conn(self._db_path, read_only=True) as conn:
            row = conn.execute(
                """SELECT id, session_id, report_json, created_at FROM session_reports
                   WHERE session_id = ? ORDER BY id DESC LIMIT 1""",
                (session_id,),
            ).fetchone()
        if row is None:
            return None
        return StoredReport(
            report_id=row["id"],
            session_id=row["session_id"],
            report=Report.model_validate_json(row["report_json"]),
            created_at=row["created_at"],
        )


__all__ = ["ReportStore", "StoredReport"]
