"""Lightweight CLI helpers for inspecting session events and reports."""
from __future__ import annotations

import argparse
import sqlite3
from typing import Optional

from config.settings import settings


def tail_events(limit: int = 20, session_id: Optional[str] = None) -> None:
    conn = sqlite3.connect(settings.DB_PATH)
    try:
        cursor = conn.cursor()
        if session_id:
            cursor.execute(
                """
                SELECT created_at, session_id, candidate_id, kind, payload_json
                FROM session_events
                WHERE session_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (session_id, limit),
            )
        else:
            cursor.execute(
                """
                SELECT created_at, session_id, candidate_id, kind, payload_json
                FROM session_events
                ORDER BY created_at DESC, id DESC
                LIMIT ?
                """,
                (limit,),
            )
        for row in cursor.fetchall():
            ts, sid, candidate_id, kind, payload = row
            if len(payload) > 100:
                payload = payload[:97] + "..."
            print(f"[{ts}] {sid}/{candidate_id} {kind} {payload}")
    finally:
        conn.close()


def tail_reports(limit: int = 20) -> None:
    conn = sqlite3.connect(settings.DB_PATH)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT created_at, session_id, report_json
            FROM session_reports
            ORDER BY id DESC
            LIMIT ?
            """,
            (limit,),
        )
        for row in cursor.fetchall():
            ts, sid, report = row
            print(f"[{ts}] {sid} report={report[:120]}")
    finally:
        conn.close()


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--tail-events", type=int, help="Show the latest session events")
    parser.add_argument("--session", help="Restrict --tail-events to one session id")
    parser.add_argument("--tail-reports", type=int, help="Show the latest generated reports")
    args = parser.parse_args()

    if args.tail_events:
        tail_events(args.tail_events, args.session)
    if args.tail_reports:
        tail_reports(args.tail_reports)


if __name__ == "__main__":
    main()
