"""SQLite persistence for sessions, events and reports."""
from .events import EventStore
from .migrate import migrate
from .models import CodeSubmissionPayload, Event, EventKind, NewEvent, Session
from .reports import ReportStore, StoredReport
from .sessions import SessionStore

__all__ = [
    "CodeSubmissionPayload",
    "Event",
    "EventKind",
    "EventStore",
    "NewEvent",
    "ReportStore",
    "Session",
    "SessionStore",
    "StoredReport",
    "migrate",
]
