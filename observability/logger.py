"""Structured event logging for hint, execution and report activity."""
from __future__ import annotations

import json
import logging
import logging.handlers
import os
import sys
import time
import uuid
from typing import Any

from config.settings import settings

HUMAN_FORMAT = "[%(asctime)s] %(levelname)s %(name)s :: %(message)s"
HUMAN_DATEFMT = "%Y-%m-%d %H:%M:%S"
HUMAN_KEYS = ("candidate_id", "level", "event_kind", "status", "name", "ms", "outcome", "events")

_logger = logging.getLogger("interview")
_logger.propagate = False


def _human_formatter() -> logging.Formatter:
    return logging.Formatter(HUMAN_FORMAT, datefmt=HUMAN_DATEFMT)


def _rotating(path: str) -> logging.handlers.RotatingFileHandler:
    return logging.handlers.RotatingFileHandler(
        path,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )


def _ensure_handlers() -> None:
    if _logger.handlers:
        return
    level = settings.LOG_LEVEL.upper()
    _logger.setLevel(level)

    console = logging.StreamHandler(stream=sys.stdout)
    console.setLevel(level)
    console.setFormatter(_human_formatter())
    console.addFilter(lambda record: getattr(record, "is_json", False) is not True)
    _logger.addHandler(console)

    if not settings.ENABLE_FILE_LOGS:
        return

    log_dir = os.path.dirname(settings.LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    # One JSON object per line
    json_file = _rotating(settings.LOG_FILE)
    json_file.setLevel(level)
    json_file.setFormatter(logging.Formatter("%(message)s"))
    json_file.addFilter(lambda record: getattr(record, "is_json", False) is True)
    _logger.addHandler(json_file)

    root, ext = os.path.splitext(settings.LOG_FILE)
    human_file = _rotating(f"{root}-human{ext or '.log'}")
    human_file.setLevel(level)
    human_file.setFormatter(_human_formatter())
    human_file.addFilter(lambda record: getattr(record, "is_json", False) is not True)
    _logger.addHandler(human_file)


def _format_human(evt: dict[str, Any]) -> str:
    base = f"session={evt.get('session_id')} kind={evt.get('kind')}"
    extras = [f"{key}={evt[key]}" for key in HUMAN_KEYS if key in evt]
    return base + (" " + " ".join(extras) if extras else "")


def _emit(message: str, *, is_json: bool) -> None:
    record = _logger.makeRecord(
        name=_logger.name,
        level=logging.INFO,
        fn="",
        lno=0,
        msg=message,
        args=(),
        exc_info=None,
    )
    record.is_json = is_json  # type: ignore[attr-defined]
    _logger.handle(record)


def log_event(kind: str, session_id: str, **fields: Any) -> None:
    """Emit a human line to the console and, when enabled, JSON + human lines to files."""

    _ensure_handlers()

    payload: dict[str, Any] = {
        "ts": time.time(),
        "trace": str(uuid.uuid4()),
        "kind": kind,
        "session_id": session_id,
    }
    payload.update(fields)

    _emit(_format_human(payload), is_json=False)
    if settings.ENABLE_FILE_LOGS:
        _emit(json.dumps(payload, ensure_ascii=False, default=str), is_json=True)


__all__ = ["log_event"]
