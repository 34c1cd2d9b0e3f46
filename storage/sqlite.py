"""SQLite helpers for the persistence layer."""
from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Type

from errors import InterviewError, StoreReadError, StoreUnavailable

logger = logging.getLogger(__name__)


@contextmanager
def get_conn(db_path: str, *, read_only: bool = False) -> Iterator[sqlite3.Connection]:
    """Yield a SQLite connection, ensuring the data directory exists.

    The transaction is committed when the block exits cleanly. Any
    ``sqlite3.Error`` raised while connecting or inside the block surfaces as
    :class:`StoreUnavailable` for writes and :class:`StoreReadError` for
    lookups (``read_only=True``), which callers may retry.
    """

    failure: Type[InterviewError] = StoreReadError if read_only else StoreUnavailable
    directory = os.path.dirname(db_path) or "."
    try:
        os.makedirs(directory, exist_ok=True)
        conn = sqlite3.connect(db_path, timeout=5.0)
    except (OSError, sqlite3.Error) as exc:
        logger.error("SQLite connect failed path=%s: %s", db_path, exc)
        raise failure("Event store unavailable") from exc
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except sqlite3.Error as exc:
        conn.rollback()
        logger.error("SQLite operation failed path=%s read_only=%s: %s", db_path, read_only, exc)
        raise failure("Event store operation failed") from exc
    finally:
        conn.close()
