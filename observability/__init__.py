"""Structured logging and timing spans for interview activity."""
from .logger import log_event
from .tracing import span

__all__ = ["log_event", "span"]
