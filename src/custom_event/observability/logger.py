"""Structured logging for custom events.

Uses structlog for structured logging with JSON or console output.
Every log entry includes a trace_id so that all lines emitted while
handling one fire can be correlated.

``StructlogSink`` is the default side-channel sink behind
``CustomEvent.log(message, severity)``.
"""

from __future__ import annotations

import logging
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Protocol, runtime_checkable

import structlog

# Context var for trace_id propagation
_trace_id: ContextVar[str] = ContextVar("trace_id", default="")


def get_trace_id() -> str:
    """Get current trace ID from context."""
    tid = _trace_id.get()
    if not tid:
        tid = str(uuid.uuid4())
        _trace_id.set(tid)
    return tid


@contextmanager
def trace_scope() -> Iterator[str]:
    """Run the block under a fresh trace ID, restoring the previous one after.

    Nested scopes (an event fired from inside a subscriber) get their own
    ID; the outer fire's ID is back in place once the inner one returns.
    """
    tid = str(uuid.uuid4())
    token = _trace_id.set(tid)
    try:
        yield tid
    finally:
        _trace_id.reset(token)


def _add_trace_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add trace_id to every log entry."""
    event_dict["trace_id"] = get_trace_id()
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str = "json",
) -> None:
    """Configure structured logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for production, "console" for development.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        _add_trace_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)


# ---------------------------------------------------------------------------
# Side-channel sink
# ---------------------------------------------------------------------------

@runtime_checkable
class LogSink(Protocol):
    """Receives ``(message, severity)`` pairs from non-silent events."""

    def __call__(self, message: str, severity: str) -> None: ...


_SEVERITY_METHODS = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
}


class StructlogSink:
    """Forward event log lines to a structlog logger.

    Unknown severities are logged at info level with the original
    severity attached as a field.
    """

    def __init__(self, name: str = "custom_event.event") -> None:
        self._logger = get_logger(name)

    def __call__(self, message: str, severity: str) -> None:
        method = _SEVERITY_METHODS.get(severity.lower())
        if method is None:
            self._logger.info(message, source="event", severity=severity)
            return
        getattr(self._logger, method)(message, source="event")

