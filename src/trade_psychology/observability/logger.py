"""Structured logging for CLI runs.

structlog renders every entry as JSON (or coloured console output) on
stderr, so the JSON report printed on stdout stays parseable.  Each
entry carries the ``trace_id`` of the current run; :func:`start_run`
resets the per-run context and binds the command and request id.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextvars import ContextVar
from typing import Any

import structlog

_trace_id: ContextVar[str] = ContextVar("trace_id", default="")

_RENDERERS = {
    "json": structlog.processors.JSONRenderer,
    "console": structlog.dev.ConsoleRenderer,
}


def get_trace_id() -> str:
    """Current trace ID, generated on first use."""
    tid = _trace_id.get()
    if not tid:
        tid = set_trace_id()
    return tid


def set_trace_id(trace_id: str | None = None) -> str:
    """Set the trace ID for this context; a fresh uuid4 when none is given."""
    tid = trace_id or str(uuid.uuid4())
    _trace_id.set(tid)
    return tid


def _add_trace_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    event_dict["trace_id"] = get_trace_id()
    return event_dict


def setup_logging(level: str = "INFO", format: str = "json") -> None:
    """Configure structlog over stdlib logging.

    Args:
        level: DEBUG, INFO, WARNING or ERROR. Unknown names fall back to INFO.
        format: "json" or "console". Unknown names fall back to console.
    """
    renderer = _RENDERERS.get(format, structlog.dev.ConsoleRenderer)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            _add_trace_id,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.UnicodeDecoder(),
            renderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def start_run(command: str, request_id: str | None = None) -> str:
    """Reset log context for one CLI run and return its trace ID.

    The trace ID doubles as the request id handed to the analyser, so
    validation log entries and the run's own entries share one id.
    """
    structlog.contextvars.clear_contextvars()
    tid = set_trace_id(request_id)
    structlog.contextvars.bind_contextvars(command=command, request_id=tid)
    return tid
