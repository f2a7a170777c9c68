"""Structured logging with a per-view correlation id.

Library modules log through the standard :mod:`logging` module.
:func:`setup_logging` routes those records through structlog's
processor chain, so every line is rendered as JSON (or for a terminal)
and carries the ``view_id`` of the dashboard view being computed plus
any fields bound with :func:`view_context`.
"""

from __future__ import annotations

import logging
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, TextIO

import structlog

HANDLER_NAME = "journal_stats"

_view_id: ContextVar[str] = ContextVar("view_id", default="")


def get_view_id() -> str:
    """The id of the view being computed, or ``""`` outside one."""
    return _view_id.get()


def new_view_id() -> str:
    """Generate and set a new view id."""
    vid = uuid.uuid4().hex[:12]
    _view_id.set(vid)
    return vid


@contextmanager
def view_context(**fields: Any) -> Iterator[str]:
    """Scope a fresh view id, and ``fields``, to the enclosed block."""
    token = _view_id.set(uuid.uuid4().hex[:12])
    try:
        with structlog.contextvars.bound_contextvars(**fields):
            yield _view_id.get()
    finally:
        _view_id.reset(token)


def _add_view_id(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor: add view_id when a view is active."""
    vid = _view_id.get()
    if vid:
        event_dict.setdefault("view_id", vid)
    return event_dict


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    *,
    stream: TextIO | None = None,
) -> None:
    """Configure structured logging for the application.

    Safe to call repeatedly: the handler installed by a previous call is
    replaced, never duplicated.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        format: "json" for machine output, "console" for a terminal.
        stream: Output stream; stderr by default.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        _add_view_id,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if format == "json":
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for a module."""
    return structlog.get_logger(name)
