"""
Structured logging for liteorm.

Nothing in ``liteorm.core.orm.statements`` logs; building text is pure. The
layers that talk to SQLite log events with the table, statement kind and row
count as fields, so a JSON line per statement can be grepped or shipped
as-is::

    {"event": "statement_executed", "table": "Advisors", "kind": "INSERT",
     "rows": 1, "level": "debug", "logger_name": "liteorm.ops.database",
     "service.name": "liteorm", "timestamp": "..."}

The CLI calls :func:`configure_logging` from settings; library users call it
themselves or keep structlog's defaults.

Tags:
    logging, structlog, liteorm
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger


class _ServiceName:
    """Processor stamping ``service.name`` onto every event."""

    def __init__(self, service: str) -> None:
        self.service = service

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service.name", self.service)
        return event_dict


def _stderr_logger(*args: Any) -> structlog.PrintLogger:
    # Resolved per logger so redirected stderr (pytest, CliRunner) is honoured.
    return structlog.PrintLogger(file=sys.stderr)


def _processor_chain(service: str, json_format: bool, add_timestamp: bool) -> list[Processor]:
    chain: list[Processor] = []
    if add_timestamp:
        chain.append(structlog.processors.TimeStamper(fmt="iso"))
    chain += [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        _ServiceName(service),
    ]
    if json_format:
        chain += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        chain.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    return chain


def configure_logging(
    level: str = "INFO",
    json_format: bool | None = None,
    service: str = "liteorm",
    add_timestamp: bool = True,
) -> None:
    """Route liteorm's events to stderr at ``level`` and above.

    ``json_format=None`` picks JSON when stderr is not a terminal.
    """
    if json_format is None:
        json_format = not sys.stderr.isatty()
    threshold = logging.getLevelName(level.upper())
    structlog.configure(
        processors=_processor_chain(service, json_format, add_timestamp),
        wrapper_class=structlog.make_filtering_bound_logger(threshold),
        context_class=dict,
        logger_factory=_stderr_logger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Logger with ``name`` (usually the module's ``__name__``) bound as ``logger_name``."""
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name, logger_name=name)


class LogContext:
    """Bind fields for the duration of a ``with`` block.

    Fields that were bound before entry get their old values back on exit.
    """

    def __init__(self, **fields: Any) -> None:
        self.fields = fields
        self._scope = None

    def __enter__(self) -> LogContext:
        self._scope = structlog.contextvars.bound_contextvars(**self.fields)
        self._scope.__enter__()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._scope.__exit__(*exc_info)
        self._scope = None


__all__ = [
    "LogContext",
    "configure_logging",
    "get_logger",
]
