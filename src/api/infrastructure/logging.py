"""Structlog configuration for the gateway.

Every log line goes to stderr. Under the stdio transport stdout is the
JSON-RPC channel, so nothing else may ever be written there.
"""

import os
import sys
from typing import TextIO

import structlog

_TRUTHY = ("1", "true", "yes")


def use_colors(stream: TextIO) -> bool:
    """Colored output when FORCE_COLOR is set or the stream is a terminal.

    FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker).
    """
    if os.environ.get("FORCE_COLOR", "").lower() in _TRUTHY:
        return True
    return stream.isatty()


def configure_logging(stream: TextIO | None = None) -> None:
    """Configure structlog once at process start.

    Args:
        stream: Destination for log lines; stderr when omitted.
    """
    stream = stream or sys.stderr

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if use_colors(stream):
        renderers: list[structlog.types.Processor] = [
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    else:
        renderers = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=[*shared_processors, *renderers],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=True,
    )
