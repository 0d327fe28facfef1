"""structlog setup for compgraph runs.

JSON lines go to stderr so stdout stays free for the CLI summary. The
``console`` format is meant for interactive use.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager

import structlog

LOG_FORMATS = frozenset({"json", "console"})


def setup_logging(level: str = "info", fmt: str = "json") -> None:
    """Configure structlog once per process."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer: structlog.types.Processor
    if fmt == "console":
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            *([] if fmt == "console" else [structlog.processors.format_exc_info]),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        # Loggers are module-level proxies; caching would pin them to the
        # configuration active at first use.
        cache_logger_on_first_use=False,
    )


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]


@contextmanager
def run_context(**values: str) -> Iterator[None]:
    """Bind *values* to every log line emitted inside the block, including child tasks."""
    with structlog.contextvars.bound_contextvars(**values):
        yield
