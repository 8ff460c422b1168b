"""Structured logging configuration for the admissions engine.

Every event carries ``service="admission_engine"``. While a query runs,
``query_context`` binds the query name and the size of the snapshot it
reads, so every line logged inside the query can be attributed to it.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Generator, Mapping

import structlog
from structlog.types import EventDict, Processor

SERVICE_NAME = "admission_engine"


def add_engine_context(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag every log entry with the service name."""
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
) -> None:
    """
    Set up structured logging with structlog.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format ('json' or 'console')
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_engine_context,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]

    renderer: Processor
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


@contextmanager
def query_context(query: str, snapshot_counts: Mapping[str, int]) -> Generator[None, None, None]:
    """Bind the running query and its snapshot sizes to all log entries.

    Args:
        query: Name of the analytical query
        snapshot_counts: Dataset name -> record count of the snapshot read
    """
    snapshot = {f"snapshot_{dataset}": size for dataset, size in snapshot_counts.items()}
    with structlog.contextvars.bound_contextvars(query=query, **snapshot):
        yield


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.BoundLogger:
    """
    Get a bound logger instance.

    Args:
        name: Logger name (module name typically)
        **initial_context: Initial context to bind to the logger

    Returns:
        A bound structlog logger
    """
    logger = structlog.get_logger(name)
    if initial_context:
        logger = logger.bind(**initial_context)
    return logger
