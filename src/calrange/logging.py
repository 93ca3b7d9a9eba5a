"""Logging configuration for calrange."""

import logging
from datetime import date
from typing import Any

import structlog


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger."""
    return structlog.get_logger(name)


def render_dates(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Render date values (and lists of them) as ISO strings.

    Picker events carry plain dates; this keeps console and JSON output
    readable without every call site formatting them.
    """
    for key, value in event_dict.items():
        if isinstance(value, date):
            event_dict[key] = value.isoformat()
        elif isinstance(value, (list, tuple)) and value and all(
            isinstance(v, date) for v in value
        ):
            event_dict[key] = [v.isoformat() for v in value]
    return event_dict


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
) -> None:
    """Configure calrange logging.

    Args:
        level: Log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_output: True for JSON output (production), False for console
    """
    log_level = getattr(logging, level.upper())
    logging.basicConfig(format="%(message)s", level=log_level)

    shared_processors = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        render_dates,
        structlog.processors.StackInfoRenderer(),
    ]

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
