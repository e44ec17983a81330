"""Logging configuration for Slugline.

structlog events are routed through the standard library so that the
same handlers (stderr, optional rotating file) and the same renderer see
both structlog events and plain ``logging`` records.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars
from structlog.processors import (
    CallsiteParameter,
    CallsiteParameterAdder,
    TimeStamper,
    add_log_level,
    dict_tracebacks,
    format_exc_info,
)
from structlog.stdlib import (
    ProcessorFormatter,
    add_logger_name,
    filter_by_level,
    render_to_log_kwargs,
)

from slugline.config.settings import SluglineSettings

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUPS = 3

# Applied to records that come from plain stdlib loggers
_FOREIGN_PRE_CHAIN: list[Any] = [
    TimeStamper(fmt="iso"),
    add_log_level,
    add_logger_name,
]


def _console_renderer() -> structlog.dev.ConsoleRenderer:
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.rich_traceback,
    )


def _build_formatter(log_format: str) -> ProcessorFormatter:
    """Create the stdlib formatter that renders records for ``log_format``."""
    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    elif log_format == "structured":
        renderer = structlog.processors.KeyValueRenderer(
            key_order=["timestamp", "level", "logger", "event"],
            drop_missing=True,
        )
    else:
        renderer = _console_renderer()
    return ProcessorFormatter(processor=renderer, foreign_pre_chain=_FOREIGN_PRE_CHAIN)


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    valid = sorted(n for n in logging.getLevelNamesMapping() if n != "NOTSET")
    raise ValueError(
        f"Invalid log level '{name}'. Valid levels are: {', '.join(valid)}"
    )


def _build_handlers(
    settings: SluglineSettings, formatter: logging.Formatter, level: int
) -> list[logging.Handler]:
    # stdout carries command output (JSON, CSV, formatted Fountain)
    stderr_handler = logging.StreamHandler(sys.stderr)
    handlers: list[logging.Handler] = [stderr_handler]

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                filename=str(log_path),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
    return handlers


def _event_processors(settings: SluglineSettings) -> list[Any]:
    processors: list[Any] = [
        merge_contextvars,
        filter_by_level,
        TimeStamper(fmt="iso"),
        add_log_level,
        dict_tracebacks,
    ]
    if settings.debug:
        processors.append(
            CallsiteParameterAdder(
                parameters=[
                    CallsiteParameter.FILENAME,
                    CallsiteParameter.LINENO,
                    CallsiteParameter.FUNC_NAME,
                ]
            )
        )
    processors.append(format_exc_info)

    in_pytest = "pytest" in sys.modules or "PYTEST_CURRENT_TEST" in os.environ
    if settings.log_format == "console" and not in_pytest:
        processors.append(_console_renderer())
    else:
        # Hand the event to the stdlib formatter; caplog relies on this
        processors.extend([render_to_log_kwargs, ProcessorFormatter.wrap_for_formatter])
    return processors


def configure_logging(settings: SluglineSettings) -> None:
    """Configure stdlib logging and structlog from settings.

    Replaces any handlers already on the root logger. Log records go to
    stderr, and also to a rotating file when ``settings.log_file`` is set.

    Args:
        settings: Settings carrying ``log_level``, ``log_format``,
            ``log_file`` and ``debug``.

    Raises:
        ValueError: If the log level is not known to the logging module.
    """
    level = _resolve_level(settings.log_level)
    formatter = _build_formatter(settings.log_format)
    handlers = _build_handlers(settings, formatter, level)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=_event_processors(settings),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Return a structlog logger named ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)
