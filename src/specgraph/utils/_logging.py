"""Logging utilities for specgraph.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to a file or to stderr. Each logger is
self-contained and does not modify global structlog configuration.
"""

from __future__ import annotations

import logging
import sys
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, SPECGRAPH_DEBUG overrides to DEBUG level and
            SPECGRAPH_LOG_LEVEL overrides ``level``.

    Returns:
        The logging level as an integer, INFO for unknown names.
    """
    if respect_env and getenv("SPECGRAPH_DEBUG", None):
        return logging.DEBUG

    if respect_env:
        level = getenv("SPECGRAPH_LOG_LEVEL", level)

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _create_logger(
    log_file_path: str,
    *,
    log_level: int = logging.INFO,
    log_format: LogFormatType = "json",
) -> FilteringBoundLogger:
    """Create a standalone structlog logger.

    Args:
        log_file_path: Path to the log file (opened in append mode). An empty
            string writes to stderr instead.
        log_level: Minimum level that is emitted.
        log_format: Output format, either "json" or "text".

    Returns:
        A configured FilteringBoundLogger instance.
    """
    if log_file_path:
        log_path = Path(log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger_factory = structlog.WriteLoggerFactory(
            file=log_path.open("a", encoding="utf-8")
        )
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(log_level),
            context_class=dict,
        ),
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> FilteringBoundLogger:
    """Create a logger for CLI commands.

    The log level can be overridden by environment variables:
    - SPECGRAPH_DEBUG: If set, enables DEBUG level logging
    - SPECGRAPH_LOG_LEVEL: Replaces the configured level

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file; empty writes to stderr.
        command: Name of the CLI command, bound to all entries if given.

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    logger = _create_logger(
        log_file,
        log_level=_log_level_from_string(level, respect_env=True),
        log_format=log_format,
    )

    if command:
        return logger.bind(command=command)
    return logger

