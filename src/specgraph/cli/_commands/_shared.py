# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Output formatters (JSON, table)
- Console utilities for error handling
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

if TYPE_CHECKING:
    from rich.console import Console

# Type alias for formattable data - uses Any to match library signatures
FormattableData = dict[str, Any] | list[Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_code_for_exception",
    "exit_with_error",
    "format_json",
    "format_table",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Standard exit codes for specgraph CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Data to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    import orjson

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format data as a Markdown table.

    Args:
        headers: Column headers for the table.
        rows: List of rows, where each row is a list of cell values.

    Returns:
        Markdown table string representation.
    """
    from pytablewriter import MarkdownTableWriter

    writer = MarkdownTableWriter(
        headers=headers,
        value_matrix=rows,
        margin=1,
    )
    return writer.dumps()


def get_error_console() -> Console:
    """Get a Rich console configured for error output to stderr."""
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)


def exit_code_for_exception(exc: BaseException) -> ExitCode:
    """Map an exception to the exit code reported for it."""
    from specgraph.exceptions import (
        ConfigError,
        DependencyError,
        FrontmatterError,
        SpecIOError,
        SpecNotFoundError,
    )

    if isinstance(exc, SpecNotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(exc, ConfigError):
        return ExitCode.LOAD_ERROR
    if isinstance(exc, SpecIOError | FrontmatterError | OSError):
        return ExitCode.IO_ERROR
    if isinstance(exc, DependencyError | ValueError):
        return ExitCode.VALIDATION_ERROR
    return ExitCode.INTERNAL_ERROR
