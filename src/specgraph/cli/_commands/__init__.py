"""specgraph CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._backfill import backfill
from ._context import CLIContext, OutputFormat
from ._deps import deps, graph
from ._shared import (
    ExitCode,
    FormattableData,
    exit_code_for_exception,
    exit_with_error,
    format_json,
    format_table,
    get_error_console,
)
from ._validate import validate, validate_document

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "backfill",
    "deps",
    "exit_code_for_exception",
    "exit_with_error",
    "format_json",
    "format_table",
    "get_error_console",
    "graph",
    "register_commands",
    "validate",
    "validate_document",
]


def register_commands(app: "App") -> None:
    app.command(validate, name="validate")
    app.command(deps, name="deps")
    app.command(graph, name="graph")
    app.command(backfill, name="backfill")
