# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003  # Path needed at runtime for dataclass field
"""CLI context for global state management.

The CLIContext is set once at CLI startup and made available to all
commands via contextvars.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from specgraph.config import Config, find_project_root

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    JSON = "json"
    TABLE = "table"


_current_cli_context: contextvars.ContextVar[CLIContext | None] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        verbose: Enable verbose output with additional details.
        quiet: Suppress non-essential output.
        project_root: Project root given on the command line.
        config_error: Error message if config loading failed.
        logger: Structured logger for CLI commands.
    """

    config: Config = field(repr=False)
    verbose: bool = False
    quiet: bool = False
    project_root: Path | None = None
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> CLIContext:
        """Get current active CLIContext, or create a default if not set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: CLIContext) -> None:
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context, mostly for tests."""
        _current_cli_context.set(None)

    def resolve_project_root(self) -> Path:
        """The explicit project root, else the discovered one, else the cwd."""
        if self.project_root is not None:
            return self.project_root
        return find_project_root() or Path.cwd()

    def resolve_specs_dir(self) -> Path:
        """Directory holding the spec corpus."""
        return self.resolve_project_root() / self.config.specs.directory
