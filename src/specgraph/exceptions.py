"""specgraph exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class SpecGraphError(Exception):
    """Base exception for specgraph errors."""


# =============================================================================
# Parse Exceptions
# =============================================================================


class ParseError(SpecGraphError, ValueError):
    """Raised when a structured header block cannot be parsed.

    Attributes:
        line: One-based line number within the parsed block, if known.
        line_content: The raw text of the offending line, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int | None = None,
        line_content: str | None = None,
    ) -> None:
        """Initialize with error message and line context.

        Args:
            message: Human-readable error message.
            line: One-based line number within the parsed block.
            line_content: The raw text of the offending line.
        """
        super().__init__(message)
        self.line: int | None = line
        self.line_content: str | None = line_content


class IndentationParseError(ParseError):
    """Raised when a line is indented inconsistently with its siblings."""


class FrontmatterError(SpecGraphError):
    """Raised when frontmatter cannot be rendered or written back.

    Attributes:
        path: Path to the document, if known.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and document context."""
        super().__init__(message)
        self.path: Path | None = path
        self.cause: Exception | None = cause


# =============================================================================
# Spec Exceptions
# =============================================================================


class SpecError(SpecGraphError):
    """Base exception for spec corpus errors."""


class SpecIOError(SpecError):
    """Raised when a spec file or directory cannot be read or written.

    Attributes:
        path: Path to the file or directory that caused the error.
        operation: The operation that failed (e.g. "read", "write", "list").
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        operation: str,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and I/O context.

        Args:
            message: Human-readable error message.
            path: Path to the file or directory that caused the error.
            operation: The operation that failed.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.path: Path = path
        self.operation: str = operation
        self.cause: Exception | None = cause


class SpecNotFoundError(SpecError, KeyError):
    """Raised when a spec identifier does not resolve to a known spec.

    Attributes:
        spec_id: The identifier that was not found.
    """

    def __init__(self, message: str, *, spec_id: str) -> None:
        """Initialize with error message and spec identifier."""
        super().__init__(message)
        self.spec_id: str = spec_id

    def __str__(self) -> str:
        """Return the message without KeyError's repr quoting."""
        return str(self.args[0])


class DependencyError(SpecError, ValueError):
    """Base exception for invalid dependency declarations."""


class SelfDependencyError(DependencyError):
    """Raised when a spec would depend on itself.

    Attributes:
        spec_id: The spec that referenced itself.
    """

    def __init__(self, message: str, *, spec_id: str) -> None:
        """Initialize with error message and spec identifier."""
        super().__init__(message)
        self.spec_id: str = spec_id


class CircularDependencyError(DependencyError):
    """Raised when a dependency cycle prevents an operation.

    Attributes:
        cycle: Spec identifiers forming the cycle, with the first repeated
            at the end.
    """

    def __init__(self, message: str, *, cycle: list[str]) -> None:
        """Initialize with error message and the offending cycle."""
        super().__init__(message)
        self.cycle: list[str] = cycle


# =============================================================================
# History Exceptions
# =============================================================================


class HistoryError(SpecGraphError):
    """Raised when version-control history cannot be read.

    Attributes:
        path: Path whose history was requested.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize with error message and history context."""
        super().__init__(message)
        self.path: Path | None = path
        self.cause: Exception | None = cause


# =============================================================================
# Config Exceptions
# =============================================================================


class ConfigError(SpecGraphError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
