"""Configuration section models.

Section models are frozen Pydantic models that ignore unknown keys, so a
config file written for a newer version still loads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

if TYPE_CHECKING:
    from pathlib import Path


class LogLevel(StrEnum):
    """Log level threshold values, from most to least verbose."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class ConfigSourceName(StrEnum):
    """Configuration source names, highest precedence first."""

    ENV = "env"
    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class ConfigSource:
    """Represents a configuration source.

    Attributes:
        name: The source type identifier.
        path: Path to the config file, or None for non-file sources.
        exists: Whether the source exists.
        values: Configuration values from this source.
    """

    name: ConfigSourceName
    path: Path | None
    exists: bool
    values: dict[str, Any]  # pyright: ignore[reportExplicitAny]


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty writes to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.JSON
    file: str = ""


class SpecsConfiguration(BaseModel):
    """Where spec documents live.

    Attributes:
        directory: Directory holding one subdirectory per spec, relative to
            the project root.
        primary_document: File name of each spec's primary document.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    directory: str = "specs"
    primary_document: str = "README.md"


class ValidationConfiguration(BaseModel):
    """Thresholds and switches for document validation.

    Attributes:
        max_lines: Line count above which a file draws a warning.
        warning_threshold: Estimated tokens at which a file draws a warning.
        error_threshold: Estimated tokens at which a file fails validation.
        check_cross_references: Whether to check links between sub-documents.
        check_dependency_alignment: Whether to compare body references with
            declared dependencies.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    max_lines: int = Field(default=400, gt=0)
    warning_threshold: int = Field(default=3500, gt=0)
    error_threshold: int = Field(default=5000, gt=0)
    check_cross_references: bool = True
    check_dependency_alignment: bool = True

    @model_validator(mode="after")
    def _check_threshold_order(self) -> Self:
        if self.warning_threshold >= self.error_threshold:
            msg = (
                f"warning_threshold ({self.warning_threshold}) must be lower than "
                f"error_threshold ({self.error_threshold})"
            )
            raise ValueError(msg)
        return self

    def with_overrides(self, **overrides: Any) -> ValidationConfiguration:  # pyright: ignore[reportExplicitAny,reportAny]
        """Return a copy with only the given, non-None fields replaced.

        Fields that are not passed keep their current values, so setting one
        threshold never resets the other.

        Raises:
            pydantic.ValidationError: If the combined values are invalid.
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        return ValidationConfiguration.model_validate({**self.model_dump(), **changes})
