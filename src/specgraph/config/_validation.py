# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false
"""Configuration validation using Pydantic schemas."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from specgraph.exceptions import ConfigValidationError

from ._models import LoggingConfig, SpecsConfiguration, ValidationConfiguration

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


@dataclass(frozen=True, slots=True)
class ConfigIssue:
    """Represents a configuration validation issue.

    Attributes:
        key: Dotted path to the configuration key (e.g., "logging.level").
        message: Human-readable description of the issue.
        expected: Description of expected value or type, if available.
        actual: The actual value that caused the issue.
        severity: Whether this is an error or warning.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    severity: Literal["error", "warning"]


class ConfigSchema(BaseModel):
    """Pydantic schema for the root configuration; unknown keys are ignored."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    specs: SpecsConfiguration = SpecsConfiguration()
    validation: ValidationConfiguration = ValidationConfiguration()


def _pydantic_error_to_issue(error: ErrorDetails) -> ConfigIssue:
    loc = error.get("loc", ())
    key = ".".join(str(part) for part in loc)

    ctx = error.get("ctx")
    expected: str | None = None
    if ctx is not None:
        if "expected" in ctx:
            expected = str(ctx["expected"])
        elif "gt" in ctx:
            expected = f"greater than {ctx['gt']}"

    return ConfigIssue(
        key=key,
        message=str(error.get("msg", "Validation error")),
        expected=expected,
        actual=error.get("input"),
        severity="error",
    )


def validate_config(config: dict[str, Any]) -> list[ConfigIssue]:
    """Validate a merged configuration dictionary.

    Returns:
        List of issues. An empty list means the config is valid.
    """
    try:
        _ = ConfigSchema.model_validate(config)
    except ValidationError as e:
        return [_pydantic_error_to_issue(err) for err in e.errors()]
    else:
        return []


def raise_if_validation_errors(
    issues: list[ConfigIssue],
    source: str | None = None,
) -> None:
    """Raise ConfigValidationError for the first error-severity issue.

    Raises:
        ConfigValidationError: If any issues have severity="error".
    """
    errors = [i for i in issues if i.severity == "error"]
    if errors:
        issue = errors[0]
        msg = f"Invalid configuration value for '{issue.key}': {issue.message}"
        raise ConfigValidationError(
            msg,
            key=issue.key,
            value=issue.actual,
            expected=issue.expected or issue.message,
            source=source,
        )
