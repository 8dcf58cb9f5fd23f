"""Shared data model for spec documents, relationships, and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any, Final


class SpecStatus(StrEnum):
    """Lifecycle status of a spec document."""

    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"
    ARCHIVED = "archived"


class SpecPriority(StrEnum):
    """Priority of a spec document."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class IssueSeverity(StrEnum):
    """Severity of a validation issue.

    Only errors affect whether a result passes.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class InferenceSource(StrEnum):
    """Where an inferred metadata value came from."""

    INLINE = "inline"
    LINE_START = "line-start"
    TASK_LIST = "task-list"
    ADR_SECTION = "adr-section"
    BARE_DATE = "bare-date"
    HISTORY = "history"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class StatusTransition:
    """A historical change of a document's status.

    Attributes:
        status: The status the document moved into.
        at: Timezone-aware moment of the change.
    """

    status: SpecStatus
    at: datetime

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status.value, "at": self.at.isoformat()}


@dataclass(frozen=True, slots=True)
class DocumentMetadata:
    """Normalized metadata for one spec document.

    Every field is optional because the record may come from a partial or
    invalid header. ``status`` is either None (absent) or one of the four
    canonical values; raw strings never survive normalization.

    Attributes:
        status: Normalized lifecycle status.
        created: Creation date.
        priority: Normalized priority.
        tags: Tags in first-seen order without duplicates.
        depends_on: Identifiers this document depends on.
        related: Identifiers of loosely related documents.
        assignee: Person currently responsible.
        reviewer: Person reviewing the work.
        issue: Tracker issue reference.
        pr: Pull request reference.
        epic: Epic reference.
        parent: Parent spec identifier.
        due: Due date.
        updated: Last update date.
        completed: Completion date.
        transitions: Recorded status transitions, oldest first.
        custom: Unrecognized header keys, in original order.
    """

    status: SpecStatus | None = None
    created: date | None = None
    priority: SpecPriority | None = None
    tags: tuple[str, ...] = ()
    depends_on: tuple[str, ...] = ()
    related: tuple[str, ...] = ()
    assignee: str | None = None
    reviewer: str | None = None
    issue: str | None = None
    pr: str | None = None
    epic: str | None = None
    parent: str | None = None
    due: date | None = None
    updated: date | None = None
    completed: date | None = None
    transitions: tuple[StatusTransition, ...] = ()
    custom: dict[str, Any] = field(default_factory=dict)  # pyright: ignore[reportExplicitAny]

    @property
    def is_valid(self) -> bool:
        """Whether the record has the minimum required fields."""
        return self.status is not None and self.created is not None

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        """Return a JSON-serializable dict, omitting empty fields."""
        result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
        if self.status is not None:
            result["status"] = self.status.value
        if self.created is not None:
            result["created"] = self.created.isoformat()
        if self.priority is not None:
            result["priority"] = self.priority.value
        if self.tags:
            result["tags"] = list(self.tags)
        if self.depends_on:
            result["depends_on"] = list(self.depends_on)
        if self.related:
            result["related"] = list(self.related)
        for name in _OPTIONAL_TEXT_FIELDS:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        for name in _OPTIONAL_DATE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                result[name] = value.isoformat()
        if self.transitions:
            result["transitions"] = [t.to_dict() for t in self.transitions]
        result.update(self.custom)
        return result


_OPTIONAL_TEXT_FIELDS: Final = ("assignee", "reviewer", "issue", "pr", "epic", "parent")
_OPTIONAL_DATE_FIELDS: Final = ("due", "updated", "completed")


@dataclass(slots=True)
class SpecRelationships:
    """Forward and inverse dependency lists for one document."""

    depends_on: list[str] = field(default_factory=list)
    required_by: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {"depends_on": list(self.depends_on), "required_by": list(self.required_by)}


type RelationshipMap = dict[str, SpecRelationships]


@dataclass(frozen=True, slots=True)
class SubDocument:
    """A sibling file that belongs to the same spec as a primary document.

    Attributes:
        name: File name, e.g. ``DESIGN.md``.
        content: Full text of the file.
        line_count: Number of lines in the file.
        token_count: Estimated token count.
        references: Same-directory file names linked from the body, in order.
    """

    name: str
    content: str
    line_count: int
    token_count: int
    references: tuple[str, ...] = ()

    @property
    def stem(self) -> str:
        """File name without its final extension."""
        head, dot, _ = self.name.rpartition(".")
        return head if dot else self.name

    @property
    def is_uppercase(self) -> bool:
        """Whether the name (ignoring extension) follows the uppercase convention."""
        return self.stem == self.stem.upper()

    @property
    def uppercase_name(self) -> str:
        """The conventional uppercase spelling of this file's name."""
        head, dot, extension = self.name.rpartition(".")
        if not dot:
            return self.name.upper()
        return f"{head.upper()}.{extension}"


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """A single problem found while validating a document.

    Attributes:
        severity: Whether this is an error, warning, or informational note.
        message: Human-readable description.
        category: Check that produced the issue (e.g. ``naming``).
        suggestion: Optional hint for fixing the issue.
        file: File the issue refers to, if any.
        line: One-based line number, if known.
    """

    severity: IssueSeverity
    message: str
    category: str
    suggestion: str | None = None
    file: str | None = None
    line: int | None = None

    def format(self) -> str:
        """Format the issue for display."""
        location = ""
        if self.file:
            location = f" [{self.file}:{self.line}]" if self.line else f" [{self.file}]"
        text = f"{self.severity.value.upper()}{location}: {self.message}"
        if self.suggestion:
            text += f" (suggestion: {self.suggestion})"
        return text

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        data: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
            "severity": self.severity.value,
            "category": self.category,
            "message": self.message,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        if self.file is not None:
            data["file"] = self.file
        if self.line is not None:
            data["line"] = self.line
        return data


@dataclass(slots=True)
class ValidationResult:
    """Accumulated issues for one validation run.

    ``passed`` is true exactly when there are no errors; warnings and infos
    never affect it.
    """

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    infos: list[ValidationIssue] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.errors

    @property
    def issues(self) -> list[ValidationIssue]:
        """All issues, errors first."""
        return [*self.errors, *self.warnings, *self.infos]

    def add(self, issue: ValidationIssue) -> None:
        match issue.severity:
            case IssueSeverity.ERROR:
                self.errors.append(issue)
            case IssueSeverity.WARNING:
                self.warnings.append(issue)
            case IssueSeverity.INFO:
                self.infos.append(issue)

    def add_error(
        self,
        category: str,
        message: str,
        *,
        suggestion: str | None = None,
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        self.add(
            ValidationIssue(IssueSeverity.ERROR, message, category, suggestion, file, line)
        )

    def add_warning(
        self,
        category: str,
        message: str,
        *,
        suggestion: str | None = None,
        file: str | None = None,
        line: int | None = None,
    ) -> None:
        self.add(
            ValidationIssue(IssueSeverity.WARNING, message, category, suggestion, file, line)
        )

    def add_info(
        self,
        category: str,
        message: str,
        *,
        suggestion: str | None = None,
        file: str | None = None,
    ) -> None:
        self.add(ValidationIssue(IssueSeverity.INFO, message, category, suggestion, file))

    def merge(self, other: ValidationResult) -> None:
        """Append every issue from ``other`` to this result."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.infos.extend(other.infos)

    def to_dict(self) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
        return {
            "passed": self.passed,
            "errors": [i.to_dict() for i in self.errors],
            "warnings": [i.to_dict() for i in self.warnings],
            "infos": [i.to_dict() for i in self.infos],
        }


@dataclass(frozen=True, slots=True)
class InferredMetadata:
    """Best-effort status and creation date recovered for a document.

    Attributes:
        status: Inferred status; always one of the canonical values.
        created: Inferred creation date.
        status_source: Which rule produced ``status``.
        created_source: Which rule produced ``created``.
    """

    status: SpecStatus
    created: date
    status_source: InferenceSource
    created_source: InferenceSource

    def to_dict(self) -> dict[str, str]:
        return {
            "status": self.status.value,
            "created": self.created.isoformat(),
            "status_source": self.status_source.value,
            "created_source": self.created_source.value,
        }
