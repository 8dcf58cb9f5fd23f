"""Frontmatter extraction and normalization for spec documents."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Final

import pendulum

from specgraph.exceptions import ParseError
from specgraph.models import DocumentMetadata, SpecPriority, SpecStatus, StatusTransition

from ._lean_yaml import StructuredMapping, StructuredValue, parse_structured_text

if TYPE_CHECKING:
    from datetime import datetime

HEADER_DELIMITER: Final = "---"

# Synonyms seen in real corpora, mapped onto the four canonical statuses
STATUS_SYNONYMS: Final[dict[str, SpecStatus]] = {
    "planned": SpecStatus.PLANNED,
    "proposed": SpecStatus.PLANNED,
    "pending": SpecStatus.PLANNED,
    "draft": SpecStatus.PLANNED,
    "todo": SpecStatus.PLANNED,
    "in-progress": SpecStatus.IN_PROGRESS,
    "inprogress": SpecStatus.IN_PROGRESS,
    "in_progress": SpecStatus.IN_PROGRESS,
    "wip": SpecStatus.IN_PROGRESS,
    "working": SpecStatus.IN_PROGRESS,
    "active": SpecStatus.IN_PROGRESS,
    "complete": SpecStatus.COMPLETE,
    "completed": SpecStatus.COMPLETE,
    "done": SpecStatus.COMPLETE,
    "finished": SpecStatus.COMPLETE,
    "implemented": SpecStatus.COMPLETE,
    "accepted": SpecStatus.COMPLETE,
    "approved": SpecStatus.COMPLETE,
    "archived": SpecStatus.ARCHIVED,
    "deprecated": SpecStatus.ARCHIVED,
    "superseded": SpecStatus.ARCHIVED,
    "rejected": SpecStatus.ARCHIVED,
}

PRIORITY_ALIASES: Final[dict[str, SpecPriority]] = {
    "low": SpecPriority.LOW,
    "medium": SpecPriority.MEDIUM,
    "med": SpecPriority.MEDIUM,
    "high": SpecPriority.HIGH,
    "critical": SpecPriority.CRITICAL,
    "urgent": SpecPriority.CRITICAL,
}

# Ordered candidate keys per logical field: the first key present in the raw
# mapping wins and later keys are ignored, never merged.
CANDIDATE_KEYS: Final[dict[str, tuple[str, ...]]] = {
    "status": ("status",),
    "created": ("created", "created_at"),
    "priority": ("priority",),
    "tags": ("tags",),
    "depends_on": ("depends_on", "dependsOn"),
    "related": ("related", "relatedTo"),
    "assignee": ("assignee",),
    "reviewer": ("reviewer",),
    "issue": ("issue",),
    "pr": ("pr",),
    "epic": ("epic",),
    "parent": ("parent",),
    "due": ("due",),
    "updated": ("updated", "updated_at"),
    "completed": ("completed", "completed_at"),
    "transitions": ("transitions",),
}

_KNOWN_KEYS: Final = frozenset(key for keys in CANDIDATE_KEYS.values() for key in keys)
_ISO_DATE_PREFIX: Final = re.compile(r"^\d{4}-\d{2}-\d{2}")


@dataclass(frozen=True, slots=True)
class FrontmatterResult:
    """Outcome of extracting a document's header.

    Attributes:
        has_header: Whether a ``---`` delimited block opens the document.
        has_valid_header: Whether the block parsed and carries both a
            recognized status and a creation date.
        metadata: Normalized metadata; empty when there is no usable header.
        body: Document text after the header (the whole text if none).
        raw: The parsed header mapping before normalization.
        error: Parse failure message, if the header could not be parsed.
        error_line: Line of the parse failure within the header, if known.
        missing_fields: Required fields absent from a parsed header.
    """

    has_header: bool
    has_valid_header: bool
    metadata: DocumentMetadata
    body: str
    raw: StructuredMapping = field(default_factory=dict)
    error: str | None = None
    error_line: int | None = None
    missing_fields: tuple[str, ...] = ()


def split_frontmatter(text: str) -> tuple[str | None, str]:
    """Separate the header block from the body.

    Args:
        text: Full document text.

    Returns:
        ``(header, body)``. ``header`` is None when the document does not open
        with a ``---`` line followed later by a closing ``---`` line.
    """
    text = text.removeprefix("\ufeff")
    lines = text.splitlines(keepends=True)
    if not lines or lines[0].rstrip() != HEADER_DELIMITER:
        return None, text

    for index in range(1, len(lines)):
        if lines[index].rstrip() == HEADER_DELIMITER:
            header = "".join(lines[1:index])
            body = "".join(lines[index + 1 :])
            return header, body
    return None, text


def normalize_status(value: object) -> SpecStatus:
    """Map a raw status value onto a canonical status.

    Unrecognized values default to ``planned``.
    """
    key = str(value).strip().lower().replace(" ", "-")
    return STATUS_SYNONYMS.get(key, SpecStatus.PLANNED)


def normalize_priority(value: object) -> SpecPriority | None:
    """Map a raw priority onto a canonical priority, or None if unknown."""
    if value is None:
        return None
    return PRIORITY_ALIASES.get(str(value).strip().lower())


def normalize_tags(value: StructuredValue) -> tuple[str, ...]:
    """Normalize tags to an ordered, duplicate-free tuple.

    Accepts a list or a comma-separated string; anything else yields no tags.
    """
    if isinstance(value, str):
        candidates: list[object] = list(value.split(","))
    elif isinstance(value, list):
        candidates = list(value)
    else:
        return ()

    seen: dict[str, None] = {}
    for candidate in candidates:
        if candidate is None:
            continue
        tag = str(candidate).strip()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)


def coerce_date(value: object) -> date | None:
    """Convert an ISO date or datetime string to a date.

    Returns:
        The calendar date, or None if the value is not an ISO date.
    """
    if isinstance(value, date):
        return date(value.year, value.month, value.day)
    if not isinstance(value, str) or not _ISO_DATE_PREFIX.match(value.strip()):
        return None
    try:
        parsed = pendulum.parse(value.strip())
    except ValueError:
        return None
    if isinstance(parsed, date):
        return date(parsed.year, parsed.month, parsed.day)
    return None


def _coerce_datetime(value: object) -> datetime | None:
    # Absolute ISO timestamps only, never relative words like "now"
    if not isinstance(value, str) or not _ISO_DATE_PREFIX.match(value.strip()):
        return None
    try:
        parsed = pendulum.parse(value.strip())
    except ValueError:
        return None
    if isinstance(parsed, pendulum.DateTime):
        return parsed
    if isinstance(parsed, pendulum.Date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day)
    return None


def _coerce_text(value: StructuredValue) -> str | None:
    if value is None or isinstance(value, list | dict):
        return None
    text = str(value).strip()
    return text or None


def _normalize_transitions(value: StructuredValue) -> tuple[StatusTransition, ...]:
    if not isinstance(value, list):
        return ()
    transitions: list[StatusTransition] = []
    for entry in value:
        if not isinstance(entry, dict):
            continue
        status = entry.get("status")
        at = _coerce_datetime(entry.get("at"))
        if status is None or at is None:
            continue
        transitions.append(StatusTransition(normalize_status(status), at))
    return tuple(transitions)


def select_field(raw: StructuredMapping, name: str) -> tuple[str | None, StructuredValue]:
    """Pick the value of a logical field using its candidate keys.

    Args:
        raw: Parsed header mapping.
        name: Logical field name, a key of ``CANDIDATE_KEYS``.

    Returns:
        ``(key, value)`` for the first candidate key present, or
        ``(None, None)`` if none is.
    """
    for key in CANDIDATE_KEYS[name]:
        if key in raw:
            return key, raw[key]
    return None, None


def normalize_metadata(raw: StructuredMapping) -> DocumentMetadata:
    """Build a normalized metadata record from a parsed header mapping."""
    # Deferred import to avoid circular dependency
    from specgraph.spec._relationships import normalize_relationship_list  # noqa: PLC0415

    _, status = select_field(raw, "status")
    _, priority = select_field(raw, "priority")
    _, created = select_field(raw, "created")

    custom: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
        key: value for key, value in raw.items() if key not in _KNOWN_KEYS
    }

    return DocumentMetadata(
        status=normalize_status(status) if status is not None else None,
        created=coerce_date(created),
        priority=normalize_priority(priority),
        tags=normalize_tags(select_field(raw, "tags")[1]),
        depends_on=tuple(normalize_relationship_list(select_field(raw, "depends_on")[1])),
        related=tuple(normalize_relationship_list(select_field(raw, "related")[1])),
        assignee=_coerce_text(select_field(raw, "assignee")[1]),
        reviewer=_coerce_text(select_field(raw, "reviewer")[1]),
        issue=_coerce_text(select_field(raw, "issue")[1]),
        pr=_coerce_text(select_field(raw, "pr")[1]),
        epic=_coerce_text(select_field(raw, "epic")[1]),
        parent=_coerce_text(select_field(raw, "parent")[1]),
        due=coerce_date(select_field(raw, "due")[1]),
        updated=coerce_date(select_field(raw, "updated")[1]),
        completed=coerce_date(select_field(raw, "completed")[1]),
        transitions=_normalize_transitions(select_field(raw, "transitions")[1]),
        custom=custom,
    )


def extract_frontmatter(text: str) -> FrontmatterResult:
    """Locate, parse, and normalize a document's header.

    Malformed headers are reported through the result, never raised: a parse
    failure yields ``has_header=True, has_valid_header=False`` with the parse
    message in ``error``.

    Args:
        text: Full document text.

    Returns:
        The extraction result. The function is pure, so equal inputs always
        produce equal results.
    """
    header, body = split_frontmatter(text)
    if header is None:
        return FrontmatterResult(
            has_header=False,
            has_valid_header=False,
            metadata=DocumentMetadata(),
            body=body,
        )

    try:
        raw = parse_structured_text(header)
    except ParseError as e:
        return FrontmatterResult(
            has_header=True,
            has_valid_header=False,
            metadata=DocumentMetadata(),
            body=body,
            error=str(e),
            error_line=e.line,
        )

    metadata = normalize_metadata(raw)
    missing = tuple(
        name
        for name, value in (("status", metadata.status), ("created", metadata.created))
        if value is None
    )
    return FrontmatterResult(
        has_header=True,
        has_valid_header=not missing,
        metadata=metadata,
        body=body,
        raw=raw,
        missing_fields=missing,
    )
