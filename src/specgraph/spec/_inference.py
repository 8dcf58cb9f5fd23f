"""Best-effort recovery of status and creation date for legacy documents.

Each category is an ordered chain of ``(source, pattern, extractor)`` rules.
The first rule whose pattern matches and whose extractor accepts the match
wins; later rules are never consulted. When no content rule applies, version
history is asked, and when that has nothing either a fixed default is used,
so inference always produces a value.
"""

from __future__ import annotations

import re
from datetime import date
from typing import TYPE_CHECKING, Final

import pendulum

from specgraph.exceptions import HistoryError
from specgraph.frontmatter import coerce_date, normalize_status
from specgraph.models import InferenceSource, InferredMetadata, SpecStatus

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from specgraph.history import VersionHistoryProtocol

type _Rule[T] = tuple[InferenceSource, re.Pattern[str], Callable[[re.Match[str]], T | None]]

# Vocabulary used by architecture decision records under "## Status"
ADR_STATUS_VOCABULARY: Final[dict[str, SpecStatus]] = {
    "accepted": SpecStatus.COMPLETE,
    "approved": SpecStatus.COMPLETE,
    "done": SpecStatus.COMPLETE,
    "proposed": SpecStatus.PLANNED,
    "pending": SpecStatus.PLANNED,
    "draft": SpecStatus.PLANNED,
    "superseded": SpecStatus.ARCHIVED,
    "deprecated": SpecStatus.ARCHIVED,
    "rejected": SpecStatus.ARCHIVED,
}

_LONG_DATE_FORMATS: Final = ("MMMM D, YYYY", "MMMM D YYYY", "MMM D, YYYY", "MMM D YYYY")


def _status_from_word(match: re.Match[str]) -> SpecStatus:
    return normalize_status(match.group(1))


def _status_complete(_match: re.Match[str]) -> SpecStatus:
    return SpecStatus.COMPLETE


def _status_from_adr(match: re.Match[str]) -> SpecStatus | None:
    return ADR_STATUS_VOCABULARY.get(match.group(1).lower())


def _date_from_iso(match: re.Match[str]) -> date | None:
    return coerce_date(match.group(1))


def parse_long_date(text: str) -> date | None:
    """Parse a date written like ``January 15, 2025``.

    Returns:
        The date, or None if the text is not a recognizable long-form date.
    """
    normalized = " ".join(text.split())
    for fmt in _LONG_DATE_FORMATS:
        try:
            parsed = pendulum.from_format(normalized, fmt)
        except ValueError:
            continue
        return date(parsed.year, parsed.month, parsed.day)
    return None


def _date_from_long_form(match: re.Match[str]) -> date | None:
    return parse_long_date(match.group(1))


STATUS_RULES: Final[tuple[_Rule[SpecStatus], ...]] = (
    (
        InferenceSource.INLINE,
        re.compile(r"\*\*Status\*\*:\s*(?:[^\w\s]+\s*)?(\w+(?:-\w+)?)", re.IGNORECASE),
        _status_from_word,
    ),
    (
        InferenceSource.LINE_START,
        re.compile(r"^Status:\s*(\w+(?:-\w+)?)", re.IGNORECASE | re.MULTILINE),
        _status_from_word,
    ),
    (
        InferenceSource.TASK_LIST,
        re.compile(
            r"^\s*[-*]\s*\[[xX]\]\s*(done|complete|completed|finished)\b",
            re.IGNORECASE | re.MULTILINE,
        ),
        _status_complete,
    ),
    (
        InferenceSource.ADR_SECTION,
        re.compile(r"^##?\s*Status\s*\n+\s*(\w+)", re.IGNORECASE | re.MULTILINE),
        _status_from_adr,
    ),
)

CREATED_RULES: Final[tuple[_Rule[date], ...]] = (
    (
        InferenceSource.INLINE,
        re.compile(r"\*\*Created\*\*:\s*(\d{4}-\d{2}-\d{2})", re.IGNORECASE),
        _date_from_iso,
    ),
    (
        InferenceSource.LINE_START,
        re.compile(r"^(?:Created|Date):\s*(\d{4}-\d{2}-\d{2})", re.IGNORECASE | re.MULTILINE),
        _date_from_iso,
    ),
    (
        InferenceSource.ADR_SECTION,
        re.compile(
            r"^##?\s*Date\s*\n+\s*([A-Za-z]+\.?\s+\d{1,2},?\s+\d{4})",
            re.IGNORECASE | re.MULTILINE,
        ),
        _date_from_long_form,
    ),
    (
        InferenceSource.BARE_DATE,
        re.compile(r"\b(\d{4}-\d{2}-\d{2})\b"),
        _date_from_iso,
    ),
)


def _first_match[T](
    rules: tuple[_Rule[T], ...], text: str
) -> tuple[T, InferenceSource] | None:
    for source, pattern, extract in rules:
        for match in pattern.finditer(text):
            value = extract(match)
            if value is not None:
                return value, source
    return None


def infer_status_from_content(text: str) -> tuple[SpecStatus, InferenceSource] | None:
    """Apply the content rules for status, returning the first hit."""
    return _first_match(STATUS_RULES, text)


def infer_created_from_content(text: str) -> tuple[date, InferenceSource] | None:
    """Apply the content rules for creation date, returning the first hit."""
    return _first_match(CREATED_RULES, text)


def _history_status(
    history: VersionHistoryProtocol,
    path: Path,
    logger: FilteringBoundLogger | None,
) -> SpecStatus | None:
    try:
        transitions = history.status_transitions(path)
    except (HistoryError, OSError) as e:
        if logger is not None:
            logger.warning("history_lookup_failed", path=str(path), query="status", error=str(e))
        return None
    return transitions[-1].status if transitions else None


def _history_created(
    history: VersionHistoryProtocol,
    path: Path,
    logger: FilteringBoundLogger | None,
) -> date | None:
    try:
        timestamp = history.first_commit_timestamp(path)
    except (HistoryError, OSError) as e:
        if logger is not None:
            logger.warning("history_lookup_failed", path=str(path), query="created", error=str(e))
        return None
    return timestamp.date() if timestamp is not None else None


def infer_status(
    text: str,
    *,
    history: VersionHistoryProtocol | None = None,
    path: Path | None = None,
    logger: FilteringBoundLogger | None = None,
) -> tuple[SpecStatus, InferenceSource]:
    """Infer a document's status.

    Content rules come first, then the last status transition recorded in
    history for ``path``, then ``planned``.
    """
    found = infer_status_from_content(text)
    if found is not None:
        return found
    if history is not None and path is not None:
        status = _history_status(history, path, logger)
        if status is not None:
            return status, InferenceSource.HISTORY
    return SpecStatus.PLANNED, InferenceSource.DEFAULT


def infer_created_date(
    text: str,
    *,
    history: VersionHistoryProtocol | None = None,
    path: Path | None = None,
    logger: FilteringBoundLogger | None = None,
) -> tuple[date, InferenceSource]:
    """Infer a document's creation date.

    Content rules come first, then the date of the first commit touching
    ``path``, then today's date (UTC).
    """
    found = infer_created_from_content(text)
    if found is not None:
        return found
    if history is not None and path is not None:
        created = _history_created(history, path, logger)
        if created is not None:
            return created, InferenceSource.HISTORY
    today = pendulum.now("UTC")
    return date(today.year, today.month, today.day), InferenceSource.DEFAULT


def infer_metadata(
    text: str,
    *,
    history: VersionHistoryProtocol | None = None,
    path: Path | None = None,
    logger: FilteringBoundLogger | None = None,
) -> InferredMetadata:
    """Infer status and creation date for a document without a valid header.

    The function never raises and never modifies the document; failures of
    the history collaborator count as "no information".

    Args:
        text: Full document text.
        history: Optional version-history collaborator.
        path: The document's path, required for history lookups.
        logger: Optional logger for history failures.

    Returns:
        The inferred record, with the rule that produced each value.

    Example:
        >>> inferred = infer_metadata("**Status**: Complete\\n**Created**: 2025-01-15")
        >>> inferred.status, inferred.created
        (<SpecStatus.COMPLETE: 'complete'>, datetime.date(2025, 1, 15))
    """
    status, status_source = infer_status(text, history=history, path=path, logger=logger)
    created, created_source = infer_created_date(
        text, history=history, path=path, logger=logger
    )
    return InferredMetadata(
        status=status,
        created=created,
        status_source=status_source,
        created_source=created_source,
    )
