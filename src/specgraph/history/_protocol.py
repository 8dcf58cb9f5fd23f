"""Interface for querying a document's version-control history."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import datetime
    from pathlib import Path

    from specgraph.models import StatusTransition


@runtime_checkable
class VersionHistoryProtocol(Protocol):
    """Read-only access to the recorded history of spec documents.

    Implementations answer "no information" (False, an empty list, or None)
    when a path has no history; callers never need to handle failures.
    """

    def exists(self, path: Path) -> bool:
        """Return whether any recorded revision touches ``path``."""
        ...

    def status_transitions(self, path: Path) -> list[StatusTransition]:
        """Return the status changes of ``path``, oldest first."""
        ...

    def first_commit_timestamp(self, path: Path) -> datetime | None:
        """Return when ``path`` was first recorded."""
        ...

    def last_commit_timestamp(self, path: Path) -> datetime | None:
        """Return when ``path`` was last changed."""
        ...
