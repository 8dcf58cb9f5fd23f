"""In-memory version history for tests and dry runs."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from datetime import datetime

    from specgraph.models import StatusTransition


class FakeHistory:
    """Version history backed by plain mappings keyed by path.

    Timestamps default to those of the first and last transition when not
    given explicitly.
    """

    __slots__: Final = ("_first", "_last", "_transitions")

    _transitions: dict[Path, list[StatusTransition]]
    _first: dict[Path, datetime]
    _last: dict[Path, datetime]

    def __init__(
        self,
        transitions: Mapping[Path | str, Sequence[StatusTransition]] | None = None,
        *,
        first_commits: Mapping[Path | str, datetime] | None = None,
        last_commits: Mapping[Path | str, datetime] | None = None,
    ) -> None:
        self._transitions = {
            Path(path): list(items) for path, items in (transitions or {}).items()
        }
        self._first = {Path(path): ts for path, ts in (first_commits or {}).items()}
        self._last = {Path(path): ts for path, ts in (last_commits or {}).items()}

    def exists(self, path: Path) -> bool:
        path = Path(path)
        return path in self._transitions or path in self._first or path in self._last

    def status_transitions(self, path: Path) -> list[StatusTransition]:
        return list(self._transitions.get(Path(path), []))

    def first_commit_timestamp(self, path: Path) -> datetime | None:
        path = Path(path)
        if path in self._first:
            return self._first[path]
        transitions = self._transitions.get(path)
        return transitions[0].at if transitions else None

    def last_commit_timestamp(self, path: Path) -> datetime | None:
        path = Path(path)
        if path in self._last:
            return self._last[path]
        transitions = self._transitions.get(path)
        return transitions[-1].at if transitions else None
