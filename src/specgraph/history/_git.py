# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false
"""Version history read from a git repository through dulwich."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Final, Self, cast

from dulwich.errors import NotGitRepository, ObjectFormatException
from dulwich.object_store import tree_lookup_path
from dulwich.objects import Blob, Commit
from dulwich.repo import Repo

from specgraph.exceptions import HistoryError
from specgraph.frontmatter import extract_frontmatter
from specgraph.models import StatusTransition

if TYPE_CHECKING:
    from types import TracebackType

    from structlog.typing import FilteringBoundLogger


def _commit_datetime(commit: Commit) -> datetime:
    # dulwich keeps the offset in seconds east of UTC
    tz = timezone(timedelta(seconds=commit.commit_timezone))
    return datetime.fromtimestamp(commit.commit_time, tz=tz)


class GitHistory:
    """Answer history queries from the commits of a git repository.

    Every query walks the commits that touched the requested path. Any
    failure (no repository, file outside the repository, file never
    committed, unreadable objects) is reported as "no information" and
    logged at debug level.

    Example:
        >>> with GitHistory(Path(".")) as history:  # doctest: +SKIP
        ...     history.first_commit_timestamp(Path("specs/001-init/README.md"))
    """

    __slots__: Final = ("_logger", "_repo", "_root")

    _repo: Repo | None
    _root: Path | None
    _logger: FilteringBoundLogger | None

    def __init__(
        self,
        repo_path: Path,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Open the repository containing ``repo_path``.

        Args:
            repo_path: The repository root or any directory inside it.
            logger: Optional logger for failed lookups.
        """
        self._logger = logger
        try:
            self._repo = Repo.discover(str(repo_path))
        except NotGitRepository:
            if logger is not None:
                logger.debug("git_repository_not_found", path=str(repo_path))
            self._repo = None
            self._root = None
        else:
            self._root = Path(self._repo.path).resolve()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release file handles held by the dulwich repository."""
        if self._repo is not None:
            self._repo.close()

    @property
    def available(self) -> bool:
        """Whether a repository was found."""
        return self._repo is not None

    def _relative(self, path: Path) -> bytes:
        if self._root is None:
            msg = "No git repository"
            raise HistoryError(msg, path=path)
        resolved = (path if path.is_absolute() else Path.cwd() / path).resolve()
        try:
            relative = resolved.relative_to(self._root)
        except ValueError as e:
            msg = f"Path is outside the repository: {path}"
            raise HistoryError(msg, path=path, cause=e) from e
        return relative.as_posix().encode("utf-8")

    def _commits(self, path: Path) -> list[Commit]:
        """Commits touching ``path``, oldest first.

        Raises:
            HistoryError: If the repository cannot be read.
        """
        relative = self._relative(path)
        repo = cast("Repo", self._repo)
        try:
            head = repo.head()
        except KeyError:
            return []
        try:
            walker = repo.get_walker(include=[head], paths=[relative], reverse=True)
            return [cast("Commit", entry.commit) for entry in walker]
        except (KeyError, OSError, ObjectFormatException) as e:
            msg = f"Failed to walk history of {path}"
            raise HistoryError(msg, path=path, cause=e) from e

    def _read_at(self, commit: Commit, relative: bytes) -> str | None:
        repo = cast("Repo", self._repo)
        try:
            _, blob_sha = tree_lookup_path(repo.__getitem__, commit.tree, relative)
        except KeyError:
            # Deleted in this commit
            return None
        blob = repo[blob_sha]
        if not isinstance(blob, Blob):
            return None
        return blob.as_raw_string().decode("utf-8", errors="replace")

    def _debug(self, event: str, path: Path, error: HistoryError) -> None:
        if self._logger is not None:
            self._logger.debug(event, path=str(path), error=str(error))

    def exists(self, path: Path) -> bool:
        try:
            return bool(self._commits(path))
        except HistoryError as e:
            self._debug("history_exists_failed", path, e)
            return False

    def status_transitions(self, path: Path) -> list[StatusTransition]:
        """Status changes recorded in the committed versions of ``path``.

        Each commit's version of the file is parsed for its header status.
        Versions without a status are skipped and repeats of the previous
        status are dropped.
        """
        try:
            relative = self._relative(path)
            commits = self._commits(path)
            transitions: list[StatusTransition] = []
            for commit in commits:
                text = self._read_at(commit, relative)
                if text is None:
                    continue
                status = extract_frontmatter(text).metadata.status
                if status is None:
                    continue
                if transitions and transitions[-1].status is status:
                    continue
                transitions.append(
                    StatusTransition(status=status, at=_commit_datetime(commit))
                )
        except HistoryError as e:
            self._debug("history_transitions_failed", path, e)
            return []
        except (KeyError, OSError, ObjectFormatException) as e:
            self._debug("history_transitions_failed", path, HistoryError(str(e), path=path))
            return []
        return transitions

    def first_commit_timestamp(self, path: Path) -> datetime | None:
        try:
            commits = self._commits(path)
        except HistoryError as e:
            self._debug("history_first_commit_failed", path, e)
            return None
        return _commit_datetime(commits[0]) if commits else None

    def last_commit_timestamp(self, path: Path) -> datetime | None:
        try:
            commits = self._commits(path)
        except HistoryError as e:
            self._debug("history_last_commit_failed", path, e)
            return None
        return _commit_datetime(commits[-1]) if commits else None
