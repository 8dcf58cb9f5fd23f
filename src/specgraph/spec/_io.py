"""File I/O helpers for spec documents."""

import tempfile
from pathlib import Path

from specgraph.exceptions import SpecIOError

__all__ = ["atomic_write_text", "read_text_file"]


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        SpecIOError: If the file cannot be read or is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read file: {e}"
        raise SpecIOError(msg, path=path, operation="read", cause=e) from e


def atomic_write_text(path: Path, content: str) -> None:
    """Write text to a file atomically.

    Writes to a temporary file in the same directory, then renames it over
    the target, so the file is either fully written or left untouched.

    Raises:
        SpecIOError: If the write operation fails.
    """
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
            encoding="utf-8",
        ) as f:
            _ = f.write(content)
            temp_path = Path(f.name)

        _ = temp_path.replace(path)
    except OSError as e:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        msg = f"Failed to write file: {e}"
        raise SpecIOError(msg, path=path, operation="write", cause=e) from e
