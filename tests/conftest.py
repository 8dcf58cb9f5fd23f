"""Shared test fixtures for specgraph tests."""

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from rich.console import Console

from specgraph.models import DocumentMetadata, SubDocument

if TYPE_CHECKING:
    from pendulum import DateTime


def make_header(**fields: str) -> str:
    """Render simple ``key: value`` fields as a header block."""
    lines = [f"{key}: {value}" for key, value in fields.items()]
    return "---\n" + "".join(f"{line}\n" for line in lines) + "---\n"


def create_spec(
    specs_dir: Path,
    spec_id: str,
    readme: str,
    siblings: Mapping[str, str] | None = None,
) -> Path:
    """Create a spec directory with a README and optional sibling files.

    Returns:
        Path to the spec directory.
    """
    spec_dir = specs_dir / spec_id
    spec_dir.mkdir(parents=True, exist_ok=True)
    _ = (spec_dir / "README.md").write_text(readme, encoding="utf-8")
    for name, content in (siblings or {}).items():
        _ = (spec_dir / name).write_text(content, encoding="utf-8")
    return spec_dir


def filler_words(count: int) -> str:
    """Body text whose estimated token count is exactly ``count``."""
    words = ["word"] * count
    return "\n".join(" ".join(words[i : i + 10]) for i in range(0, count, 10)) + "\n"


@pytest.fixture
def make_metadata() -> Callable[..., DocumentMetadata]:
    """Return a factory for DocumentMetadata with keyword overrides."""

    def _make(**overrides: object) -> DocumentMetadata:
        return DocumentMetadata(**overrides)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def make_sub_document() -> Callable[..., SubDocument]:
    """Return a factory that measures a sub-document from its text."""
    from specgraph.spec import build_sub_document

    def _make(name: str = "DESIGN.md", content: str = "# Design\n") -> SubDocument:
        return build_sub_document(name, content)

    return _make


FreezeTimeFunc = Callable[[int, int, int], "DateTime"]


@pytest.fixture
def freeze_time(monkeypatch: pytest.MonkeyPatch) -> FreezeTimeFunc:
    """Return a function to freeze pendulum.now() to a fixed UTC day."""
    import pendulum

    def _freeze(year: int, month: int, day: int) -> "DateTime":
        fixed = pendulum.datetime(year, month, day, tz="UTC")

        def mock_now(tz: str | None = None) -> "DateTime":  # noqa: ARG001
            return fixed

        monkeypatch.setattr("pendulum.now", mock_now)
        return fixed

    return _freeze


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
