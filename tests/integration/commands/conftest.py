import os
from collections.abc import Callable
from pathlib import Path

import pytest
from rich.console import Console

from specgraph.cli import create_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("SPECGRAPH_"):
            monkeypatch.delenv(key)


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A project directory with a config file and an empty specs directory."""
    root = tmp_path / "project"
    (root / "specs").mkdir(parents=True)
    _ = (root / "specgraph.toml").write_text("[logging]\nlevel = 'error'\n", encoding="utf-8")
    return root


@pytest.fixture
def specs_dir(project_root: Path) -> Path:
    return project_root / "specs"


@pytest.fixture
def specgraph_cli(console: Console, project_root: Path) -> Callable[..., None]:
    """Create CLI app for testing.

    Returns a callable that runs the CLI against ``project_root`` and
    suppresses SystemExit. Use specgraph_cli_with_exit_code when you need to
    check the exit code.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> None:
        try:
            app.meta(["--project-root", str(project_root), *args])
        except SystemExit:
            pass

    return _run


@pytest.fixture
def specgraph_cli_with_exit_code(console: Console, project_root: Path) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code."""
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app.meta(["--project-root", str(project_root), *args])
        except SystemExit as e:
            if e.code is None:
                return 0
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
