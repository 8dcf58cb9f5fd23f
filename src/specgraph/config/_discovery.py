"""Project root and config path discovery utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import platformdirs

from ._defaults import DEFAULT_CONFIG
from ._models import ConfigSource, ConfigSourceName

PROJECT_CONFIG_NAME = "specgraph.toml"


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by searching upward.

    The nearest directory holding a ``specgraph.toml`` file wins; failing
    that, the nearest directory holding a ``.git`` entry.

    Args:
        start: Directory to start searching from. Defaults to the current
            working directory.

    Returns:
        The project root, or None if neither marker is found.
    """
    current = (start or Path.cwd()).resolve()
    candidates = [current, *current.parents]

    for directory in candidates:
        if (directory / PROJECT_CONFIG_NAME).is_file():
            return directory
    for directory in candidates:
        if (directory / ".git").exists():
            return directory
    return None


def get_user_config_path() -> Path:
    """Get the platform-specific user config file path.

    The path is returned whether or not it exists.

    Examples:
        >>> get_user_config_path().name
        'config.toml'
    """
    return platformdirs.user_config_path("specgraph") / "config.toml"


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
) -> list[ConfigSource]:
    """Discover all configuration sources, highest precedence first.

    File-based sources are checked for existence but not read. The project
    source is omitted when no project root can be found.

    Args:
        project_root: Project root directory. If None, auto-detect.
        include_env: Include environment variables as a source.

    Returns:
        Sources in precedence order (highest first).
    """
    sources: list[ConfigSource] = []
    resolved_root = project_root if project_root else find_project_root()

    if include_env:
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    if resolved_root:
        project_path = resolved_root / PROJECT_CONFIG_NAME
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    default_values: dict[str, Any] = DEFAULT_CONFIG  # pyright: ignore[reportExplicitAny]
    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT, path=None, exists=True, values=default_values
        )
    )

    return sources
