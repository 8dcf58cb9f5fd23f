"""Configuration loading with CLI-friendly error handling."""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from specgraph.exceptions import ConfigError

from ._config import Config

if TYPE_CHECKING:
    from pathlib import Path


def safe_load_config(
    *,
    config_path: Path | None = None,
    project_root: Path | None = None,
) -> tuple[Config, str | None]:
    """Load configuration with error handling.

    Behavior on failure depends on the SPECGRAPH_STRICT_CONFIG environment
    variable:
    - If unset or "0": warn to stderr and return the default config
    - If "1": fail fast with sys.exit(1)

    An explicit config_path must exist regardless of strict mode.

    Args:
        config_path: Explicit path to config file (--config flag).
        project_root: Project root directory override (--project-root flag).

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.
    """
    strict_mode = os.environ.get("SPECGRAPH_STRICT_CONFIG", "0") == "1"

    if config_path is not None and not config_path.exists():
        print(f"Error: Config file not found: {config_path}", file=sys.stderr)  # noqa: T201
        sys.exit(1)

    try:
        if config_path is not None:
            config = Config.from_file(config_path)
        else:
            config = Config.load(project_root=project_root, include_env=True)
    except (ConfigError, OSError) as e:
        error_msg = str(e)
        if strict_mode:
            print(f"Error: {error_msg}", file=sys.stderr)  # noqa: T201
            sys.exit(1)
        print(f"Warning: Failed to load config: {error_msg}", file=sys.stderr)  # noqa: T201
        return Config.from_dict({}), error_msg
    else:
        return config, None
