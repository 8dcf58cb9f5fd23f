# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""TOML configuration file loading and merging."""

from __future__ import annotations

import os
import tomllib
from typing import TYPE_CHECKING, Any

from specgraph.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from pathlib import Path

_ENV_PREFIX = "SPECGRAPH_"

# Process-level switches that share the prefix but are not config keys
_RESERVED_ENV_VARS = frozenset({"DEBUG", "LOG_LEVEL", "STRICT_CONFIG"})


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Lists are replaced entirely
        - Scalars are replaced with the override value
        - Missing keys in override preserve base values
    """
    result: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
        key: copy_value(value) for key, value in base.items()
    }

    for key, override_val in override.items():
        base_val = base.get(key)
        if isinstance(base_val, dict) and isinstance(override_val, dict):
            result[key] = deep_merge(base_val, override_val)
        else:
            result[key] = copy_value(override_val)

    return result


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    """Create a deep copy of a configuration value."""
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def _parse_env_value(value: str) -> bool | int | str:
    """Parse an environment value as a boolean, an integer, or a string."""
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"
    try:
        return int(value)
    except ValueError:
        return value


def parse_env_vars() -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse ``SPECGRAPH_*`` environment variables into a config dictionary.

    Double underscores separate nesting levels, so
    ``SPECGRAPH_VALIDATION__MAX_LINES`` sets ``validation.max_lines``.

    Returns:
        Dictionary of parsed config values with nested structure.
    """
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in os.environ.items():
        if not key.startswith(_ENV_PREFIX):
            continue
        config_key = key.removeprefix(_ENV_PREFIX)
        if not config_key or config_key in _RESERVED_ENV_VARS:
            continue

        *parents, leaf = config_key.lower().split("__")
        section = result
        for part in parents:
            nested = section.get(part)
            if not isinstance(nested, dict):
                nested = section[part] = {}
            section = nested
        section[leaf] = _parse_env_value(value)

    return result
