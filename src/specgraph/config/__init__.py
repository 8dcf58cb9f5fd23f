"""specgraph configuration.

Example:
    >>> from specgraph.config import Config
    >>> config = Config.from_dict({"validation": {"max_lines": 300}})
    >>> config.validation.max_lines
    300
"""

from specgraph.exceptions import ConfigError, ConfigLoadError, ConfigValidationError

from ._config import Config
from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources, find_project_root, get_user_config_path
from ._load import safe_load_config
from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import (
    ConfigSource,
    ConfigSourceName,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SpecsConfiguration,
    ValidationConfiguration,
)
from ._validation import ConfigIssue, validate_config

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigError",
    "ConfigIssue",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SpecsConfiguration",
    "ValidationConfiguration",
    "deep_merge",
    "discover_sources",
    "find_project_root",
    "get_user_config_path",
    "parse_env_vars",
    "read_toml_file",
    "safe_load_config",
    "validate_config",
]
