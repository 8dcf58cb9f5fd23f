# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false
"""Configuration container with typed access."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self, TypeVar, overload

import tomli_w
from pydantic import BaseModel, ConfigDict, PrivateAttr

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources
from ._loader import copy_value, deep_merge, parse_env_vars, read_toml_file
from ._models import (
    ConfigSource,
    ConfigSourceName,
    LoggingConfig,
    SpecsConfiguration,
    ValidationConfiguration,
)
from ._validation import raise_if_validation_errors, validate_config

if TYPE_CHECKING:
    from pathlib import Path

T = TypeVar("T")


def _parse_sections(
    merged: dict[str, Any],
) -> tuple[LoggingConfig, SpecsConfiguration, ValidationConfiguration]:
    return (
        LoggingConfig.model_validate(merged.get("logging", {})),
        SpecsConfiguration.model_validate(merged.get("specs", {})),
        ValidationConfiguration.model_validate(merged.get("validation", {})),
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _sources: tuple[ConfigSource, ...] = PrivateAttr(default=())
    _logging: LoggingConfig = PrivateAttr(default_factory=LoggingConfig)
    _specs: SpecsConfiguration = PrivateAttr(default_factory=SpecsConfiguration)
    _validation: ValidationConfiguration = PrivateAttr(
        default_factory=ValidationConfiguration
    )

    def __init__(
        self,
        *,
        _data: dict[str, Any] | None = None,
        _sources: tuple[ConfigSource, ...] = (),
    ) -> None:
        """Initialize configuration container.

        Args:
            _data: The complete merged configuration dictionary.
            _sources: Sources that contributed to this configuration.
        """
        super().__init__()
        self._data = _data if _data is not None else copy_value(DEFAULT_CONFIG)
        self._sources = _sources
        self._logging, self._specs, self._validation = _parse_sections(self._data)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged))
        return cls(_data=merged)

    @classmethod
    def from_file(cls, path: Path, *, validate: bool = True) -> Self:
        """Load configuration from a single TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        data = read_toml_file(path)
        source = ConfigSource(
            name=ConfigSourceName.PROJECT, path=path, exists=True, values=data
        )

        merged = deep_merge(DEFAULT_CONFIG, data)
        if validate:
            raise_if_validation_errors(validate_config(merged), source=str(path))
        return cls(_data=merged, _sources=(source,))

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | None = None,
        include_env: bool = True,
    ) -> Self:
        """Load merged configuration from all sources.

        Sources merge in precedence order: defaults, user file, project
        ``specgraph.toml``, then ``SPECGRAPH_*`` environment variables.

        Raises:
            ConfigLoadError: If a config file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        sources = discover_sources(project_root=project_root, include_env=include_env)

        merged: dict[str, Any] = {}
        loaded_sources: list[ConfigSource] = []
        for source in reversed(sources):
            values: dict[str, Any] = {}
            if source.name == ConfigSourceName.DEFAULT:
                values = source.values
            elif source.name == ConfigSourceName.ENV:
                values = parse_env_vars()
            elif source.path and source.exists:
                values = read_toml_file(source.path)

            loaded_sources.append(
                ConfigSource(
                    name=source.name,
                    path=source.path,
                    exists=source.exists,
                    values=values,
                )
            )
            if values:
                merged = deep_merge(merged, values)

        raise_if_validation_errors(validate_config(merged))
        return cls(_data=merged, _sources=tuple(reversed(loaded_sources)))

    @property
    def sources(self) -> list[ConfigSource]:
        """Sources that contributed to this configuration, highest first."""
        return list(self._sources)

    @property
    def logging(self) -> LoggingConfig:
        return self._logging

    @property
    def specs(self) -> SpecsConfiguration:
        return self._specs

    @property
    def validation(self) -> ValidationConfiguration:
        return self._validation

    @overload
    def get(self, key: str) -> Any: ...

    @overload
    def get(self, key: str, default: T) -> T: ...

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> Config.from_dict({}).get("validation.max_lines")
            400
            >>> Config.from_dict({}).get("nonexistent", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Return a deep copy of the merged configuration."""
        return copy_value(self._data)

    def to_toml(self) -> str:
        """Render the merged configuration as TOML."""
        return tomli_w.dumps(self.to_dict())
