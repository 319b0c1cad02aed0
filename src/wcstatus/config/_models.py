# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

This module provides the Pydantic models for wcstatus configuration sections
and the Config container that merges defaults, files and environment.
"""

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wcstatus.config._defaults import DEFAULT_CONFIG
from wcstatus.config._loader import deep_merge, parse_env_vars, read_toml_file
from wcstatus.enums import FingerprintStrategy
from wcstatus.exceptions import ConfigValidationError


class LogLevel(StrEnum):
    """Log level threshold values."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class SourceControlConfiguration(BaseModel):
    """Source control section, read before every status pass.

    Attributes:
        combine_external_if_same_server: Treat externals from the project's
            own upstream as native.
        hide_unversioned: Drop unversioned items from the Unversioned group.
        ignore: Glob patterns hiding unversioned items.
        ignore_on_status_count: Changelist names left out of the badge count.
        count_unversioned: Include unversioned items in the badge count.
        files_exclude: Workspace exclude globs mapped to their enabled flag.
        fingerprint: Strategy used to skip index rebuilds.
        recreate_trailing_groups: Dispose and recreate the trailing groups
            when the changelist count changes, for hosts that order groups
            by creation time.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    combine_external_if_same_server: bool = False
    hide_unversioned: bool = False
    ignore: tuple[str, ...] = ()
    ignore_on_status_count: tuple[str, ...] = ()
    count_unversioned: bool = False
    files_exclude: dict[str, bool] = Field(default_factory=dict)
    fingerprint: FingerprintStrategy = FingerprintStrategy.CONTENT
    recreate_trailing_groups: bool = False


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor so defaults are
    merged in and validation errors surface as ConfigValidationError.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    source_control: SourceControlConfiguration = Field(
        default_factory=SourceControlConfiguration
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        *,
        source: str | None = None,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            source: Description of where the values came from.

        Returns:
            Configuration merged over the defaults.

        Raises:
            ConfigValidationError: If a value has the wrong type.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            raise _to_config_error(e, merged, source) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific file.

        Args:
            path: Path to the TOML config file.

        Returns:
            Configuration from the file merged over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        return cls.from_dict(read_toml_file(path), source=str(path))

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        *,
        include_env: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> Self:
        """Load merged configuration (defaults -> file -> environment).

        Args:
            path: Optional TOML file. A missing file is skipped.
            include_env: Apply WCSTATUS_* environment overrides.
            environ: Environment mapping, defaults to os.environ.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If the merged values fail validation.
        """
        data: dict[str, Any] = {}
        sources: list[str] = []
        if path is not None and path.is_file():
            data = read_toml_file(path)
            sources.append(str(path))
        if include_env:
            env_values = parse_env_vars(environ=environ)
            if env_values:
                data = deep_merge(data, env_values)
                sources.append("env")
        return cls.from_dict(data, source=", ".join(sources) or None)


def _to_config_error(
    error: ValidationError,
    data: Mapping[str, Any],
    source: str | None,
) -> ConfigValidationError:
    """Convert the first pydantic error into a ConfigValidationError."""
    first = error.errors()[0]
    key = ".".join(str(part) for part in first["loc"])
    value: Any = data
    for part in first["loc"]:
        if isinstance(value, dict) and part in value:
            value = value[part]
        else:
            value = first.get("input")
            break
    msg = f"Invalid configuration value for {key}: {first['msg']}"
    return ConfigValidationError(
        msg,
        key=key,
        value=value,
        expected=first["type"],
        source=source,
    )
