"""Configuration for wcstatus.

Configuration is read from defaults, an optional TOML file and WCSTATUS_*
environment variables, in that order of precedence (lowest first).

Example:
    >>> from wcstatus.config import Config
    >>> config = Config.from_dict({"source_control": {"count_unversioned": True}})
    >>> config.source_control.count_unversioned
    True
"""

from wcstatus.config._defaults import DEFAULT_CONFIG
from wcstatus.config._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from wcstatus.config._models import (
    Config,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SourceControlConfiguration,
)
from wcstatus.config._provider import (
    ConfigProvider,
    FileConfigProvider,
    StaticConfigProvider,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigProvider",
    "FileConfigProvider",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SourceControlConfiguration",
    "StaticConfigProvider",
    "copy_value",
    "deep_merge",
    "parse_env_vars",
    "read_toml_file",
    "set_nested_key",
]
