"""Configuration providers.

Status passes ask a provider for the current configuration each time, so
changes made while the process runs are picked up on the next pass.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from wcstatus.config._models import Config


@runtime_checkable
class ConfigProvider(Protocol):
    """Source of the current configuration snapshot."""

    def current(self) -> Config:
        """Return the configuration to use for the next pass."""
        ...


class StaticConfigProvider:
    """Provider returning a fixed configuration, mainly for tests and embedding."""

    __slots__ = ("_config",)

    def __init__(self, config: Config | None = None) -> None:
        self._config: Config = config if config is not None else Config()

    def current(self) -> Config:
        return self._config

    def replace(self, config: Config) -> None:
        """Swap in a new configuration snapshot."""
        self._config = config


class FileConfigProvider:
    """Provider backed by a TOML file, reloaded when the file changes.

    The file's modification time and size are checked on every call; the
    parsed Config is cached until either changes. A missing file yields the
    defaults (plus environment overrides).

    Example:
        >>> provider = FileConfigProvider(Path(".wcstatus.toml"))
        >>> provider.current().source_control.hide_unversioned
        False
    """

    __slots__ = ("_cached", "_environ", "_include_env", "_path", "_stamp")

    def __init__(
        self,
        path: Path,
        *,
        include_env: bool = True,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            path: TOML configuration file.
            include_env: Apply WCSTATUS_* environment overrides.
            environ: Environment mapping, defaults to os.environ.
        """
        self._path: Path = path
        self._include_env: bool = include_env
        self._environ: Mapping[str, str] | None = environ
        self._stamp: tuple[int, int] | None = None
        self._cached: Config | None = None

    @property
    def path(self) -> Path:
        """The configuration file."""
        return self._path

    def _file_stamp(self) -> tuple[int, int] | None:
        try:
            stat = self._path.stat()
        except FileNotFoundError:
            return None
        return (stat.st_mtime_ns, stat.st_size)

    def current(self) -> Config:
        """Return the configuration, re-reading the file if it changed.

        Raises:
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If the file holds invalid values.
        """
        stamp = self._file_stamp()
        if self._cached is None or stamp != self._stamp:
            self._cached = Config.load(
                self._path,
                include_env=self._include_env,
                environ=self._environ,
            )
            self._stamp = stamp
        return self._cached

    def invalidate(self) -> None:
        """Drop the cached configuration so the next call reloads it."""
        self._cached = None
        self._stamp = None
