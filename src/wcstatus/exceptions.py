"""wcstatus exceptions."""

from pathlib import Path
from typing import Any


class WcStatusError(Exception):
    """Base exception for wcstatus errors."""


class ConfigError(WcStatusError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


class StatusSourceError(WcStatusError):
    """Raised when the status collaborator fails to produce records.

    Attributes:
        root: Working-copy root the status was requested for.
    """

    def __init__(self, message: str, *, root: Path | None = None) -> None:
        """Initialize with error message and working-copy context.

        Args:
            message: Human-readable error message.
            root: Working-copy root the status was requested for.
        """
        super().__init__(message)
        self.root: Path | None = root


class GroupDisposedError(WcStatusError):
    """Raised when a disposed resource group is written to.

    Attributes:
        group_id: Identifier of the disposed group.
    """

    def __init__(self, message: str, *, group_id: str) -> None:
        """Initialize with error message and group context."""
        super().__init__(message)
        self.group_id: str = group_id
