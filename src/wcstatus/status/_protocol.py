"""Status source protocol for type-safe dependency injection.

This module defines the runtime-checkable Protocol implemented by whatever
runs the version-control tool and parses its output. The engine only talks
to that collaborator through this interface.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from wcstatus.status._models import PropertyChange, RawStatusRecord


@dataclass(frozen=True, slots=True)
class StatusQuery:
    """Parameters of one status request.

    Attributes:
        include_ignored: Report ignored items.
        include_externals: Descend into externals.
        check_remote_changes: Contact the server for repository-side status.
    """

    include_ignored: bool = True
    include_externals: bool = False
    check_remote_changes: bool = False


@runtime_checkable
class StatusSource(Protocol):
    """Protocol for the version-control status collaborator.

    Example:
        >>> def count_records(source: StatusSource) -> int:
        ...     return len(source.fetch_status(StatusQuery()))
    """

    @property
    def username(self) -> str | None:
        """Configured user name, used to detect stolen locks."""
        ...

    def fetch_status(self, query: StatusQuery) -> Sequence[RawStatusRecord]:
        """Run a status request and return the parsed records.

        Args:
            query: What to include in the status.

        Returns:
            Records relative to the working-copy root.
        """
        ...

    def get_upstream_identity(self) -> str:
        """Return the identity (repository UUID) of the project's upstream."""
        ...

    def get_property_changes(self, path: str) -> Sequence[PropertyChange]:
        """Return the discrete property changes of a versioned item.

        Args:
            path: Path relative to the working-copy root.

        Returns:
            Property changes, empty if none could be determined.
        """
        ...
