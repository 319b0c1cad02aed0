"""Fake status source for testing.

This module provides a FakeStatusSource that implements StatusSource without
running a version-control tool.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field

from wcstatus.status._models import PropertyChange, RawStatusRecord
from wcstatus.status._protocol import StatusQuery


@dataclass(slots=True)
class FakeStatusSource:
    """Fake status collaborator for testing.

    The fake returns whatever records it holds and remembers every query it
    received, so tests can assert on the request parameters.

    Example:
        >>> source = FakeStatusSource()
        >>> source.records.append(RawStatusRecord(path="a.txt", status="modified"))
        >>> len(source.fetch_status(StatusQuery()))
        1
    """

    records: list[RawStatusRecord] = field(default_factory=list)
    upstream_identity: str = "fake-uuid"
    property_changes: dict[str, list[PropertyChange]] = field(default_factory=dict)
    user: str | None = None
    queries: list[StatusQuery] = field(default_factory=list)
    identity_requests: int = 0
    property_requests: list[str] = field(default_factory=list)
    error: Exception | None = None

    @property
    def username(self) -> str | None:
        """Configured user name."""
        return self.user

    def fetch_status(self, query: StatusQuery) -> Sequence[RawStatusRecord]:
        """Return the held records, or raise the configured error.

        Args:
            query: Recorded for later assertions.

        Returns:
            A copy of the held records.
        """
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.records)

    def get_upstream_identity(self) -> str:
        """Return the configured upstream identity."""
        self.identity_requests += 1
        return self.upstream_identity

    def get_property_changes(self, path: str) -> Sequence[PropertyChange]:
        """Return the configured property changes for a path."""
        self.property_requests.append(path)
        return list(self.property_changes.get(path, []))
