"""Cache of staged paths.

Staging is stored by the version-control tool as membership in a reserved
changelist. The cache mirrors that changelist after every status pass so
lookups need no tool round-trip.
"""

from collections.abc import Iterable
from os import PathLike

from wcstatus.status import normalize_path

STAGING_CHANGELIST = "__staged__"


class StagingService:
    """Tracks which paths are currently staged.

    Example:
        >>> staging = StagingService()
        >>> staging.sync_from_changelist(["/wc/a.txt"])
        >>> staging.is_staged("/wc/./a.txt")
        True
    """

    __slots__ = ("_staged",)

    def __init__(self) -> None:
        self._staged: set[str] = set()

    def sync_from_changelist(self, paths: Iterable[str | PathLike[str]]) -> None:
        """Replace the cache with the members of the staging changelist."""
        self._staged = {normalize_path(path) for path in paths}

    def is_staged(self, path: str | PathLike[str]) -> bool:
        """Check whether a path is staged."""
        return normalize_path(path) in self._staged

    @property
    def staged_paths(self) -> frozenset[str]:
        """Normalized staged paths."""
        return frozenset(self._staged)

    @property
    def staged_count(self) -> int:
        """Number of staged paths."""
        return len(self._staged)

    def clear(self) -> None:
        """Forget all staged paths."""
        self._staged.clear()
