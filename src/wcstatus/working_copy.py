"""Working copy: runs status passes and keeps the groups current.

WorkingCopy is the layer that drives the engine. It serializes overlapping
refreshes, throttles refreshes that arrive too quickly, and exposes the
resulting groups, index and side results.
"""

import threading
import time
from collections.abc import Callable, Iterable, Mapping
from os import PathLike
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from wcstatus.commit import CommitPathExpander
from wcstatus.config import ConfigProvider, LogFormat
from wcstatus.groups import GroupObserver, ResourceIndexManager
from wcstatus.status import (
    CategorizedStatus,
    LockInfo,
    RawStatusRecord,
    StatusResult,
    StatusService,
    StatusSource,
    TrackedResource,
)
from wcstatus.utils import create_logger

DEFAULT_MIN_REFRESH_INTERVAL = 2.0


class WorkingCopy:
    """A single working-copy root and its resource groups.

    Example:
        >>> wc = WorkingCopy(
        ...     FakeStatusSource(),
        ...     workspace_root=Path("/wc"),
        ...     config_provider=StaticConfigProvider(),
        ... )
        >>> wc.refresh()
        0
    """

    def __init__(
        self,
        source: StatusSource,
        *,
        workspace_root: Path,
        config_provider: ConfigProvider,
        logger: FilteringBoundLogger | None = None,
        observer: GroupObserver | None = None,
        min_refresh_interval: float = DEFAULT_MIN_REFRESH_INTERVAL,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the working copy.

        Args:
            source: Version-control status collaborator.
            workspace_root: Absolute working-copy root.
            config_provider: Source of the configuration for each pass.
            logger: Logger shared by every component. Built from the logging
                section of the configuration when omitted.
            observer: Receives group lifecycle events.
            min_refresh_interval: Seconds during which a repeated refresh is
                skipped unless forced.
            clock: Monotonic clock, for tests.
        """
        config = config_provider.current()
        if logger is None:
            logger = create_logger(
                level=config.logging.level,
                log_format=(
                    "json" if config.logging.format == LogFormat.JSON else "text"
                ),
                log_file=config.logging.file,
                component="wcstatus",
            )
        self._logger: FilteringBoundLogger = logger.bind(
            workspace_root=str(workspace_root)
        )
        self._root: Path = workspace_root
        self._config_provider: ConfigProvider = config_provider
        self._service: StatusService = StatusService(
            source,
            workspace_root=workspace_root,
            config_provider=config_provider,
            logger=self._logger,
        )
        self._manager: ResourceIndexManager = ResourceIndexManager(
            observer=observer,
            recreate_trailing_groups=config.source_control.recreate_trailing_groups,
            logger=self._logger,
        )
        self._expander: CommitPathExpander = CommitPathExpander(self._manager)
        self._lock: threading.Lock = threading.Lock()
        self._clock: Callable[[], float] = clock or time.monotonic
        self._min_refresh_interval: float = min_refresh_interval
        self._last_refresh: float | None = None
        self._result: StatusResult = StatusResult(categorized=CategorizedStatus())
        self._count: int = 0

    @property
    def workspace_root(self) -> Path:
        """The working-copy root."""
        return self._root

    @property
    def groups(self) -> ResourceIndexManager:
        """The resource groups and index."""
        return self._manager

    @property
    def count(self) -> int:
        """Badge count of the last pass."""
        return self._count

    def refresh(
        self,
        *,
        check_remote_changes: bool = False,
        force: bool = False,
    ) -> int | None:
        """Run a status pass and apply it to the groups.

        Calls made within min_refresh_interval of the previous pass are
        skipped unless forced. Overlapping callers wait for each other.

        Args:
            check_remote_changes: Also query repository-side status.
            force: Ignore the refresh interval.

        Returns:
            The new badge count, or None if the refresh was skipped.

        Raises:
            StatusSourceError: If the collaborator fails. Groups and index
                keep the previous pass.
        """
        with self._lock:
            now = self._clock()
            if (
                not force
                and self._last_refresh is not None
                and now - self._last_refresh < self._min_refresh_interval
            ):
                self._logger.debug("refresh_skipped", reason="interval")
                return None

            result = self._service.update_status(
                check_remote_changes=check_remote_changes
            )
            self._count = self._manager.update_groups(
                result.categorized,
                self._config_provider.current().source_control,
            )
            self._result = result
            self._last_refresh = now
            self._logger.debug("refresh_completed", count=self._count)
            return self._count

    # =========================================================================
    # Side results of the last pass
    # =========================================================================

    @property
    def is_incomplete(self) -> bool:
        """The tree is incomplete or contains switched items."""
        return self._result.categorized.is_incomplete

    @property
    def need_cleanup(self) -> bool:
        """The root carries an administrative lock."""
        return self._result.categorized.need_cleanup

    @property
    def status_external(self) -> tuple[RawStatusRecord, ...]:
        """External mounts found in the last pass."""
        return self._result.status_external

    @property
    def ignored(self) -> tuple[TrackedResource, ...]:
        """Ignored items of the last pass."""
        return self._result.categorized.ignored

    @property
    def lock_statuses(self) -> Mapping[str, LockInfo]:
        """Lock state per relative path."""
        return self._result.categorized.lock_statuses

    @property
    def remote_changed_files(self) -> int:
        """Number of repository-side changes found by the last pass."""
        return len(self._result.categorized.remote_changes)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_resource_from_file(
        self, path: str | PathLike[str]
    ) -> TrackedResource | None:
        """Look up the resource for an absolute path."""
        return self._manager.get_resource_from_file(path)

    def get_resource_map(self) -> Mapping[str, TrackedResource]:
        """Read-only view of the flat index."""
        return self._manager.get_resource_map()

    def commit_paths(self, resources: Iterable[TrackedResource]) -> list[str]:
        """Expand resources into the paths to submit for a commit."""
        return self._expander.expand(resources)

    def dispose(self) -> None:
        """Dispose every group. Idempotent."""
        with self._lock:
            self._manager.dispose()
            self._result = StatusResult(categorized=CategorizedStatus())
