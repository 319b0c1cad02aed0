"""Status pass orchestration: fetch, filter, probe and classify."""

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import TypeVar

from structlog.typing import FilteringBoundLogger

from wcstatus.config import ConfigProvider, SourceControlConfiguration
from wcstatus.enums import NodeKind, PropStatus, Status
from wcstatus.exceptions import StatusSourceError
from wcstatus.status._categorizer import StatusCategorizer, is_skippable
from wcstatus.status._externals import separate_externals
from wcstatus.status._models import (
    LocalState,
    PropertyChange,
    RawStatusRecord,
    StatusResult,
)
from wcstatus.status._paths import resolve_record_path
from wcstatus.status._protocol import StatusQuery, StatusSource
from wcstatus.utils import get_null_logger

_T = TypeVar("_T")

_UNTRACKED: frozenset[str] = frozenset({Status.UNVERSIONED, Status.IGNORED})


class StatusService:
    """Runs one status pass against a StatusSource.

    Configuration is read from the provider at the start of every pass, so
    edits to the ignore lists or exclude globs apply on the next refresh.

    Example:
        >>> service = StatusService(
        ...     FakeStatusSource(),
        ...     workspace_root=Path("/wc"),
        ...     config_provider=StaticConfigProvider(),
        ... )
        >>> result = service.update_status()
        >>> result.categorized.changes
        ()
    """

    __slots__ = ("_categorizer", "_config_provider", "_logger", "_root", "_source")

    def __init__(
        self,
        source: StatusSource,
        *,
        workspace_root: Path,
        config_provider: ConfigProvider,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            source: Version-control status collaborator.
            workspace_root: Absolute working-copy root.
            config_provider: Source of the configuration for each pass.
            logger: Logger for debug output.
        """
        self._source: StatusSource = source
        self._root: Path = workspace_root
        self._config_provider: ConfigProvider = config_provider
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_null_logger()
        )
        self._categorizer: StatusCategorizer = StatusCategorizer(
            workspace_root,
            username=source.username,
            logger=self._logger,
        )

    @property
    def workspace_root(self) -> Path:
        """The working-copy root."""
        return self._root

    @property
    def config(self) -> SourceControlConfiguration:
        """The current source control configuration."""
        return self._config_provider.current().source_control

    def update_status(self, *, check_remote_changes: bool = False) -> StatusResult:
        """Run a full status pass.

        Args:
            check_remote_changes: Ask the collaborator for repository-side
                status as well.

        Returns:
            The classification output and the foreign external mounts.

        Raises:
            StatusSourceError: If the collaborator fails.
        """
        config = self.config
        combine = config.combine_external_if_same_server
        query = StatusQuery(
            include_ignored=True,
            include_externals=combine,
            check_remote_changes=check_remote_changes,
        )

        records = self._call(
            "fetch_status",
            lambda: tuple(self._source.fetch_status(query)),
        )

        upstream_identity: str | None = None
        if combine:
            upstream_identity = self._call(
                "get_upstream_identity",
                self._source.get_upstream_identity,
            )

        split = separate_externals(
            records,
            combine_external=combine,
            upstream_identity=upstream_identity,
        )
        self._logger.debug(
            "externals_separated",
            records=len(records),
            external=len(split.external),
            repository=len(split.repository),
        )

        categorized = self._categorizer.categorize(
            split.repository,
            config,
            property_changes=self._fetch_property_changes(split.repository),
            local_state=self._probe_local_state(split.repository),
        )
        return StatusResult(categorized=categorized, status_external=split.external)

    def _call(self, operation: str, func: Callable[[], _T]) -> _T:
        try:
            return func()
        except StatusSourceError:
            raise
        except Exception as e:  # noqa: BLE001
            msg = f"Status collaborator failed during {operation}: {e}"
            raise StatusSourceError(msg, root=self._root) from e

    def _fetch_property_changes(
        self,
        records: Sequence[RawStatusRecord],
    ) -> Mapping[str, Sequence[PropertyChange]]:
        result: dict[str, Sequence[PropertyChange]] = {}
        for record in records:
            if record.status in _UNTRACKED or record.props != PropStatus.MODIFIED:
                continue
            path = record.path
            result[path] = self._call(
                "get_property_changes",
                lambda path=path: tuple(self._source.get_property_changes(path)),
            )
        return result

    def _probe_local_state(
        self,
        records: Sequence[RawStatusRecord],
    ) -> Mapping[str, LocalState]:
        result: dict[str, LocalState] = {}
        for record in records:
            if record.kind is not None and record.status != Status.DELETED:
                continue
            if is_skippable(record):
                continue
            result[record.path] = self._probe_path(
                resolve_record_path(self._root, record.path)
            )
        return result

    def _probe_path(self, path: Path) -> LocalState:
        # An unreadable item is reported as missing; the categorizer then
        # treats it as a file.
        try:
            if path.is_dir():
                return LocalState(kind=NodeKind.DIR, exists=True)
            if path.exists():
                return LocalState(kind=NodeKind.FILE, exists=True)
        except OSError as e:
            self._logger.debug("local_probe_failed", path=str(path), error=str(e))
        return LocalState(kind=None, exists=False)
