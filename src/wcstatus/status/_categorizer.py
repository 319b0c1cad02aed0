"""Classification of raw status records into resource groups."""

import re
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType

from structlog.typing import FilteringBoundLogger

from wcstatus.config import SourceControlConfiguration
from wcstatus.enums import LockStatus, NodeKind, Status
from wcstatus.status._matching import build_exclude_list, get_matcher
from wcstatus.status._models import (
    CategorizedStatus,
    LocalState,
    LockInfo,
    PropertyChange,
    RawStatusRecord,
    TrackedResource,
    is_quiet_props,
    is_quiet_status,
)
from wcstatus.status._paths import resolve_record_path, to_posix
from wcstatus.utils import get_null_logger

# <base>.mine, <base>.working, <base>.merge-left.r12, <base>.r12
_CONFLICT_BYPRODUCT = re.compile(r"(.+?)\.(mine|working|merge-\w+\.r\d+|r\d+)$")


def conflict_byproduct_base(path: str) -> str | None:
    """Return the conflicted path a byproduct file belongs to.

    Args:
        path: Relative status path of an unversioned item.

    Returns:
        The base path if the name looks like a conflict byproduct.
    """
    match = _CONFLICT_BYPRODUCT.fullmatch(to_posix(path))
    if match is None:
        return None
    return match.group(1)


def is_skippable(record: RawStatusRecord) -> bool:
    """True when a record carries nothing worth showing."""
    return (
        is_quiet_status(record.status)
        and is_quiet_props(record.props)
        and not record.in_changelist
    )


class StatusCategorizer:
    """Turns filtered status records into a CategorizedStatus.

    The categorizer performs no I/O. Facts that need the filesystem or the
    version-control tool (property change detail, local node kind and
    existence) are probed by the caller and passed in keyed by relative path.

    Example:
        >>> categorizer = StatusCategorizer(Path("/wc"))
        >>> result = categorizer.categorize(
        ...     [RawStatusRecord(path="a.txt", status="modified")],
        ...     SourceControlConfiguration(),
        ... )
        >>> [r.resource_path for r in result.changes]
        [PosixPath('/wc/a.txt')]
    """

    __slots__ = ("_logger", "_root", "_username")

    def __init__(
        self,
        workspace_root: Path,
        *,
        username: str | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the categorizer.

        Args:
            workspace_root: Absolute working-copy root.
            username: Configured user, used to detect stolen locks.
            logger: Logger for debug summaries.
        """
        self._root: Path = workspace_root
        self._username: str | None = username
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_null_logger()
        )

    @property
    def workspace_root(self) -> Path:
        """The working-copy root resources are resolved against."""
        return self._root

    def categorize(  # noqa: C901, PLR0912, PLR0915
        self,
        records: Iterable[RawStatusRecord],
        config: SourceControlConfiguration,
        *,
        property_changes: Mapping[str, Sequence[PropertyChange]] | None = None,
        local_state: Mapping[str, LocalState] | None = None,
    ) -> CategorizedStatus:
        """Classify records into groups.

        Args:
            records: Records with externals already removed.
            config: Source control configuration for this pass.
            property_changes: Property change detail per relative path.
            local_state: Local kind/existence per relative path.

        Returns:
            The classification output. Group order follows record order.
        """
        records = tuple(records)
        property_changes = property_changes or {}
        local_state = local_state or {}

        exclude = get_matcher(build_exclude_list(config.files_exclude))
        ignore = get_matcher(tuple(config.ignore))
        conflicted_paths = {
            to_posix(record.path)
            for record in records
            if record.status == Status.CONFLICTED
        }

        changes: list[TrackedResource] = []
        conflicts: list[TrackedResource] = []
        unversioned: list[TrackedResource] = []
        changelists: dict[str, list[TrackedResource]] = {}
        remote_changes: list[TrackedResource] = []
        ignored: list[TrackedResource] = []
        lock_statuses: dict[str, LockInfo] = {}
        is_incomplete = False
        need_cleanup = False
        excluded = 0

        for record in records:
            flags = record.wc_status

            if record.path == ".":
                is_incomplete = record.status == Status.INCOMPLETE
                need_cleanup = flags.wc_locked

            if flags.switched:
                is_incomplete = True

            if (
                flags.wc_locked
                or flags.switched
                or record.status == Status.INCOMPLETE
            ):
                continue

            if exclude and exclude.matches(record.path):
                excluded += 1
                continue

            if (
                record.has_remote_status
                and record.repos_status is not None
                and record.repos_status.has_content_changes
            ):
                remote_changes.append(
                    TrackedResource(
                        resource_path=resolve_record_path(self._root, record.path),
                        status=record.repos_status.item,
                        props=record.repos_status.props,
                        remote=True,
                        kind=record.kind,
                    )
                )

            lock_status = self._lock_status(record)
            if lock_status is not None:
                lock_statuses[record.path] = LockInfo(
                    lock_status=lock_status,
                    lock_owner=flags.lock_owner,
                    has_lock_token=flags.has_lock_token,
                )

            if is_skippable(record):
                continue

            resource = self._to_resource(
                record,
                lock_status=lock_status,
                property_changes=property_changes.get(record.path, ()),
                state=local_state.get(record.path),
            )

            if record.status == Status.IGNORED:
                ignored.append(resource)
            elif record.status == Status.CONFLICTED:
                conflicts.append(resource)
            elif record.status == Status.UNVERSIONED:
                if config.hide_unversioned:
                    continue
                if ignore and ignore.matches(record.path):
                    continue
                base = conflict_byproduct_base(record.path)
                if base is not None and base in conflicted_paths:
                    continue
                unversioned.append(resource)
            elif record.changelist:
                changelists.setdefault(record.changelist, []).append(resource)
            else:
                changes.append(resource)

        self._logger.debug(
            "status_categorized",
            records=len(records),
            excluded=excluded,
            changes=len(changes),
            conflicts=len(conflicts),
            unversioned=len(unversioned),
            changelists=len(changelists),
            remote_changes=len(remote_changes),
            is_incomplete=is_incomplete,
        )

        return CategorizedStatus(
            changes=tuple(changes),
            conflicts=tuple(conflicts),
            unversioned=tuple(unversioned),
            changelists=MappingProxyType(
                {name: tuple(items) for name, items in changelists.items()}
            ),
            remote_changes=tuple(remote_changes),
            ignored=tuple(ignored),
            is_incomplete=is_incomplete,
            need_cleanup=need_cleanup,
            lock_statuses=MappingProxyType(lock_statuses),
        )

    def _lock_status(self, record: RawStatusRecord) -> LockStatus | None:
        flags = record.wc_status
        status = flags.lock_status
        if status is None:
            return None
        if (
            status == LockStatus.K
            and flags.has_lock_token
            and self._username is not None
            and flags.lock_owner is not None
            and flags.lock_owner != self._username
        ):
            return LockStatus.T
        return status

    def _to_resource(
        self,
        record: RawStatusRecord,
        *,
        lock_status: LockStatus | None,
        property_changes: Sequence[PropertyChange],
        state: LocalState | None,
    ) -> TrackedResource:
        flags = record.wc_status

        kind = record.kind
        if kind is None and state is not None:
            kind = state.kind
        if kind is None:
            kind = NodeKind.FILE

        local_file_exists: bool | None = None
        if record.status == Status.DELETED:
            local_file_exists = state.exists if state is not None else False

        return TrackedResource(
            resource_path=resolve_record_path(self._root, record.path),
            status=record.status,
            rename_source_path=(
                resolve_record_path(self._root, record.rename)
                if record.rename
                else None
            ),
            props=record.props,
            locked=flags.locked,
            lock_owner=flags.lock_owner,
            has_lock_token=flags.has_lock_token,
            lock_status=lock_status,
            changelist=record.changelist,
            kind=kind,
            local_file_exists=local_file_exists,
            renamed_and_modified=bool(record.rename) and record.content_modified,
            property_changes=tuple(property_changes),
        )
