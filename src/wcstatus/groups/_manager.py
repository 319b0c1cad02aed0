"""Resource group reconciliation and the flat resource index."""

from collections.abc import Iterable, Mapping
from os import PathLike
from types import MappingProxyType

from structlog.typing import FilteringBoundLogger

from wcstatus.config import SourceControlConfiguration
from wcstatus.enums import FingerprintStrategy, GroupKind
from wcstatus.exceptions import GroupDisposedError
from wcstatus.groups._fingerprint import fingerprint as compute_fingerprint
from wcstatus.groups._models import GroupObserver, ResourceGroup
from wcstatus.groups._staging import STAGING_CHANGELIST, StagingService
from wcstatus.status import CategorizedStatus, TrackedResource, normalize_path
from wcstatus.utils import get_null_logger

STAGED_ORDER = 0
CHANGES_ORDER = 10
CONFLICTS_ORDER = 20
CHANGELIST_BASE_ORDER = 100
UNVERSIONED_ORDER = 1_000_000
REMOTE_CHANGES_ORDER = 1_000_001


class ResourceIndexManager:
    """Maintains the resource groups and a flat path -> resource index.

    Every status pass is applied with update_groups(). Fixed groups (Staged,
    Changes, Conflicts, Unversioned) live as long as the manager; changelist
    groups come and go with their names; Remote Changes is created on the
    first update.

    Unversioned and Remote Changes always sort after every changelist group.
    By default this is done with fixed order ranks. Hosts that order groups
    by creation time instead can enable recreate_trailing_groups, which
    disposes and recreates both groups whenever a changelist group appears or
    disappears.

    Example:
        >>> manager = ResourceIndexManager()
        >>> manager.update_groups(CategorizedStatus(), SourceControlConfiguration())
        0
        >>> [group.id for group in manager.groups]
        ['staged', 'changes', 'conflicts', 'unversioned', 'remotechanges']
    """

    def __init__(
        self,
        *,
        observer: GroupObserver | None = None,
        fingerprint: FingerprintStrategy | None = None,
        recreate_trailing_groups: bool = False,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the manager and create the fixed groups.

        Args:
            observer: Receives group creation/disposal events.
            fingerprint: Fingerprint strategy. Defaults to the strategy in
                the configuration passed to each update.
            recreate_trailing_groups: Order groups by creation sequence and
                recreate the trailing groups to keep them last.
            logger: Logger for debug output.
        """
        self._observer: GroupObserver | None = observer
        self._fingerprint_strategy: FingerprintStrategy | None = fingerprint
        self._recreate_trailing: bool = recreate_trailing_groups
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_null_logger()
        )
        self._sequence: int = 0
        self._changelist_sequence: int = 0
        self._disposed: bool = False

        self._staging: StagingService = StagingService()
        self._changelists: dict[str, ResourceGroup] = {}
        self._remote_changes: ResourceGroup | None = None
        self._prev_changelist_count: int = 0
        self._index: dict[str, TrackedResource] = {}
        self._fingerprint: str | None = None

        self._staged: ResourceGroup = self._create_group(
            "staged", "Staged for Commit", GroupKind.STAGED, STAGED_ORDER
        )
        self._changes: ResourceGroup = self._create_group(
            "changes", "Changes", GroupKind.CHANGES, CHANGES_ORDER
        )
        self._conflicts: ResourceGroup = self._create_group(
            "conflicts", "Conflicts", GroupKind.CONFLICTS, CONFLICTS_ORDER
        )
        self._unversioned: ResourceGroup = self._create_unversioned()

    # =========================================================================
    # Group accessors
    # =========================================================================

    @property
    def staged(self) -> ResourceGroup:
        """Staged for Commit group."""
        return self._staged

    @property
    def changes(self) -> ResourceGroup:
        """Changes group."""
        return self._changes

    @property
    def conflicts(self) -> ResourceGroup:
        """Conflicts group."""
        return self._conflicts

    @property
    def unversioned(self) -> ResourceGroup:
        """Unversioned group."""
        return self._unversioned

    @property
    def remote_changes(self) -> ResourceGroup | None:
        """Remote Changes group, None before the first update."""
        return self._remote_changes

    @property
    def changelists(self) -> Mapping[str, ResourceGroup]:
        """Changelist groups by name, in creation order."""
        return MappingProxyType(self._changelists)

    @property
    def staging(self) -> StagingService:
        """Cache of staged paths."""
        return self._staging

    @property
    def groups(self) -> list[ResourceGroup]:
        """Live groups sorted for presentation."""
        groups = [
            self._staged,
            self._changes,
            self._conflicts,
            *self._changelists.values(),
            self._unversioned,
        ]
        if self._remote_changes is not None:
            groups.append(self._remote_changes)
        return sorted(
            (group for group in groups if not group.disposed),
            key=lambda group: group.order,
        )

    @property
    def disposed(self) -> bool:
        """True once dispose() has been called."""
        return self._disposed

    # =========================================================================
    # Reconciliation
    # =========================================================================

    def update_groups(
        self,
        categorized: CategorizedStatus,
        config: SourceControlConfiguration,
    ) -> int:
        """Apply a classification pass to the groups.

        Args:
            categorized: Output of the classification pass.
            config: Source control configuration of the pass.

        Returns:
            Badge count for the pass.

        Raises:
            GroupDisposedError: If the manager was disposed.
        """
        if self._disposed:
            msg = "Cannot update a disposed resource index"
            raise GroupDisposedError(msg, group_id="*")

        staged = categorized.changelists.get(STAGING_CHANGELIST, ())
        self._staging.sync_from_changelist(r.resource_path for r in staged)
        self._staged.resources = staged
        self._changes.resources = categorized.changes
        self._conflicts.resources = categorized.conflicts

        current = [
            name for name in categorized.changelists if name != STAGING_CHANGELIST
        ]
        created = False
        for name in current:
            group = self._changelists.get(name)
            if group is None:
                group = self._create_changelist(name)
                created = True
            group.resources = categorized.changelists[name]

        for name in [name for name in self._changelists if name not in current]:
            self._dispose_group(self._changelists.pop(name))

        count_changed = self._prev_changelist_count != len(self._changelists)
        if self._recreate_trailing and (count_changed or created):
            self._recreate_trailing_groups()
        elif self._remote_changes is None:
            self._remote_changes = self._create_remote_changes()

        self._unversioned.resources = categorized.unversioned
        if self._remote_changes is not None:
            self._remote_changes.resources = categorized.remote_changes
        self._prev_changelist_count = len(self._changelists)

        strategy = (
            self._fingerprint_strategy
            if self._fingerprint_strategy is not None
            else config.fingerprint
        )
        current_fingerprint = compute_fingerprint(categorized, strategy)
        if current_fingerprint != self._fingerprint:
            self._rebuild_index()
            self._fingerprint = current_fingerprint
            self._logger.debug(
                "resource_index_rebuilt",
                resources=len(self._index),
                strategy=str(strategy),
            )
        else:
            self._logger.debug("resource_index_unchanged", strategy=str(strategy))

        return self.count(config)

    reconcile = update_groups

    def count(self, config: SourceControlConfiguration) -> int:
        """Badge count: staged, changes, conflicts and counted changelists.

        Unversioned items are included when count_unversioned is set. Remote
        changes are never counted.
        """
        total = len(self._staged) + len(self._changes) + len(self._conflicts)
        ignored = set(config.ignore_on_status_count)
        total += sum(
            len(group)
            for name, group in self._changelists.items()
            if name not in ignored
        )
        if config.count_unversioned:
            total += len(self._unversioned)
        return total

    # =========================================================================
    # Index
    # =========================================================================

    def get_resource_from_file(
        self, path: str | PathLike[str]
    ) -> TrackedResource | None:
        """Look up the resource for an absolute path.

        Args:
            path: Absolute path, in any separator or case style the
                platform accepts.

        Returns:
            The indexed resource, or None.
        """
        return self._index.get(normalize_path(path))

    def get_resource_map(self) -> Mapping[str, TrackedResource]:
        """Read-only view of the flat index keyed by normalized path."""
        return MappingProxyType(self._index)

    def _rebuild_index(self) -> None:
        """Rebuild the flat index from the live groups.

        Local groups are indexed first. A remote shadow is only added for a
        path with no local entry, unlike a last-writer-wins rebuild where the
        shadow would replace the local resource.
        """
        index: dict[str, TrackedResource] = {}
        local_groups = [
            self._staged,
            self._changes,
            self._conflicts,
            self._unversioned,
            *self._changelists.values(),
        ]
        for group in local_groups:
            for resource in group.resources:
                index[normalize_path(resource.resource_path)] = resource
        if self._remote_changes is not None:
            for resource in self._remote_changes.resources:
                _ = index.setdefault(normalize_path(resource.resource_path), resource)
        self._index = index

    # =========================================================================
    # Optimistic staging moves
    # =========================================================================

    def move_to_staged(
        self, paths: Iterable[str | PathLike[str]]
    ) -> list[TrackedResource]:
        """Move resources into the Staged group without a status pass.

        Args:
            paths: Absolute paths to stage.

        Returns:
            The moved resources, in the order they were found.
        """
        wanted = {normalize_path(path) for path in paths}
        moved: list[TrackedResource] = []

        for group in (self._changes, *self._changelists.values()):
            moved.extend(_take(group, wanted))

        self._staged.resources = (*self._staged.resources, *moved)
        self._staging.sync_from_changelist(
            r.resource_path for r in self._staged.resources
        )
        self._logger.debug("resources_staged", moved=len(moved))
        return moved

    def move_from_staged(
        self,
        paths: Iterable[str | PathLike[str]],
        target_changelist: str | None = None,
    ) -> list[TrackedResource]:
        """Move resources out of the Staged group without a status pass.

        Args:
            paths: Absolute paths to unstage.
            target_changelist: Changelist to move them to; Changes if None.

        Returns:
            The moved resources.
        """
        wanted = {normalize_path(path) for path in paths}
        moved = _take(self._staged, wanted)

        if target_changelist:
            group = self._changelists.get(target_changelist)
            if group is None:
                group = self._create_changelist(target_changelist)
                if self._recreate_trailing:
                    self._recreate_trailing_groups()
                    self._prev_changelist_count = len(self._changelists)
            group.resources = (*group.resources, *moved)
        else:
            self._changes.resources = (*self._changes.resources, *moved)

        self._staging.sync_from_changelist(
            r.resource_path for r in self._staged.resources
        )
        self._logger.debug("resources_unstaged", moved=len(moved))
        return moved

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def clear_all(self) -> None:
        """Empty every group and drop Remote Changes.

        The index is cleared as well, so the next update rebuilds it.
        """
        for group in (
            self._staged,
            self._changes,
            self._conflicts,
            self._unversioned,
            *self._changelists.values(),
        ):
            group.resources = ()
        if self._remote_changes is not None:
            self._dispose_group(self._remote_changes)
            self._remote_changes = None
        self._staging.clear()
        self._index = {}
        self._fingerprint = None

    def dispose(self) -> None:
        """Dispose every group and clear the index. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        for group in (
            self._staged,
            self._changes,
            self._conflicts,
            *self._changelists.values(),
            self._unversioned,
        ):
            self._dispose_group(group)
        if self._remote_changes is not None:
            self._dispose_group(self._remote_changes)
            self._remote_changes = None
        self._changelists.clear()
        self._staging.clear()
        self._index = {}
        self._fingerprint = None

    def _next_order(self, fixed: int) -> int:
        self._sequence += 1
        return self._sequence if self._recreate_trailing else fixed

    def _create_group(
        self,
        group_id: str,
        label: str,
        kind: GroupKind,
        order: int,
    ) -> ResourceGroup:
        group = ResourceGroup(
            group_id,
            label,
            kind,
            order=self._next_order(order),
            hide_when_empty=True,
        )
        self._logger.debug("group_created", group=group_id, order=group.order)
        if self._observer is not None:
            self._observer.group_created(group)
        return group

    def _create_changelist(self, name: str) -> ResourceGroup:
        order = CHANGELIST_BASE_ORDER + self._changelist_sequence
        self._changelist_sequence += 1
        group = self._create_group(
            f"changelist-{name}",
            f'Changelist "{name}"',
            GroupKind.CHANGELIST,
            order,
        )
        self._changelists[name] = group
        return group

    def _create_unversioned(self) -> ResourceGroup:
        return self._create_group(
            "unversioned", "Unversioned", GroupKind.UNVERSIONED, UNVERSIONED_ORDER
        )

    def _create_remote_changes(self) -> ResourceGroup:
        return self._create_group(
            "remotechanges",
            "Remote Changes",
            GroupKind.REMOTE_CHANGES,
            REMOTE_CHANGES_ORDER,
        )

    def _recreate_trailing_groups(self) -> None:
        self._dispose_group(self._unversioned)
        self._unversioned = self._create_unversioned()

        previous = self._remote_changes.resources if self._remote_changes else ()
        if self._remote_changes is not None:
            self._dispose_group(self._remote_changes)
        self._remote_changes = self._create_remote_changes()
        self._remote_changes.resources = previous

    def _dispose_group(self, group: ResourceGroup) -> None:
        if group.disposed:
            return
        group.dispose()
        self._logger.debug("group_disposed", group=group.id)
        if self._observer is not None:
            self._observer.group_disposed(group)


def _take(group: ResourceGroup, wanted: set[str]) -> list[TrackedResource]:
    """Remove the resources whose normalized path is wanted; return them."""
    taken: list[TrackedResource] = []
    remaining: list[TrackedResource] = []
    for resource in group.resources:
        if normalize_path(resource.resource_path) in wanted:
            taken.append(resource)
        else:
            remaining.append(resource)
    if taken:
        group.resources = remaining
    return taken
