# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Status models.

This module defines the raw status records received from the version-control
collaborator and the tracked resources produced by classification.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from wcstatus.enums import LockStatus, NodeKind, PropStatus, Status

_QUIET_STATUSES: frozenset[str] = frozenset({Status.NONE, Status.NORMAL})
_QUIET_PROPS: frozenset[str] = frozenset({PropStatus.NONE, PropStatus.NORMAL})


def is_quiet_status(value: str | None) -> bool:
    """Return True for a missing, none or normal item status."""
    return not value or value in _QUIET_STATUSES


def is_quiet_props(value: str | None) -> bool:
    """Return True for a missing, none or normal property status."""
    return not value or value in _QUIET_PROPS


@dataclass(frozen=True, slots=True)
class WcFlags:
    """Working-copy flags attached to a raw status record.

    Attributes:
        wc_locked: Administrative working-copy lock (interrupted operation,
            needs cleanup). Not a user lock.
        locked: The item carries a user lock.
        switched: The item is switched to another branch.
        lock_owner: Owner of the user lock, if known.
        has_lock_token: True if this working copy holds the lock token.
        lock_status: Lock badge reported by the server check.
    """

    wc_locked: bool = False
    locked: bool = False
    switched: bool = False
    lock_owner: str | None = None
    has_lock_token: bool = False
    lock_status: LockStatus | None = None


@dataclass(frozen=True, slots=True)
class RemoteStatus:
    """Repository-side status of an item.

    Attributes:
        item: Remote item status.
        props: Remote property status.
    """

    item: str = Status.NONE
    props: str = PropStatus.NONE

    @property
    def has_content_changes(self) -> bool:
        """True when the remote side changed content or properties."""
        return not is_quiet_status(self.item) or not is_quiet_props(self.props)


@dataclass(frozen=True, slots=True)
class CommitMeta:
    """Last-commit metadata of an item."""

    revision: str
    author: str = ""
    date: str = ""


@dataclass(frozen=True, slots=True)
class RawStatusRecord:
    """One parsed status entry, relative to the working-copy root.

    Attributes:
        path: Path relative to the working-copy root ("." for the root).
        status: Item status string (see Status).
        props: Property status string (see PropStatus).
        changelist: Changelist the item belongs to, if any.
        rename: Relative path the item was copied/moved from, if any.
        wc_status: Working-copy flags.
        repos_status: Repository-side status, present only for remote checks.
        commit: Last-commit metadata.
        kind: Node kind when the tool reported it.
        repository_uuid: Upstream repository identity (externals only).
        content_modified: The copied/moved node also has local text changes.
    """

    path: str
    status: str
    props: str = PropStatus.NONE
    changelist: str | None = None
    rename: str | None = None
    wc_status: WcFlags = field(default_factory=WcFlags)
    repos_status: RemoteStatus | None = None
    commit: CommitMeta | None = None
    kind: NodeKind | None = None
    repository_uuid: str | None = None
    content_modified: bool = False

    @property
    def has_remote_status(self) -> bool:
        """True when the record carries repository-side status."""
        return self.repos_status is not None

    @property
    def in_changelist(self) -> bool:
        """True when the record belongs to a named changelist."""
        return bool(self.changelist)

    @property
    def is_external(self) -> bool:
        """True for an externally mounted subtree."""
        return self.status == Status.EXTERNAL


@dataclass(frozen=True, slots=True)
class PropertyChange:
    """A single changed property on a versioned item.

    Attributes:
        name: Property name (e.g. "svn:ignore").
        change: One of "added", "modified" or "deleted".
    """

    name: str
    change: str


@dataclass(frozen=True, slots=True)
class LockInfo:
    """Lock state of one path, collected during classification."""

    lock_status: LockStatus
    lock_owner: str | None = None
    has_lock_token: bool = False


@dataclass(frozen=True, slots=True)
class LocalState:
    """Filesystem facts about a record, probed outside the classifier.

    Attributes:
        kind: Node kind of the local item, None when it does not exist.
        exists: Whether the local item exists.
    """

    kind: NodeKind | None = None
    exists: bool = True


_LETTERS: Mapping[str, str] = MappingProxyType(
    {
        Status.ADDED: "A",
        Status.CONFLICTED: "C",
        Status.DELETED: "D",
        Status.EXTERNAL: "E",
        Status.IGNORED: "I",
        Status.MODIFIED: "M",
        Status.REPLACED: "R",
        Status.UNVERSIONED: "U",
        Status.MISSING: "!",
    }
)


@dataclass(frozen=True, slots=True)
class TrackedResource:
    """Classification outcome for one path.

    Instances are created fresh on every classification pass and are never
    mutated; a newer pass supersedes them.

    Attributes:
        resource_path: Absolute path of the item.
        status: Classification (see Status).
        rename_source_path: Absolute path the item was renamed from.
        props: Property status.
        remote: True for a repository-side shadow entity.
        locked: The item carries a user lock.
        lock_owner: Owner of the user lock.
        has_lock_token: True if this working copy holds the lock token.
        lock_status: Lock badge (K/O/B/T).
        changelist: Changelist name, if any.
        kind: Node kind.
        local_file_exists: For deletions, whether the file is still on disk
            (an untrack that kept the local copy).
        renamed_and_modified: The rename target also has content changes.
        property_changes: Discrete property changes, if fetched.
    """

    resource_path: Path
    status: str
    rename_source_path: Path | None = None
    props: str | None = None
    remote: bool = False
    locked: bool = False
    lock_owner: str | None = None
    has_lock_token: bool = False
    lock_status: LockStatus | None = None
    changelist: str | None = None
    kind: NodeKind | None = None
    local_file_exists: bool | None = None
    renamed_and_modified: bool = False
    property_changes: tuple[PropertyChange, ...] = ()

    @property
    def is_rename(self) -> bool:
        """True for an Added/Replaced item that has a rename source."""
        return self.rename_source_path is not None and self.status in (
            Status.ADDED,
            Status.REPLACED,
        )

    @property
    def letter(self) -> str | None:
        """Single-letter status badge."""
        if self.status == Status.ADDED and self.rename_source_path is not None:
            return "R"
        return _LETTERS.get(self.status)

    @property
    def priority(self) -> int:
        """Decoration priority, higher wins when several apply."""
        if self.status == Status.MODIFIED:
            return 2
        if self.status == Status.IGNORED:
            return 3
        if self.status in (
            Status.DELETED,
            Status.ADDED,
            Status.REPLACED,
            Status.MISSING,
        ):
            return 4
        return 1


def _empty_changelists() -> Mapping[str, tuple[TrackedResource, ...]]:
    return MappingProxyType({})


def _empty_locks() -> Mapping[str, LockInfo]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class CategorizedStatus:
    """Output of one classification pass.

    Attributes:
        changes: Versioned changes outside any changelist.
        conflicts: Conflicted items.
        unversioned: Unversioned items that survived filtering.
        changelists: Items per changelist name, in first-seen order.
        remote_changes: Repository-side shadow entities.
        ignored: Ignored items.
        is_incomplete: The tree is incomplete or contains switched items.
        need_cleanup: The root carries an administrative lock.
        lock_statuses: Lock state per relative path.
    """

    changes: tuple[TrackedResource, ...] = ()
    conflicts: tuple[TrackedResource, ...] = ()
    unversioned: tuple[TrackedResource, ...] = ()
    changelists: Mapping[str, tuple[TrackedResource, ...]] = field(
        default_factory=_empty_changelists
    )
    remote_changes: tuple[TrackedResource, ...] = ()
    ignored: tuple[TrackedResource, ...] = ()
    is_incomplete: bool = False
    need_cleanup: bool = False
    lock_statuses: Mapping[str, LockInfo] = field(default_factory=_empty_locks)


@dataclass(frozen=True, slots=True)
class StatusResult:
    """Classification output together with the external mounts found.

    Attributes:
        categorized: The classification pass output.
        status_external: External mount records kept as foreign.
    """

    categorized: CategorizedStatus
    status_external: tuple[RawStatusRecord, ...] = ()
