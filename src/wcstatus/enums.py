"""Enumeration types for wcstatus."""

from enum import StrEnum


class Status(StrEnum):
    """Working-copy item status as reported by the version-control tool."""

    ADDED = "added"
    CONFLICTED = "conflicted"
    DELETED = "deleted"
    EXTERNAL = "external"
    IGNORED = "ignored"
    INCOMPLETE = "incomplete"
    MERGED = "merged"
    MISSING = "missing"
    MODIFIED = "modified"
    NONE = "none"
    NORMAL = "normal"
    OBSTRUCTED = "obstructed"
    REPLACED = "replaced"
    UNVERSIONED = "unversioned"


class PropStatus(StrEnum):
    """Property status of a working-copy item."""

    CONFLICTED = "conflicted"
    MODIFIED = "modified"
    NONE = "none"
    NORMAL = "normal"


class LockStatus(StrEnum):
    """Lock badge reported by a status check against the server.

    K is held by this working copy, O by another one. B means our token is
    stale and the server holds no lock, T means someone else took it.
    """

    K = "K"
    O = "O"  # noqa: E741
    B = "B"
    T = "T"


class NodeKind(StrEnum):
    """Node kind of a working-copy item."""

    FILE = "file"
    DIR = "dir"


class GroupKind(StrEnum):
    """Kinds of resource groups exposed to the presentation layer."""

    STAGED = "staged"
    CHANGES = "changes"
    CONFLICTS = "conflicts"
    CHANGELIST = "changelist"
    UNVERSIONED = "unversioned"
    REMOTE_CHANGES = "remote_changes"


class FingerprintStrategy(StrEnum):
    """How the index manager decides whether a rebuild is needed."""

    CONTENT = "content"
    COUNTS = "counts"
