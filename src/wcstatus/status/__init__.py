"""Status classification.

This package turns the raw status records reported by the version-control
collaborator into grouped, immutable TrackedResource values.

Example:
    >>> from pathlib import Path
    >>> from wcstatus.config import SourceControlConfiguration
    >>> from wcstatus.status import RawStatusRecord, StatusCategorizer
    >>> categorizer = StatusCategorizer(Path("/wc"))
    >>> result = categorizer.categorize(
    ...     [RawStatusRecord(path="a.txt", status="unversioned")],
    ...     SourceControlConfiguration(),
    ... )
    >>> len(result.unversioned)
    1
"""

from wcstatus.status._categorizer import (
    StatusCategorizer,
    conflict_byproduct_base,
    is_skippable,
)
from wcstatus.status._externals import ExternalSplit, separate_externals
from wcstatus.status._fake import FakeStatusSource
from wcstatus.status._matching import PatternMatcher, build_exclude_list, get_matcher
from wcstatus.status._models import (
    CategorizedStatus,
    CommitMeta,
    LocalState,
    LockInfo,
    PropertyChange,
    RawStatusRecord,
    RemoteStatus,
    StatusResult,
    TrackedResource,
    WcFlags,
    is_quiet_props,
    is_quiet_status,
)
from wcstatus.status._paths import (
    is_descendant,
    normalize_path,
    resolve_record_path,
    to_posix,
)
from wcstatus.status._protocol import StatusQuery, StatusSource
from wcstatus.status._service import StatusService

__all__ = [
    "CategorizedStatus",
    "CommitMeta",
    "ExternalSplit",
    "FakeStatusSource",
    "LocalState",
    "LockInfo",
    "PatternMatcher",
    "PropertyChange",
    "RawStatusRecord",
    "RemoteStatus",
    "StatusCategorizer",
    "StatusQuery",
    "StatusResult",
    "StatusService",
    "StatusSource",
    "TrackedResource",
    "WcFlags",
    "build_exclude_list",
    "conflict_byproduct_base",
    "get_matcher",
    "is_descendant",
    "is_quiet_props",
    "is_quiet_status",
    "normalize_path",
    "resolve_record_path",
    "separate_externals",
    "to_posix",
]
