"""wcstatus: working-copy status classification and resource groups.

The engine turns raw status records into grouped resources (Staged,
Changes, Conflicts, changelists, Unversioned, Remote Changes), keeps a flat
path index over them, and expands selections into commit path lists.

Example:
    >>> from pathlib import Path
    >>> from wcstatus import StaticConfigProvider, WorkingCopy
    >>> from wcstatus.status import FakeStatusSource, RawStatusRecord
    >>> source = FakeStatusSource(
    ...     records=[RawStatusRecord(path="a.txt", status="modified")]
    ... )
    >>> wc = WorkingCopy(
    ...     source, workspace_root=Path("/wc"), config_provider=StaticConfigProvider()
    ... )
    >>> wc.refresh()
    1
"""

from wcstatus.commit import CommitPathExpander, CommitPaths
from wcstatus.config import (
    Config,
    ConfigProvider,
    FileConfigProvider,
    SourceControlConfiguration,
    StaticConfigProvider,
)
from wcstatus.enums import (
    FingerprintStrategy,
    GroupKind,
    LockStatus,
    NodeKind,
    PropStatus,
    Status,
)
from wcstatus.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
    GroupDisposedError,
    StatusSourceError,
    WcStatusError,
)
from wcstatus.groups import ResourceGroup, ResourceIndexManager
from wcstatus.status import (
    CategorizedStatus,
    RawStatusRecord,
    StatusCategorizer,
    StatusService,
    StatusSource,
    TrackedResource,
)
from wcstatus.working_copy import WorkingCopy

__all__ = [
    "CategorizedStatus",
    "CommitPathExpander",
    "CommitPaths",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigProvider",
    "ConfigValidationError",
    "FileConfigProvider",
    "FingerprintStrategy",
    "GroupDisposedError",
    "GroupKind",
    "LockStatus",
    "NodeKind",
    "PropStatus",
    "RawStatusRecord",
    "ResourceGroup",
    "ResourceIndexManager",
    "SourceControlConfiguration",
    "StaticConfigProvider",
    "Status",
    "StatusCategorizer",
    "StatusService",
    "StatusSource",
    "StatusSourceError",
    "TrackedResource",
    "WcStatusError",
    "WorkingCopy",
]
