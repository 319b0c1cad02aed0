"""Resource groups and the flat resource index.

Example:
    >>> from wcstatus.config import SourceControlConfiguration
    >>> from wcstatus.groups import ResourceIndexManager
    >>> from wcstatus.status import CategorizedStatus
    >>> manager = ResourceIndexManager()
    >>> manager.update_groups(CategorizedStatus(), SourceControlConfiguration())
    0
"""

from wcstatus.groups._fingerprint import (
    content_fingerprint,
    counts_fingerprint,
    fingerprint,
)
from wcstatus.groups._manager import (
    CHANGELIST_BASE_ORDER,
    CHANGES_ORDER,
    CONFLICTS_ORDER,
    REMOTE_CHANGES_ORDER,
    STAGED_ORDER,
    UNVERSIONED_ORDER,
    ResourceIndexManager,
)
from wcstatus.groups._models import GroupObserver, ResourceGroup
from wcstatus.groups._staging import STAGING_CHANGELIST, StagingService

__all__ = [
    "CHANGELIST_BASE_ORDER",
    "CHANGES_ORDER",
    "CONFLICTS_ORDER",
    "REMOTE_CHANGES_ORDER",
    "STAGED_ORDER",
    "STAGING_CHANGELIST",
    "UNVERSIONED_ORDER",
    "GroupObserver",
    "ResourceGroup",
    "ResourceIndexManager",
    "StagingService",
    "content_fingerprint",
    "counts_fingerprint",
    "fingerprint",
]
