"""Default configuration values.

DEFAULT_CONFIG is a plain dict so it can be passed straight to deep_merge,
which copies it.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "source_control": {
        "combine_external_if_same_server": False,
        "hide_unversioned": False,
        "ignore": [],
        "ignore_on_status_count": [],
        "count_unversioned": False,
        "files_exclude": {},
        "fingerprint": "content",
        "recreate_trailing_groups": False,
    },
}
