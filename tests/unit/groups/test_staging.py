"""Unit tests for StagingService."""

from pathlib import Path

from wcstatus.groups import STAGING_CHANGELIST, StagingService


class TestStagingService:
    def test_reserved_changelist_name(self) -> None:
        assert STAGING_CHANGELIST == "__staged__"

    def test_sync_replaces_cache(self) -> None:
        staging = StagingService()

        staging.sync_from_changelist(["/wc/a.txt", "/wc/b.txt"])
        staging.sync_from_changelist([Path("/wc/c.txt")])

        assert staging.staged_count == 1
        assert staging.is_staged("/wc/c.txt") is True
        assert staging.is_staged("/wc/a.txt") is False

    def test_lookup_is_normalized(self) -> None:
        staging = StagingService()
        staging.sync_from_changelist(["/wc/dir/a.txt"])

        assert staging.is_staged("/wc/dir/../dir/./a.txt") is True
        assert staging.is_staged(Path("/wc/dir/a.txt")) is True

    def test_clear(self) -> None:
        staging = StagingService()
        staging.sync_from_changelist(["/wc/a.txt"])

        staging.clear()

        assert staging.staged_paths == frozenset()
