"""Unit tests for WorkingCopy."""

import threading
from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from wcstatus import WorkingCopy
from wcstatus.config import Config, StaticConfigProvider
from wcstatus.enums import LockStatus, Status
from wcstatus.exceptions import StatusSourceError
from wcstatus.status import FakeStatusSource, RawStatusRecord, RemoteStatus, WcFlags
from wcstatus.utils import get_null_logger

ROOT = Path("/wc")


class _Clock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _working_copy(
    source: FakeStatusSource,
    *,
    clock: _Clock | None = None,
    config: Config | None = None,
) -> WorkingCopy:
    return WorkingCopy(
        source,
        workspace_root=ROOT,
        config_provider=StaticConfigProvider(config),
        logger=get_null_logger(),
        clock=clock or _Clock(),
    )


class TestRefresh:
    def test_refresh_applies_pass(self) -> None:
        source = FakeStatusSource(
            records=[
                RawStatusRecord(path="x.txt", status="modified"),
                RawStatusRecord(path="y.txt", status="added", changelist="feat"),
                RawStatusRecord(path="z.txt", status="unversioned"),
            ]
        )
        wc = _working_copy(source)

        assert wc.refresh() == 2
        assert wc.count == 2
        assert wc.get_resource_from_file("/wc/z.txt") is not None
        assert len(wc.get_resource_map()) == 3

    def test_refresh_throttled_within_interval(self) -> None:
        clock = _Clock()
        source = FakeStatusSource()
        wc = _working_copy(source, clock=clock)

        assert wc.refresh() == 0
        clock.now += 1.0
        assert wc.refresh() is None
        assert len(source.queries) == 1

        clock.now += 1.5
        assert wc.refresh() == 0
        assert len(source.queries) == 2

    def test_force_ignores_interval(self) -> None:
        source = FakeStatusSource()
        wc = _working_copy(source)

        _ = wc.refresh()
        _ = wc.refresh(force=True)

        assert len(source.queries) == 2

    def test_remote_check_forwarded(self) -> None:
        source = FakeStatusSource(
            records=[
                RawStatusRecord(
                    path="a.txt",
                    status="normal",
                    repos_status=RemoteStatus(item="modified"),
                )
            ]
        )
        wc = _working_copy(source)

        _ = wc.refresh(check_remote_changes=True)

        assert source.queries[0].check_remote_changes is True
        assert wc.remote_changed_files == 1

    def test_failure_keeps_previous_state(self) -> None:
        source = FakeStatusSource(
            records=[RawStatusRecord(path="a.txt", status="modified")]
        )
        wc = _working_copy(source)
        _ = wc.refresh()

        source.error = RuntimeError("boom")
        with pytest.raises(StatusSourceError):
            _ = wc.refresh(force=True)

        assert wc.get_resource_from_file("/wc/a.txt") is not None
        assert wc.count == 1

    def test_failed_refresh_is_not_throttled(self) -> None:
        source = FakeStatusSource(error=RuntimeError("boom"))
        wc = _working_copy(source)
        with pytest.raises(StatusSourceError):
            _ = wc.refresh()

        source.error = None

        assert wc.refresh() == 0

    def test_concurrent_refreshes_serialized(self) -> None:
        source = FakeStatusSource(
            records=[RawStatusRecord(path="a.txt", status="modified")]
        )
        wc = _working_copy(source)
        results: list[int | None] = []

        threads = [
            threading.Thread(target=lambda: results.append(wc.refresh()))
            for _ in range(4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert [r for r in results if r is not None] == [1]
        assert results.count(None) == 3
        assert len(source.queries) == 1


class TestSideResults:
    def test_flags_and_side_lists(self) -> None:
        source = FakeStatusSource(
            user="alice",
            records=[
                RawStatusRecord(
                    path=".", status="incomplete", wc_status=WcFlags(wc_locked=True)
                ),
                RawStatusRecord(path="ext", status="external"),
                RawStatusRecord(path="i.tmp", status="ignored"),
                RawStatusRecord(
                    path="l.txt",
                    status="normal",
                    wc_status=WcFlags(lock_status=LockStatus.O, lock_owner="bob"),
                ),
            ],
        )
        wc = _working_copy(source)

        _ = wc.refresh()

        assert wc.is_incomplete is True
        assert wc.need_cleanup is True
        assert [r.path for r in wc.status_external] == ["ext"]
        assert [r.status for r in wc.ignored] == [Status.IGNORED]
        assert wc.lock_statuses["l.txt"].lock_owner == "bob"

    def test_defaults_before_first_refresh(self) -> None:
        wc = _working_copy(FakeStatusSource())

        assert wc.is_incomplete is False
        assert wc.status_external == ()
        assert wc.remote_changed_files == 0
        assert wc.workspace_root == ROOT


class TestCommitPaths:
    def test_rename_and_added_parent(self) -> None:
        source = FakeStatusSource(
            records=[
                RawStatusRecord(path="pkg", status="added"),
                RawStatusRecord(path="pkg/new.py", status="added", rename="old.py"),
                RawStatusRecord(path="old.py", status="deleted"),
            ]
        )
        wc = _working_copy(source)
        _ = wc.refresh()
        renamed = wc.get_resource_from_file("/wc/pkg/new.py")
        assert renamed is not None

        assert wc.commit_paths([renamed]) == ["/wc/pkg/new.py", "/wc/pkg", "/wc/old.py"]


class TestDispose:
    def test_dispose_idempotent(self) -> None:
        wc = _working_copy(FakeStatusSource())
        _ = wc.refresh()

        wc.dispose()
        wc.dispose()

        assert wc.groups.disposed is True
        assert wc.get_resource_map() == {}


class TestLoggerFromConfig:
    def test_logs_to_configured_file(
        self, fs: FakeFilesystem, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("WCSTATUS_DEBUG", raising=False)
        config = Config.from_dict(
            {"logging": {"level": "debug", "file": "/logs/wcstatus.log"}}
        )
        wc = WorkingCopy(
            FakeStatusSource(),
            workspace_root=ROOT,
            config_provider=StaticConfigProvider(config),
        )

        _ = wc.refresh()

        content = Path("/logs/wcstatus.log").read_text()
        assert '"event": "refresh_completed"' in content
        assert '"workspace_root": "/wc"' in content
