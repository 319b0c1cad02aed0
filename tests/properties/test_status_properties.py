"""Property-based tests for classification and reconciliation."""

from collections import Counter
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from wcstatus.commit import build_commit_paths
from wcstatus.config import SourceControlConfiguration
from wcstatus.enums import Status
from wcstatus.groups import ResourceIndexManager
from wcstatus.status import (
    CategorizedStatus,
    RawStatusRecord,
    StatusCategorizer,
    TrackedResource,
    normalize_path,
)

ROOT = Path("/wc")
CONFIG = SourceControlConfiguration()

# =============================================================================
# Strategies
# =============================================================================

status_values = st.sampled_from(
    [
        Status.ADDED,
        Status.CONFLICTED,
        Status.DELETED,
        Status.MISSING,
        Status.MODIFIED,
        Status.NONE,
        Status.NORMAL,
        Status.REPLACED,
        Status.UNVERSIONED,
    ]
)
props_values = st.sampled_from(["none", "normal", "modified"])
changelist_values = st.one_of(st.none(), st.sampled_from(["a", "b", "c"]))
path_segment = st.text(alphabet="abcdefgh", min_size=1, max_size=6)


@st.composite
def record_lists(draw: st.DrawFn) -> list[RawStatusRecord]:
    paths = draw(
        st.lists(
            st.lists(path_segment, min_size=1, max_size=3).map("/".join),
            unique=True,
            max_size=40,
        )
    )
    return [
        RawStatusRecord(
            path=path,
            status=draw(status_values),
            props=draw(props_values),
            changelist=draw(changelist_values),
        )
        for path in paths
    ]


def _categorize(records: list[RawStatusRecord]) -> CategorizedStatus:
    return StatusCategorizer(ROOT).categorize(records, CONFIG)


def _partition_paths(categorized: CategorizedStatus) -> list[Path]:
    resources: list[TrackedResource] = [
        *categorized.changes,
        *categorized.conflicts,
        *categorized.unversioned,
    ]
    for group in categorized.changelists.values():
        resources.extend(group)
    return [r.resource_path for r in resources]


def _is_quiet(record: RawStatusRecord) -> bool:
    return (
        record.status in (Status.NONE, Status.NORMAL)
        and record.props in ("none", "normal")
        and not record.changelist
    )


# =============================================================================
# Classification
# =============================================================================


class TestPartitionProperty:
    @given(records=record_lists())
    def test_each_materialized_path_exactly_once(
        self, records: list[RawStatusRecord]
    ) -> None:
        categorized = _categorize(records)

        counts = Counter(_partition_paths(categorized))
        expected = {ROOT / r.path for r in records if not _is_quiet(r)}

        assert set(counts) == expected
        assert all(count == 1 for count in counts.values())

    @given(records=record_lists())
    def test_group_order_follows_record_order(
        self, records: list[RawStatusRecord]
    ) -> None:
        categorized = _categorize(records)
        position = {ROOT / r.path: i for i, r in enumerate(records)}

        for group in (categorized.changes, *categorized.changelists.values()):
            indices = [position[r.resource_path] for r in group]
            assert indices == sorted(indices)


class TestSkipRuleProperty:
    @given(
        path=path_segment,
        status=st.sampled_from([Status.NONE, Status.NORMAL]),
        props=st.sampled_from(["none", "normal"]),
    )
    def test_quiet_record_produces_nothing(
        self, path: str, status: str, props: str
    ) -> None:
        record = RawStatusRecord(path=path, status=status, props=props)

        categorized = _categorize([record])

        assert _partition_paths(categorized) == []
        assert categorized.ignored == ()
        assert categorized.remote_changes == ()


# =============================================================================
# Reconciliation
# =============================================================================


class TestReconcileProperties:
    @given(records=record_lists())
    @settings(max_examples=50)
    def test_reconcile_twice_is_idempotent(
        self, records: list[RawStatusRecord]
    ) -> None:
        categorized = _categorize(records)
        manager = ResourceIndexManager()

        first_count = manager.update_groups(categorized, CONFIG)
        first = dict(manager.get_resource_map())
        second_count = manager.update_groups(categorized, CONFIG)

        assert first_count == second_count
        assert dict(manager.get_resource_map()) == first

    @given(records=record_lists())
    @settings(max_examples=50)
    def test_index_resolves_every_partition_path(
        self, records: list[RawStatusRecord]
    ) -> None:
        categorized = _categorize(records)
        manager = ResourceIndexManager()

        _ = manager.update_groups(categorized, CONFIG)

        for path in _partition_paths(categorized):
            resource = manager.get_resource_from_file(path)
            assert resource is not None
            assert resource.resource_path == path

    @given(records=record_lists(), data=st.data())
    @settings(max_examples=50)
    def test_staging_moves_keep_partition(
        self, records: list[RawStatusRecord], data: st.DataObject
    ) -> None:
        categorized = _categorize(records)
        manager = ResourceIndexManager()
        _ = manager.update_groups(categorized, CONFIG)
        candidates = [
            r.resource_path
            for group in (manager.changes, *manager.changelists.values())
            for r in group.resources
        ]
        chosen: list[Path] = []
        if candidates:
            chosen = data.draw(st.lists(st.sampled_from(candidates), unique=True))

        _ = manager.move_to_staged(chosen)
        _ = manager.move_from_staged(chosen[: len(chosen) // 2])

        groups = [
            manager.staged,
            manager.changes,
            manager.conflicts,
            manager.unversioned,
            *manager.changelists.values(),
        ]
        counts = Counter(
            normalize_path(r.resource_path) for group in groups for r in group.resources
        )
        assert all(count == 1 for count in counts.values())
        assert set(counts) == {
            normalize_path(path) for path in _partition_paths(categorized)
        }


# =============================================================================
# Commit paths
# =============================================================================


class _EmptyIndex:
    def get_resource_from_file(self, path: object) -> None:
        return None


class TestRenameExpansionProperty:
    @given(
        target=path_segment,
        source=path_segment,
        status=st.sampled_from([Status.ADDED, Status.REPLACED]),
    )
    def test_rename_contributes_exactly_two_paths(
        self, target: str, source: str, status: str
    ) -> None:
        resource = TrackedResource(
            resource_path=ROOT / "new" / target,
            status=status,
            rename_source_path=ROOT / "old" / source,
        )

        paths = build_commit_paths([resource], _EmptyIndex()).submission_paths()

        assert sorted(paths) == sorted(
            [str(ROOT / "new" / target), str(ROOT / "old" / source)]
        )
