"""Unit tests for external mount separation."""

from wcstatus.status import RawStatusRecord, separate_externals


def _record(path: str, status: str = "modified", **kwargs: object) -> RawStatusRecord:
    return RawStatusRecord(path=path, status=status, **kwargs)  # pyright: ignore[reportArgumentType]


class TestSeparateExternals:
    def test_no_externals_keeps_everything_in_order(self) -> None:
        records = [_record("b.txt"), _record("a.txt")]

        split = separate_externals(records)

        assert split.external == ()
        assert [r.path for r in split.repository] == ["b.txt", "a.txt"]

    def test_mount_and_descendants_removed(self) -> None:
        records = [
            _record("lib", "external"),
            _record("lib/a.c"),
            _record("lib/sub/b.c"),
            _record("library.txt"),
            _record("src/main.c"),
        ]

        split = separate_externals(records)

        assert [r.path for r in split.external] == ["lib"]
        assert [r.path for r in split.repository] == ["library.txt", "src/main.c"]

    def test_combine_same_upstream_keeps_descendants(self) -> None:
        records = [
            _record("own", "external", repository_uuid="uuid-1"),
            _record("own/a.c"),
            _record("foreign", "external", repository_uuid="uuid-2"),
            _record("foreign/b.c"),
        ]

        split = separate_externals(
            records, combine_external=True, upstream_identity="uuid-1"
        )

        assert [r.path for r in split.external] == ["foreign"]
        assert [r.path for r in split.repository] == ["own/a.c"]

    def test_combine_without_identity_keeps_all_externals_foreign(self) -> None:
        records = [
            _record("own", "external", repository_uuid="uuid-1"),
            _record("own/a.c"),
        ]

        split = separate_externals(records, combine_external=True)

        assert [r.path for r in split.external] == ["own"]
        assert split.repository == ()

    def test_mixed_separators(self) -> None:
        records = [_record("vendor/lib", "external"), _record("vendor\\lib\\x.c")]

        split = separate_externals(records)

        assert split.repository == ()
