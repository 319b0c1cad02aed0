"""Unit tests for configuration loading helpers."""

from pathlib import Path

import pytest
from pyfakefs.fake_filesystem import FakeFilesystem

from wcstatus.config import deep_merge, parse_env_vars, read_toml_file, set_nested_key
from wcstatus.exceptions import ConfigLoadError


class TestReadTomlFile:
    def test_reads_file(self, fs: FakeFilesystem) -> None:
        _ = fs.create_file(
            "/cfg/wcstatus.toml",
            contents='[source_control]\nignore = ["*.tmp"]\n',
        )

        data = read_toml_file(Path("/cfg/wcstatus.toml"))

        assert data == {"source_control": {"ignore": ["*.tmp"]}}

    def test_parse_error_has_location(self, fs: FakeFilesystem) -> None:
        _ = fs.create_file("/cfg/bad.toml", contents="[source_control\n")

        with pytest.raises(ConfigLoadError) as exc_info:
            _ = read_toml_file(Path("/cfg/bad.toml"))

        assert exc_info.value.path == Path("/cfg/bad.toml")
        assert "Failed to parse TOML file" in str(exc_info.value)

    def test_missing_file(self, fs: FakeFilesystem) -> None:
        with pytest.raises(FileNotFoundError):
            _ = read_toml_file(Path("/cfg/missing.toml"))


class TestDeepMerge:
    def test_nested_dicts_merged(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        override = {"a": {"y": 3}}

        assert deep_merge(base, override) == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_lists_replaced(self) -> None:
        assert deep_merge({"a": [1, 2]}, {"a": [3]}) == {"a": [3]}

    def test_inputs_not_modified(self) -> None:
        base = {"a": {"x": [1]}}
        merged = deep_merge(base, {})

        merged["a"]["x"].append(2)

        assert base == {"a": {"x": [1]}}


class TestParseEnvVars:
    def test_sectioned_keys(self) -> None:
        environ = {
            "WCSTATUS_SOURCE_CONTROL__HIDE_UNVERSIONED": "true",
            "WCSTATUS_SOURCE_CONTROL__IGNORE": '["*.o", "*.a"]',
            "WCSTATUS_LOGGING__LEVEL": "debug",
            "OTHER_VAR": "x",
        }

        assert parse_env_vars(environ=environ) == {
            "source_control": {"hide_unversioned": True, "ignore": ["*.o", "*.a"]},
            "logging": {"level": "debug"},
        }

    def test_section_less_variables_skipped(self) -> None:
        environ = {"WCSTATUS_DEBUG": "1", "WCSTATUS_LOG_LEVEL": "debug"}

        assert parse_env_vars(environ=environ) == {}

    def test_integer_and_invalid_json(self) -> None:
        environ = {
            "WCSTATUS_A__N": "42",
            "WCSTATUS_A__S": "[not json",
        }

        assert parse_env_vars(environ=environ) == {"a": {"n": 42, "s": "[not json"}}


class TestSetNestedKey:
    def test_creates_intermediate(self) -> None:
        d: dict[str, object] = {}
        set_nested_key(d, "a.b.c", 1)
        assert d == {"a": {"b": {"c": 1}}}

    def test_replaces_scalar_intermediate(self) -> None:
        d: dict[str, object] = {"a": 1}
        set_nested_key(d, "a.b", 2)
        assert d == {"a": {"b": 2}}
