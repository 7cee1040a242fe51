"""Tests for run configuration (runcom) resolution.

Covers:
- Built-in defaults and self-exclusion of the index file
- .aigrc parsing, validation and precedence over options/inherited config
- ConfigParseError for malformed files
- child_overrides inheritance record
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from aig_generator.core.errors import ConfigParseError
from aig_generator.core.runcom import (
    AIGRC_FILE_NAME,
    RunConfig,
    read_aigrc,
    resolve_runcom,
    validate_overrides,
)


def _write_aigrc(directory: Path, data: object) -> None:
    (directory / AIGRC_FILE_NAME).write_text(json.dumps(data), encoding="utf-8")


class TestDefaults:
    """Resolution without any .aigrc."""

    def test_defaults(self, tmp_path: Path) -> None:
        runcom = resolve_runcom(tmp_path)

        assert runcom == RunConfig()
        assert runcom.index_file_name == "index.js"
        assert runcom.recursive is True
        assert runcom.include_subdirectory_modules is False
        assert runcom.inherit_config_to_children is False
        assert runcom.force_class_naming is False
        assert runcom.use_default_export is False
        assert runcom.use_namespace_import is False
        assert runcom.keep_names == frozenset()

    def test_index_file_is_always_ignored(self, tmp_path: Path) -> None:
        assert resolve_runcom(tmp_path).ignore_patterns == ("index.js",)


class TestAigrc:
    """Directory-local override file."""

    def test_all_keys_are_applied(self, tmp_path: Path) -> None:
        _write_aigrc(tmp_path, {
            "index": "barrel.js",
            "ignore": ["*.spec.js"],
            "keep": ["API.js"],
            "default": True,
            "*": True,
            "class": True,
            "recursive": False,
            "subDir": True,
            "inherit": True,
        })

        runcom = resolve_runcom(tmp_path)

        assert runcom.index_file_name == "barrel.js"
        assert runcom.ignore_patterns == ("*.spec.js", "barrel.js")
        assert runcom.keep_names == frozenset({"API.js"})
        assert runcom.use_default_export is True
        assert runcom.use_namespace_import is True
        assert runcom.force_class_naming is True
        assert runcom.recursive is False
        assert runcom.include_subdirectory_modules is True
        assert runcom.inherit_config_to_children is True

    def test_unknown_keys_are_ignored(self, tmp_path: Path) -> None:
        _write_aigrc(tmp_path, {"colour": "blue", "default": True})

        assert read_aigrc(tmp_path) == {"default": True}

    def test_missing_file_yields_empty_record(self, tmp_path: Path) -> None:
        assert read_aigrc(tmp_path) == {}

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        (tmp_path / AIGRC_FILE_NAME).write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigParseError) as exc_info:
            resolve_runcom(tmp_path)

        assert exc_info.value.path == tmp_path / AIGRC_FILE_NAME
        assert "invalid JSON" in str(exc_info.value)

    def test_non_object_json_raises(self, tmp_path: Path) -> None:
        _write_aigrc(tmp_path, ["index.js"])

        with pytest.raises(ConfigParseError, match="JSON object"):
            resolve_runcom(tmp_path)

    @pytest.mark.parametrize(
        "data",
        [
            {"index": ""},
            {"index": 3},
            {"ignore": "*.md"},
            {"keep": [1, 2]},
            {"default": "yes"},
            {"recursive": 0},
        ],
    )
    def test_wrong_value_types_raise(self, tmp_path: Path, data: dict[str, object]) -> None:
        _write_aigrc(tmp_path, data)

        with pytest.raises(ConfigParseError) as exc_info:
            resolve_runcom(tmp_path)

        assert exc_info.value.path == tmp_path / AIGRC_FILE_NAME


class TestPrecedence:
    """defaults < options < inherited < local."""

    def test_options_override_defaults(self, tmp_path: Path) -> None:
        runcom = resolve_runcom(tmp_path, options={"class": True, "index": "all.js"})

        assert runcom.force_class_naming is True
        assert runcom.ignore_patterns == ("all.js",)

    def test_inherited_overrides_options(self, tmp_path: Path) -> None:
        runcom = resolve_runcom(
            tmp_path,
            inherited_overrides={"class": False},
            options={"class": True},
        )

        assert runcom.force_class_naming is False

    def test_local_overrides_inherited(self, tmp_path: Path) -> None:
        _write_aigrc(tmp_path, {"default": False, "index": "local.js"})

        runcom = resolve_runcom(
            tmp_path,
            inherited_overrides={"default": True, "index": "parent.js", "*": True},
        )

        assert runcom.use_default_export is False
        assert runcom.use_namespace_import is True
        assert runcom.index_file_name == "local.js"
        assert runcom.ignore_patterns == ("local.js",)

    def test_options_are_validated(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigParseError):
            resolve_runcom(tmp_path, options={"subDir": "yes"})


class TestChildOverrides:
    """Record handed down to subdirectories."""

    def test_empty_without_inherit(self, tmp_path: Path) -> None:
        _write_aigrc(tmp_path, {"class": True})

        assert resolve_runcom(tmp_path).child_overrides == {}

    def test_contains_inherited_and_local_keys(self, tmp_path: Path) -> None:
        _write_aigrc(tmp_path, {"inherit": True, "class": True})

        runcom = resolve_runcom(tmp_path, inherited_overrides={"keep": ["A.js"]})

        assert runcom.child_overrides == {"keep": ["A.js"], "inherit": True, "class": True}

    def test_options_are_not_part_of_the_record(self, tmp_path: Path) -> None:
        runcom = resolve_runcom(tmp_path, options={"inherit": True, "default": True})

        assert runcom.inherit_config_to_children is True
        assert runcom.child_overrides == {}


def test_validate_overrides_drops_unknown_keys() -> None:
    assert validate_overrides({"x": 1, "*": True}, "test") == {"*": True}
