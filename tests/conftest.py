"""Shared fixtures and helpers for the index generator test suite.

Provides a ``make_tree`` factory that lays out a directory tree from a
nested dict, and isolates every test from the developer's own settings
files and terminal colors.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from aig_generator.helpers.settings import DEFAULT_SETTINGS, GlobalSettings

# Nested layout: file name -> content (str) or subdirectory (dict)
TreeSpec = dict[str, Any]


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[None]:
    """Run each test from tmp_path with no settings file and no colors."""
    monkeypatch.delenv("AIG_SETTINGS", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")

    original_cwd = Path.cwd()
    os.chdir(tmp_path)
    with patch(
        "aig_generator.helpers.settings.USER_SETTINGS_FILE",
        tmp_path / "no-such-home" / "settings.yaml",
    ):
        try:
            yield
        finally:
            os.chdir(original_cwd)


# ---------------------------------------------------------------------------
# Tree builders
# ---------------------------------------------------------------------------


def _write_tree(root: Path, spec: TreeSpec) -> None:
    for name, content in spec.items():
        path = root / name
        if isinstance(content, dict):
            path.mkdir(parents=True, exist_ok=True)
            _write_tree(path, content)
        else:
            path.write_text(content, encoding="utf-8")


@pytest.fixture()
def make_tree(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a project directory from a nested dict.

    Usage::

        root = make_tree({"foo.js": "", "utils": {"helper.js": ""}})
    """

    def _make(spec: TreeSpec, name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        _write_tree(root, spec)
        return root

    return _make


@pytest.fixture()
def settings() -> GlobalSettings:
    """Built-in default settings (LF, single quotes, semicolons, 2 spaces)."""
    return DEFAULT_SETTINGS
