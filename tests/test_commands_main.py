"""Tests for top-level CLI main() dispatch and error/abort handling."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import click
import pytest

from aig_generator.cli import commands


class TestCommandsMainAbortHandling:
    """Ensure Ctrl-C style aborts produce friendly output without traceback."""

    def test_main_handles_click_abort_with_friendly_message(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """click.Abort should return 130 and print a friendly cancellation message."""
        with patch("sys.argv", ["aig", "import", "."]), patch.object(
            commands._click_cli,
            "main",
            side_effect=click.Abort(),
        ):
            result = commands.main()

        assert result == 130
        assert "Cancelled by user" in capsys.readouterr().out

    def test_main_handles_click_exception(
        self,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        exc = click.ClickException("boom")
        with patch("sys.argv", ["aig", "import", "."]), patch.object(
            commands._click_cli,
            "main",
            side_effect=exc,
        ):
            result = commands.main()

        assert result == exc.exit_code
        assert "Error: boom" in capsys.readouterr().err


class TestCommandsMainDispatch:
    """Exit codes of real generation runs through main()."""

    def test_no_args_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("sys.argv", ["aig"]):
            result = commands.main()

        assert result == 0
        assert "aig <command>" in capsys.readouterr().out

    def test_import_success_returns_zero(self, tmp_path: Path) -> None:
        (tmp_path / "foo.js").write_text("")

        with patch("sys.argv", ["aig", "import", str(tmp_path)]):
            result = commands.main()

        assert result == 0
        assert (tmp_path / "index.js").read_text() == (
            "import foo from './foo.js';\n\nexport {\n  foo\n};\n"
        )

    def test_failure_returns_one_with_single_report(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / ".aigrc").write_text("{broken")

        with patch("sys.argv", ["aig", "require", str(tmp_path)]):
            result = commands.main()

        assert result == 1
        out = capsys.readouterr().out
        assert out.count("aig-generator: ") == 1
        assert "invalid JSON" in out
        assert not (tmp_path / "index.js").exists()

    def test_dry_run_keeps_warnings_out_of_printed_content(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "a").mkdir()
        (tmp_path / "foo.js").write_text("")
        try:
            os.symlink(tmp_path, tmp_path / "a" / "loop", target_is_directory=True)
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")

        with patch("sys.argv", ["aig", "import", str(tmp_path), "--dry-run"]):
            result = commands.main()

        assert result == 0
        captured = capsys.readouterr()
        assert "import foo from './foo.js';" in captured.out
        assert "cycle" not in captured.out
        assert "directory cycle detected" in captured.err

    def test_unknown_command_is_usage_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("sys.argv", ["aig", "export"]):
            result = commands.main()

        assert result == 2
        assert "No such command" in capsys.readouterr().err


class TestOptionMapping:
    """CLI flags -> runcom options and settings."""

    def test_only_given_flags_become_options(self) -> None:
        flags = {
            "index": None,
            "recursive": False,
            "sub_dir": None,
            "inherit": True,
            "default_export": None,
            "namespace": True,
            "class_naming": None,
        }

        options = commands.build_runcom_options(flags, ("*.spec.js",), ())

        assert options == {
            "recursive": False,
            "inherit": True,
            "*": True,
            "ignore": ["*.spec.js"],
        }

    def test_settings_flags_override_file(self, tmp_path: Path) -> None:
        settings_file = tmp_path / "s.yaml"
        settings_file.write_text("tab_length: 8\nquotes: double\n")

        settings = commands.resolve_settings(
            settings_file,
            {"eol": "crlf", "quotes": None, "semicolon": False, "tab_length": None, "open": None},
        )

        assert settings.eol == "\r\n"
        assert settings.quotes == '"'
        assert settings.semicolon is False
        assert settings.tab_length == 8
