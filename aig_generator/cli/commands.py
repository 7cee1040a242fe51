#!/usr/bin/env python3
"""Auto Index Generator CLI - Main Entry Point.

Usage:
    aig <command> [PATH] [options]

Commands:
    import     Generate index.js with `import x from './x.js'` statements
    require    Generate index.js with `const x = require('./x.js')` statements
    help       Show this help message

PATH is a directory, or a file inside the directory to index (default: .).

Per-directory options live in a `.aigrc` JSON file:
    {"index": "index.js", "ignore": [], "keep": [], "default": false,
     "*": false, "class": false, "recursive": true, "subDir": false,
     "inherit": false}

Formatting settings live in `.aig.yaml` (or $AIG_SETTINGS).
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from aig_generator import PACKAGE_NAME
from aig_generator.core.errors import IndexGeneratorError
from aig_generator.core.index_generator import (
    MODE_IMPORT,
    MODE_REQUIRE,
    build_index,
    persist_index_tree,
    resolve_target_directory,
)
from aig_generator.core.runcom import resolve_runcom
from aig_generator.helpers.helpers_logging import (
    print_dim,
    print_error,
    print_header,
    print_info,
    print_success,
)
from aig_generator.helpers.settings import (
    GlobalSettings,
    load_global_settings,
    settings_from_mapping,
)

# Minimum number of CLI args (program name + command)
_MIN_ARGS = 2
_EXIT_CANCELLED = 130

GENERATE_COMMANDS: dict[str, dict[str, str]] = {
    MODE_IMPORT: {
        "description": "Generate an index file using ES module import/export",
    },
    MODE_REQUIRE: {
        "description": "Generate an index file using require()/module.exports",
    },
}

# CLI flag name -> .aigrc key
_RUNCOM_FLAGS: dict[str, str] = {
    "index": "index",
    "recursive": "recursive",
    "sub_dir": "subDir",
    "inherit": "inherit",
    "default_export": "default",
    "namespace": "*",
    "class_naming": "class",
}

_SETTINGS_FLAGS = ("eol", "quotes", "semicolon", "tab_length", "open")


def print_help() -> None:
    """Print help message with all available commands."""
    print(__doc__)
    print("📦 Commands:")
    for cmd, info in GENERATE_COMMANDS.items():
        print(f"  {cmd:10} - {info['description']}")
    print(f"  {'help':10} - Show this help message")
    print("\n💡 Tip: run 'aig import --help' to list generation options")


def build_runcom_options(
    flags: dict[str, Any],
    ignore: tuple[str, ...],
    keep: tuple[str, ...],
) -> dict[str, object]:
    """Turn explicitly given CLI flags into an ``.aigrc``-style record."""
    options: dict[str, object] = {
        key: flags[flag] for flag, key in _RUNCOM_FLAGS.items() if flags.get(flag) is not None
    }
    if ignore:
        options["ignore"] = list(ignore)
    if keep:
        options["keep"] = list(keep)
    return options


def resolve_settings(settings_file: Path | None, flags: dict[str, Any]) -> GlobalSettings:
    """Load the settings file, then apply explicitly given CLI flags."""
    settings = load_global_settings(settings_file)
    overrides = {key: flags[key] for key in _SETTINGS_FLAGS if flags.get(key) is not None}
    return settings_from_mapping(overrides, base=settings, source="command line")


def run_generation(
    mode: str,
    path: Path,
    settings: GlobalSettings,
    options: dict[str, object],
    dry_run: bool = False,
) -> int:
    """Generate the index tree for ``path`` and report the outcome.

    Returns:
        Exit code (0 on success, 1 on failure).
    """
    try:
        directory = resolve_target_directory(path)
        runcom = resolve_runcom(directory, options=options)
        generated = build_index(mode, directory, settings, runcom, options=options)

        if dry_run:
            print_dim(f"# {generated.target_file_path}")
            click.echo(generated.content, nl=False)
            return 0

        written = persist_index_tree(generated)
    except IndexGeneratorError as exc:
        print_error(f"{PACKAGE_NAME}: {exc}")
        return 1

    for file_path in written:
        print_success(f"Generated {file_path}")
    print_info(
        f"{len(generated.module_names)} module(s) exported from {generated.target_file_path}"
    )

    if settings.open:
        click.launch(str(generated.target_file_path))
    return 0


def _generation_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the options shared by the import and require commands."""
    decorators = [
        click.argument(
            "path",
            required=False,
            default=".",
            type=click.Path(path_type=Path),
        ),
        click.option("--index", default=None, help="Output file name (default: index.js)"),
        click.option("--ignore", multiple=True, help="Extra ignore glob (repeatable)"),
        click.option("--keep", multiple=True, help="File name kept verbatim (repeatable)"),
        click.option("--recursive/--no-recursive", default=None,
                     help="Generate an index in every subdirectory"),
        click.option("--sub-dir/--no-sub-dir", "sub_dir", default=None,
                     help="Flatten subdirectory modules into the parent export"),
        click.option("--inherit/--no-inherit", default=None,
                     help="Pass this configuration down to subdirectories"),
        click.option("--default/--no-default", "default_export", default=None,
                     help="Emit `export default` (import mode)"),
        click.option("--namespace/--no-namespace", default=None,
                     help="Emit `import * as x` statements"),
        click.option("--class/--no-class", "class_naming", default=None,
                     help="UpperCamelCase every module name"),
        click.option("--settings", "settings_file", default=None,
                     type=click.Path(exists=True, dir_okay=False, path_type=Path),
                     help="Settings YAML file (default: .aig.yaml lookup)"),
        click.option("--eol", type=click.Choice(["lf", "crlf"]), default=None,
                     help="End of line sequence"),
        click.option("--quotes", type=click.Choice(["single", "double"]), default=None,
                     help="Quote character around module paths"),
        click.option("--semicolon/--no-semicolon", default=None,
                     help="Terminate statements with ';'"),
        click.option("--tab-length", type=click.IntRange(min=1), default=None,
                     help="Indentation width of the export body"),
        click.option("--open/--no-open", default=None,
                     help="Open the generated index file"),
        click.option("--dry-run", is_flag=True, default=False,
                     help="Print the root index instead of writing files"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _make_generate_command(mode: str) -> click.Command:
    @click.command(name=mode, help=GENERATE_COMMANDS[mode]["description"])
    @_generation_options
    @click.pass_context
    def _cmd(
        ctx: click.Context,
        path: Path,
        ignore: tuple[str, ...],
        keep: tuple[str, ...],
        settings_file: Path | None,
        dry_run: bool,
        **flags: Any,
    ) -> int:
        try:
            settings = resolve_settings(settings_file, flags)
        except IndexGeneratorError as exc:
            print_error(f"{PACKAGE_NAME}: {exc}")
            ctx.exit(1)

        options = build_runcom_options(flags, ignore, keep)
        exit_code = run_generation(mode, path, settings, options, dry_run=dry_run)
        if exit_code:
            ctx.exit(exit_code)
        return exit_code

    return _cmd


@click.group(invoke_without_command=True)
@click.version_option(package_name=PACKAGE_NAME, prog_name="aig")
@click.pass_context
def _click_cli(ctx: click.Context) -> int:
    """Top-level aig command group."""
    if ctx.invoked_subcommand is not None:
        return 0

    print_help()
    return 0


def _register_commands() -> None:
    """Register all top-level commands in the click app."""
    for mode in GENERATE_COMMANDS:
        _click_cli.add_command(_make_generate_command(mode))

    @click.command(name="help", help="Show help message")
    def _help_cmd() -> int:
        print_header("Auto Index Generator")
        print_help()
        return 0

    _click_cli.add_command(_help_cmd)


_register_commands()


def main() -> int:
    """Main CLI entry point."""
    if len(sys.argv) < _MIN_ARGS or sys.argv[1] in ["help", "-h"]:
        print_help()
        return 0

    try:
        result = _click_cli.main(
            args=sys.argv[1:],
            prog_name="aig",
            standalone_mode=False,
        )
    except click.Abort:
        print("\n⚠️  Cancelled by user")
        return _EXIT_CANCELLED
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    return 0 if result is None else int(result)


if __name__ == "__main__":
    sys.exit(main())
