"""Generate barrel ``index.js`` files that re-export every module in a directory.

Generation runs in two phases:

1. ``build_index`` walks the directory tree and computes a ``GeneratedIndex``
   per directory (content + module table). It reads the filesystem but never
   writes, so a malformed ``.aigrc`` anywhere aborts the run before any file
   is touched.
2. ``persist_index_tree`` writes every computed index, children before their
   parent.

``generate_index`` composes both phases for a single (mode, path) request.

Example output (import mode, defaults):
    import foo from './foo.js';
    import Bar from './Bar.js';

    export {
      foo,
      Bar
    };
"""

from __future__ import annotations

import contextlib
import os
import stat
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from aig_generator.core.errors import (
    PathExtractionError,
    ReadDirError,
    StatError,
    WriteError,
)
from aig_generator.core.naming import module_identifier
from aig_generator.core.runcom import DEFAULT_INDEX_FILE_NAME, RunConfig, resolve_runcom
from aig_generator.helpers.helpers_logging import print_warning
from aig_generator.helpers.helpers_pattern_matcher import is_ignored
from aig_generator.helpers.settings import GlobalSettings, load_global_settings

MODE_IMPORT = "import"
MODE_REQUIRE = "require"
MODES = (MODE_IMPORT, MODE_REQUIRE)

_NEW_FILE_MODE = 0o644


@dataclass(frozen=True)
class DirectoryEntry:
    """A file or subdirectory found while listing a directory."""

    path: Path
    is_dir: bool

    @property
    def base(self) -> str:
        """Full base name, e.g. 'Bar.js'."""
        return self.path.name

    @property
    def name(self) -> str:
        """Base name without extension, e.g. 'Bar'."""
        return self.path.stem

    @property
    def extension(self) -> str:
        return self.path.suffix


@dataclass(frozen=True)
class ModuleBinding:
    module_name: str
    module_path: str


@dataclass(frozen=True)
class GeneratedIndex:
    """Result of generating one directory's index file.

    Attributes:
        mode: 'import' or 'require'.
        directory: Directory the index was generated for.
        target_file_path: Where the content is written.
        module_table: Identifier -> relative path, in discovery order.
            Duplicate identifiers keep the last path.
        module_names: Exported identifiers in order, duplicates included.
        content: Full text of the index file.
        children: Indexes generated for visited subdirectories.
    """

    mode: str
    directory: Path
    target_file_path: Path
    module_table: Mapping[str, str]
    module_names: tuple[str, ...]
    content: str
    children: tuple[GeneratedIndex, ...] = field(default=())

    @property
    def bindings(self) -> list[ModuleBinding]:
        return [ModuleBinding(name, path) for name, path in self.module_table.items()]

    def walk(self) -> list[GeneratedIndex]:
        """All indexes of this subtree, children before their parent."""
        ordered: list[GeneratedIndex] = []
        for child in self.children:
            ordered.extend(child.walk())
        ordered.append(self)
        return ordered


# ============================================================================
# Statement formatting
# ============================================================================


def _quoted(path: str, settings: GlobalSettings) -> str:
    return f"{settings.quotes}{path}{settings.quotes}"


def format_module_statement(
    mode: str,
    module_name: str,
    module_path: str,
    settings: GlobalSettings,
    namespace: bool = False,
) -> str:
    """One import/require line for a single module."""
    if mode == MODE_IMPORT:
        star = " * as" if namespace else ""
        return (
            f"import{star} {module_name} from "
            f"{_quoted(module_path, settings)}{settings.terminator}"
        )
    return (
        f"const {module_name} = require({_quoted(module_path, settings)})"
        f"{settings.terminator}"
    )


def format_group_statement(
    mode: str,
    module_names: list[str] | tuple[str, ...],
    module_path: str,
    settings: GlobalSettings,
) -> str:
    """One destructuring import/require line for a flattened subdirectory."""
    names = ", ".join(module_names)
    if mode == MODE_IMPORT:
        return f"import {{ {names} }} from {_quoted(module_path, settings)}{settings.terminator}"
    return f"const {{ {names} }} = require({_quoted(module_path, settings)}){settings.terminator}"


def format_export_statement(
    mode: str,
    module_names: list[str] | tuple[str, ...],
    settings: GlobalSettings,
    use_default_export: bool = False,
) -> str:
    """The closing export statement, terminated by an EOL."""
    eol = settings.eol
    body = f",{eol}".join(settings.indent + name for name in module_names)
    if mode == MODE_IMPORT:
        prefix = "export default " if use_default_export else "export "
    else:
        prefix = "module.exports = "
    return f"{prefix}{{{eol}{body}{eol}}}{settings.terminator}{eol}"


def _group_path(child: GeneratedIndex) -> str:
    """Relative path a parent uses to import a flattened child directory."""
    if child.target_file_path.name == DEFAULT_INDEX_FILE_NAME:
        return f"./{child.directory.name}"
    return f"./{child.directory.name}/{child.target_file_path.name}"


# ============================================================================
# Phase 1: compute
# ============================================================================


def list_directory(directory: Path) -> list[DirectoryEntry]:
    """List entries in the order the OS returns them (no sorting).

    Entries whose type cannot be determined (e.g. a symlink pointing at
    itself) are skipped with a warning.

    Raises:
        ReadDirError: If the directory cannot be listed.
    """
    entries: list[DirectoryEntry] = []
    try:
        with os.scandir(directory) as it:
            for entry in it:
                try:
                    is_dir = entry.is_dir()
                except OSError as exc:
                    print_warning(f"Skipping {directory / entry.name}: {exc.strerror}")
                    continue
                entries.append(DirectoryEntry(path=directory / entry.name, is_dir=is_dir))
    except OSError as exc:
        raise ReadDirError(f"unable to read directory {directory}: {exc}", directory) from exc
    return entries


def _build_index(
    mode: str,
    directory: Path,
    settings: GlobalSettings,
    runcom: RunConfig,
    options: Mapping[str, object] | None,
    ancestors: frozenset[Path],
) -> GeneratedIndex:
    ancestors = ancestors | {directory.resolve()}
    ignore_patterns = (*settings.ignore, *runcom.ignore_patterns)
    descend = runcom.recursive or runcom.include_subdirectory_modules

    lines: list[str] = []
    module_names: list[str] = []
    module_table: dict[str, str] = {}
    children: list[GeneratedIndex] = []

    for entry in list_directory(directory):
        if entry.base == runcom.index_file_name or is_ignored(entry.base, ignore_patterns):
            continue

        if entry.is_dir and descend:
            if entry.path.resolve() in ancestors:
                print_warning(f"Skipping {entry.path}: directory cycle detected")
                continue

            child_runcom = resolve_runcom(entry.path, runcom.child_overrides, options)
            child = _build_index(mode, entry.path, settings, child_runcom, options, ancestors)
            children.append(child)

            if runcom.include_subdirectory_modules and child.module_names:
                group_path = _group_path(child)
                for name in child.module_names:
                    module_table[name] = group_path
                    module_names.append(name)
                lines.append(format_group_statement(mode, child.module_names, group_path, settings))
            continue

        module_name = module_identifier(entry.base, entry.name, runcom)
        # './foo.js', never './foo'
        module_path = f"./{entry.base}"

        module_table[module_name] = module_path
        module_names.append(module_name)
        lines.append(
            format_module_statement(
                mode, module_name, module_path, settings, runcom.use_namespace_import,
            )
        )

    lines.append("")
    lines.append(
        format_export_statement(
            mode,
            module_names,
            settings,
            use_default_export=runcom.use_default_export and mode == MODE_IMPORT,
        )
    )

    return GeneratedIndex(
        mode=mode,
        directory=directory,
        target_file_path=directory / runcom.index_file_name,
        module_table=MappingProxyType(module_table),
        module_names=tuple(module_names),
        content=settings.eol.join(lines),
        children=tuple(children),
    )


def build_index(
    mode: str,
    directory: Path,
    settings: GlobalSettings,
    runcom: RunConfig | None = None,
    options: Mapping[str, object] | None = None,
) -> GeneratedIndex:
    """Compute the index for ``directory`` and, when configured, its subtree.

    Args:
        mode: 'import' or 'require'.
        directory: Directory to scan.
        settings: Formatting settings for the run.
        runcom: Effective configuration; resolved from ``.aigrc`` when None.
        options: Per-invocation options applied in every directory.

    Raises:
        ValueError: If mode is not supported.
        ReadDirError: If a directory cannot be listed.
        ConfigParseError: If any visited ``.aigrc`` is malformed.
    """
    if mode not in MODES:
        raise ValueError(f"Unsupported mode {mode!r}, expected one of {MODES}")
    if runcom is None:
        runcom = resolve_runcom(directory, options=options)
    return _build_index(mode, directory, settings, runcom, options, frozenset())


# ============================================================================
# Phase 2: persist
# ============================================================================


def write_index(generated: GeneratedIndex) -> Path:
    """Atomically write one generated index file.

    Content goes to a temporary file in the same directory which then
    replaces the target, so a failed write never leaves a partial file.

    Raises:
        WriteError: If the file cannot be written.
    """
    target = generated.target_file_path
    try:
        file_mode = stat.S_IMODE(target.stat().st_mode)
    except OSError:
        file_mode = _NEW_FILE_MODE

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(generated.content.encode("utf-8"))
        os.chmod(tmp_name, file_mode)
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)
        raise WriteError(f"unable to write {target}: {exc}", target) from exc

    return target


def persist_index_tree(generated: GeneratedIndex) -> list[Path]:
    """Write every index of the tree, children before parents.

    Returns:
        Written file paths in write order.
    """
    return [write_index(node) for node in generated.walk()]


# ============================================================================
# Entry point
# ============================================================================


def resolve_target_directory(path: Path | str | None) -> Path:
    """Resolve the directory to index; a file path means its parent.

    Raises:
        PathExtractionError: If no path was given.
        StatError: If the path cannot be inspected.
    """
    if path is None or not str(path).strip():
        raise PathExtractionError("unable to extract a path to generate an index for")

    target = Path(path)
    try:
        st = target.stat()
    except OSError as exc:
        raise StatError(f"unable to access {target}: {exc}", target) from exc

    if stat.S_ISDIR(st.st_mode):
        return target
    return target.parent


def generate_index(
    mode: str,
    path: Path | str,
    settings: GlobalSettings | None = None,
    options: Mapping[str, object] | None = None,
    write: bool = True,
) -> GeneratedIndex:
    """Generate (and by default write) the index tree for ``path``.

    Args:
        mode: 'import' or 'require'.
        path: Directory, or a file inside the directory, to index.
        settings: Run settings; loaded from the settings file when None.
        options: Per-invocation options, same keys as ``.aigrc``.
        write: Persist the generated files.

    Returns:
        GeneratedIndex of the target directory, with children attached.

    Example:
        >>> result = generate_index("import", "src/components")
        >>> result.module_table
        mappingproxy({'button': './button.js', 'Modal': './Modal.js'})
    """
    if mode not in MODES:
        raise ValueError(f"Unsupported mode {mode!r}, expected one of {MODES}")

    directory = resolve_target_directory(path)
    if settings is None:
        settings = load_global_settings()

    generated = build_index(mode, directory, settings, options=options)
    if write:
        persist_index_tree(generated)
    return generated
