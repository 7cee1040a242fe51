"""Resolve the effective run configuration (runcom) for one directory.

Layers, lowest precedence first:
    1. built-in defaults
    2. per-invocation options (command line flags)
    3. configuration inherited from the parent directory (``inherit: true``)
    4. the directory-local ``.aigrc`` JSON file

Example ``.aigrc``:
    {
        "index": "index.js",
        "ignore": ["*.spec.js"],
        "keep": ["API.js"],
        "default": false,
        "*": false,
        "class": false,
        "recursive": true,
        "subDir": false,
        "inherit": false
    }
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from aig_generator.core.errors import ConfigParseError

AIGRC_FILE_NAME = ".aigrc"
DEFAULT_INDEX_FILE_NAME = "index.js"

# Raw record type shared by .aigrc files, CLI options and inheritance
Overrides = dict[str, object]

DEFAULT_OVERRIDES: Mapping[str, object] = {
    "index": DEFAULT_INDEX_FILE_NAME,
    "ignore": [],
    "keep": [],
    "default": False,
    "*": False,
    "class": False,
    "recursive": True,
    "subDir": False,
    "inherit": False,
}

_BOOL_KEYS = ("default", "*", "class", "recursive", "subDir", "inherit")
_LIST_KEYS = ("ignore", "keep")


@dataclass(frozen=True)
class RunConfig:
    """Effective configuration governing one directory's generation.

    Attributes:
        index_file_name: Name of the generated file ('index').
        ignore_patterns: Extra exclusion globs; always ends with the index name.
        keep_names: File base names whose stem is used verbatim ('keep').
        use_default_export: Emit ``export default {...}`` ('default').
        use_namespace_import: Emit ``import * as x`` ('*').
        force_class_naming: UpperCamelCase every name ('class').
        recursive: Generate an index in every subdirectory ('recursive').
        include_subdirectory_modules: Flatten child modules into this
            directory's exports ('subDir').
        inherit_config_to_children: Pass this configuration down ('inherit').
        overrides: Inherited + local record, handed to children on inherit.
    """

    index_file_name: str = DEFAULT_INDEX_FILE_NAME
    ignore_patterns: tuple[str, ...] = (DEFAULT_INDEX_FILE_NAME,)
    keep_names: frozenset[str] = frozenset()
    use_default_export: bool = False
    use_namespace_import: bool = False
    force_class_naming: bool = False
    recursive: bool = True
    include_subdirectory_modules: bool = False
    inherit_config_to_children: bool = False
    overrides: Mapping[str, object] = field(default_factory=dict, compare=False, hash=False)

    @property
    def child_overrides(self) -> Overrides:
        """Record a child directory inherits (empty unless ``inherit``)."""
        if not self.inherit_config_to_children:
            return {}
        return dict(self.overrides)


def validate_overrides(raw: Mapping[str, object], source: str) -> Overrides:
    """Type-check recognised keys of an override record.

    Unknown keys are dropped.

    Raises:
        ConfigParseError: If a recognised key holds a value of the wrong type.
    """
    validated: Overrides = {}

    if "index" in raw:
        index = raw["index"]
        if not isinstance(index, str) or not index.strip():
            raise ConfigParseError(f"{source}: 'index' must be a non-empty string")
        validated["index"] = index

    for key in _LIST_KEYS:
        if key not in raw:
            continue
        value = raw[key]
        if not isinstance(value, (list, tuple)) or not all(
            isinstance(item, str) for item in value
        ):
            raise ConfigParseError(f"{source}: '{key}' must be an array of strings")
        validated[key] = list(value)

    for key in _BOOL_KEYS:
        if key not in raw:
            continue
        value = raw[key]
        if not isinstance(value, bool):
            raise ConfigParseError(f"{source}: '{key}' must be true or false")
        validated[key] = value

    return validated


def read_aigrc(directory: Path) -> Overrides:
    """Read ``directory/.aigrc``; an absent file yields an empty record.

    Raises:
        ConfigParseError: If the file cannot be read, is not valid JSON or
            is not a JSON object.
    """
    aigrc_path = directory / AIGRC_FILE_NAME
    if not aigrc_path.is_file():
        return {}

    try:
        text = aigrc_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigParseError(f"unable to read {aigrc_path}: {exc}", aigrc_path) from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigParseError(f"invalid JSON in {aigrc_path}: {exc}", aigrc_path) from exc

    if not isinstance(raw, dict):
        raise ConfigParseError(f"{aigrc_path} must contain a JSON object", aigrc_path)

    try:
        return validate_overrides(raw, str(aigrc_path))
    except ConfigParseError as exc:
        exc.path = aigrc_path
        raise


def runcom_from_overrides(merged: Mapping[str, object], overrides: Mapping[str, object]) -> RunConfig:
    """Build a RunConfig from a fully merged record."""
    values = {**DEFAULT_OVERRIDES, **merged}
    index_file_name = str(values["index"])
    return RunConfig(
        index_file_name=index_file_name,
        ignore_patterns=(*values["ignore"], index_file_name),  # type: ignore[misc]
        keep_names=frozenset(values["keep"]),  # type: ignore[arg-type]
        use_default_export=bool(values["default"]),
        use_namespace_import=bool(values["*"]),
        force_class_naming=bool(values["class"]),
        recursive=bool(values["recursive"]),
        include_subdirectory_modules=bool(values["subDir"]),
        inherit_config_to_children=bool(values["inherit"]),
        overrides=dict(overrides),
    )


def resolve_runcom(
    target_directory: Path,
    inherited_overrides: Mapping[str, object] | None = None,
    options: Mapping[str, object] | None = None,
) -> RunConfig:
    """Merge defaults, options, inherited config and ``.aigrc`` for a directory.

    Args:
        target_directory: Directory the index is generated for.
        inherited_overrides: Record passed down by the parent directory.
        options: Per-invocation options, same keys as ``.aigrc``.

    Returns:
        RunConfig whose ignore patterns exclude its own index file.

    Raises:
        ConfigParseError: If ``.aigrc`` is malformed.
    """
    invocation = validate_overrides(options or {}, "options")
    inherited = dict(inherited_overrides or {})
    local = read_aigrc(target_directory)

    merged: Overrides = {**invocation, **inherited, **local}
    return runcom_from_overrides(merged, {**inherited, **local})
