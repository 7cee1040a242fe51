"""Process-wide settings shared by every directory of a generation run.

Settings are read once per run from an optional YAML file and handed to the
resolver and generator as an immutable ``GlobalSettings`` value.

Lookup order for the settings file:
    1. ``$AIG_SETTINGS`` when set
    2. the first ``.aig.yaml`` found walking upward from the current directory
    3. ``~/.config/aig/settings.yaml``

Example ``.aig.yaml``:
    eol: lf            # lf | crlf | '\\n' | '\\r\\n'
    quotes: "'"        # "'" | '"' | single | double
    semicolon: true
    tab_length: 2
    open: false
    ignore:
      - .aigrc
      - index.js
      - "*.(md|lock|log|txt|html)"
"""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ruamel.yaml.error import YAMLError

from aig_generator.core.errors import SettingsError
from aig_generator.helpers.yaml_loader import load_yaml_file

SETTINGS_ENV_VAR = "AIG_SETTINGS"
SETTINGS_FILE_NAME = ".aig.yaml"
USER_SETTINGS_FILE = Path("~/.config/aig/settings.yaml")

DEFAULT_IGNORE: tuple[str, ...] = (
    ".aigrc",
    "index.js",
    "*.(md|lock|log|txt|html)",
)

_EOL_CHOICES = {
    "\\n": "\n",
    "\\r\\n": "\r\n",
    "\n": "\n",
    "\r\n": "\r\n",
    "lf": "\n",
    "crlf": "\r\n",
}
_QUOTE_CHOICES = {
    "'": "'",
    '"': '"',
    "single": "'",
    "double": '"',
}


@dataclass(frozen=True)
class GlobalSettings:
    """Formatting and filtering settings for one generation run.

    Attributes:
        eol: Line terminator written between and after lines.
        quotes: Quote character around module paths.
        semicolon: Whether statements end with ';'.
        ignore: Glob patterns excluded in every directory.
        tab_length: Indentation width of the export body.
        open: Open the root index file after it has been written.
    """

    eol: str = "\n"
    quotes: str = "'"
    semicolon: bool = True
    ignore: tuple[str, ...] = DEFAULT_IGNORE
    tab_length: int = 2
    open: bool = False

    @property
    def terminator(self) -> str:
        return ";" if self.semicolon else ""

    @property
    def indent(self) -> str:
        return " " * self.tab_length


DEFAULT_SETTINGS = GlobalSettings()


def _require_bool(key: str, value: object, source: str) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"{source}: '{key}' must be true or false, got {value!r}")
    return value


def settings_from_mapping(
    raw: Mapping[str, object],
    base: GlobalSettings = DEFAULT_SETTINGS,
    source: str = "settings",
) -> GlobalSettings:
    """Apply recognised keys of ``raw`` on top of ``base``.

    Unknown keys are ignored so one file can carry settings for other tools.

    Raises:
        SettingsError: If a recognised key holds an unsupported value.
    """
    changes: dict[str, object] = {}

    if "eol" in raw:
        eol = raw["eol"]
        if not isinstance(eol, str) or eol.lower() not in _EOL_CHOICES:
            raise SettingsError(f"{source}: unsupported 'eol' value {eol!r}")
        changes["eol"] = _EOL_CHOICES[eol.lower()]

    if "quotes" in raw:
        quotes = raw["quotes"]
        if not isinstance(quotes, str) or quotes not in _QUOTE_CHOICES:
            raise SettingsError(f"{source}: unsupported 'quotes' value {quotes!r}")
        changes["quotes"] = _QUOTE_CHOICES[quotes]

    for key in ("semicolon", "open"):
        if key in raw:
            changes[key] = _require_bool(key, raw[key], source)

    if "ignore" in raw:
        ignore = raw["ignore"]
        if not isinstance(ignore, (list, tuple)) or not all(
            isinstance(item, str) for item in ignore
        ):
            raise SettingsError(f"{source}: 'ignore' must be a list of strings")
        changes["ignore"] = tuple(ignore)

    if "tab_length" in raw:
        tab_length = raw["tab_length"]
        if isinstance(tab_length, bool) or not isinstance(tab_length, int) or tab_length < 1:
            raise SettingsError(
                f"{source}: 'tab_length' must be a positive integer, got {tab_length!r}"
            )
        changes["tab_length"] = tab_length

    return dataclasses.replace(base, **changes)


def find_settings_file(start: Path | None = None) -> Path | None:
    """Locate the settings file for this run, or None to use defaults."""
    from_env = os.environ.get(SETTINGS_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser()

    current = (start or Path.cwd()).resolve()
    for parent in [current, *current.parents]:
        candidate = parent / SETTINGS_FILE_NAME
        if candidate.is_file():
            return candidate

    user_file = USER_SETTINGS_FILE.expanduser()
    if user_file.is_file():
        return user_file
    return None


def load_global_settings(settings_file: Path | None = None) -> GlobalSettings:
    """Load settings from ``settings_file`` (or the discovered file).

    Returns:
        GlobalSettings; defaults when no settings file exists.

    Raises:
        SettingsError: If the file cannot be read or holds invalid values.
    """
    if settings_file is None:
        settings_file = find_settings_file()
    if settings_file is None:
        return DEFAULT_SETTINGS

    try:
        raw = load_yaml_file(settings_file)
    except FileNotFoundError as exc:
        raise SettingsError(f"settings file not found: {settings_file}", settings_file) from exc
    except (OSError, YAMLError) as exc:
        raise SettingsError(f"unable to read settings file {settings_file}: {exc}", settings_file) from exc

    if raw is None:
        return DEFAULT_SETTINGS
    if not isinstance(raw, Mapping):
        raise SettingsError(f"{settings_file}: settings must be a mapping", settings_file)

    return settings_from_mapping(raw, source=str(settings_file))
