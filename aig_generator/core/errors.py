"""Errors raised while generating index files.

Every failure the engine can hit derives from ``IndexGeneratorError`` so a
caller (the CLI, a test, an editor plugin) can report it with one handler.
Errors carry the filesystem path they concern when there is one.
"""

from __future__ import annotations

from pathlib import Path


class IndexGeneratorError(Exception):
    """Base class for index generation failures."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class PathExtractionError(IndexGeneratorError):
    """No usable filesystem path was given for the invocation."""


class StatError(IndexGeneratorError):
    """The target path cannot be inspected (missing, permission denied)."""


class ReadDirError(IndexGeneratorError):
    """A directory cannot be listed."""


class ConfigParseError(IndexGeneratorError):
    """A directory-local ``.aigrc`` file is malformed."""


class SettingsError(IndexGeneratorError):
    """The global settings file holds an unsupported value."""


class WriteError(IndexGeneratorError):
    """A generated index file cannot be written."""
