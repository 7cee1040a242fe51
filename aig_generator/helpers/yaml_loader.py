"""
Type-safe YAML loader with runtime validation.
Provides a validated ruamel.yaml instance for reading settings files.
"""

from pathlib import Path
from typing import Protocol, TextIO, Union, cast

from ruamel.yaml import YAML

# Recursive type for nested YAML structures
ConfigValue = Union[str, int, float, bool, None, 'ConfigDict', list['ConfigValue']]
ConfigDict = dict[str, ConfigValue]


class YAMLLoader(Protocol):
    """Protocol for the subset of ruamel.yaml we rely on."""
    preserve_quotes: bool

    def load(self, stream: TextIO) -> ConfigValue:
        """Load YAML from stream."""
        ...


def _validate_yaml_loader(obj: object) -> None:
    """Runtime validation: Ensure YAML object has expected interface.

    Raises:
        AttributeError: If required attributes/methods are missing
        TypeError: If load is not callable
    """
    for attr in ('load', 'preserve_quotes'):
        if not hasattr(obj, attr):
            raise AttributeError(f"YAML object missing required attribute: {attr}")

    if not callable(obj.load):  # type: ignore[attr-defined]
        raise TypeError("YAML.load is not callable")


def _create_yaml_loader() -> YAMLLoader:
    """Create and validate YAML loader instance."""
    yaml_obj = YAML()
    yaml_obj.preserve_quotes = True

    _validate_yaml_loader(yaml_obj)

    return cast(YAMLLoader, yaml_obj)


# Singleton validated YAML loader instance
yaml: YAMLLoader = _create_yaml_loader()


def load_yaml_file(file_path: Path) -> ConfigValue:
    """Load YAML file with type safety.

    ruamel.yaml's load() is safe by default (unlike PyYAML's load()).
    It does not execute arbitrary Python code from YAML content.

    Args:
        file_path: Path to YAML file to load

    Returns:
        Parsed document; None for an empty file

    Raises:
        FileNotFoundError: If file does not exist
    """
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with file_path.open(encoding='utf-8') as f:
        return yaml.load(f)
