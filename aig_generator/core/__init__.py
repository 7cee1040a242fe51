"""Core index generation logic."""

from aig_generator.core.index_generator import (
    GeneratedIndex,
    build_index,
    generate_index,
    persist_index_tree,
)
from aig_generator.core.runcom import RunConfig, resolve_runcom

__all__ = [
    "GeneratedIndex",
    "RunConfig",
    "build_index",
    "generate_index",
    "persist_index_tree",
    "resolve_runcom",
]
