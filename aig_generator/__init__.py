"""
Auto Index Generator

A library and CLI for generating barrel ``index.js`` files that re-export
every module of a directory tree, using ``import`` or ``require`` syntax.
"""

__version__ = "0.1.0"

PACKAGE_NAME = "aig-generator"

from aig_generator.core.index_generator import GeneratedIndex, generate_index  # noqa: E402

__all__ = [
    "GeneratedIndex",
    "PACKAGE_NAME",
    "generate_index",
]
