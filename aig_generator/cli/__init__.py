"""
CLI module for the Auto Index Generator.

Provides the `aig` entry point that can be installed as a console script.
"""

from .commands import main

__all__ = ["main"]
