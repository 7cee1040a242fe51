"""Helper utilities for index generation (settings, ignore patterns, output)."""
