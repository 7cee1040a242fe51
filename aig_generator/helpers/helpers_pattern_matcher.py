"""Ignore-pattern matching for directory entry names.

Patterns are shell-style globs (``*``, ``?``, ``[...]``) matched with
``fnmatch`` against an entry's base name. On top of plain globs, two
alternation forms are expanded before matching:

- ``(a|b|c)`` parenthesised alternation, e.g. ``*.(md|lock|log)``
- ``{a,b,c}`` brace alternation, e.g. ``*.{md,lock}``

Groups may be nested and repeated; every combination is tried.

Examples:
    >>> expand_alternations('*.(md|lock)')
    ['*.md', '*.lock']
    >>> is_ignored('yarn.lock', ['*.(md|lock)'])
    True
    >>> is_ignored('.eslintrc', [])
    True
"""

from fnmatch import fnmatchcase
from functools import lru_cache

# opener -> (closer, separator)
_GROUPS = {"(": (")", "|"), "{": ("}", ",")}
_CLOSERS = {")", "}"}
_MIN_BRACE_ALTERNATIVES = 2


def _split_group(pattern: str, start: int) -> tuple[int, list[str]] | None:
    """Split the group opened at ``start`` into its top-level alternatives.

    Returns:
        (index of the closing char, alternatives), or None when the group is
        unbalanced or closed by the wrong character.
    """
    closer, separator = _GROUPS[pattern[start]]
    depth = 0
    part_start = start + 1
    alternatives: list[str] = []

    for index in range(start + 1, len(pattern)):
        char = pattern[index]
        if char in _GROUPS:
            depth += 1
        elif char in _CLOSERS:
            if depth == 0:
                if char != closer:
                    return None
                alternatives.append(pattern[part_start:index])
                return index, alternatives
            depth -= 1
        elif char == separator and depth == 0:
            alternatives.append(pattern[part_start:index])
            part_start = index + 1

    return None


@lru_cache(maxsize=256)
def _expand(pattern: str) -> tuple[str, ...]:
    for start, char in enumerate(pattern):
        if char not in _GROUPS:
            continue
        group = _split_group(pattern, start)
        if group is None:
            continue
        end, alternatives = group
        # "{x}" without a comma is a literal brace in shell globbing
        if char == "{" and len(alternatives) < _MIN_BRACE_ALTERNATIVES:
            continue

        prefix, suffix = pattern[:start], pattern[end + 1:]
        expanded: list[str] = []
        for alternative in alternatives:
            for candidate in _expand(prefix + alternative + suffix):
                if candidate not in expanded:
                    expanded.append(candidate)
        return tuple(expanded)

    return (pattern,)


def expand_alternations(pattern: str) -> list[str]:
    """Expand ``(a|b)`` and ``{a,b}`` groups into plain fnmatch patterns."""
    return list(_expand(pattern))


def matches_glob(name: str, pattern: str) -> bool:
    """Check if name matches a single (possibly alternating) glob pattern."""
    cleaned = pattern.strip()
    if not cleaned:
        return False
    return any(fnmatchcase(name, candidate) for candidate in _expand(cleaned))


def is_ignored(name: str, patterns: list[str] | tuple[str, ...]) -> bool:
    """Check if a directory entry name is excluded from index generation.

    Dotfiles are always excluded; no pattern can bring them back.
    """
    if name.startswith("."):
        return True
    return any(matches_glob(name, pattern) for pattern in patterns)
