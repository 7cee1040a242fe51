"""Turn file stems into JavaScript identifiers.

``camel_case`` follows the behaviour of the npm ``camelcase`` package that
JavaScript tooling commonly uses, so generated names match what a developer
would write by hand:

    >>> camel_case('foo-bar')
    'fooBar'
    >>> camel_case('XMLParser')
    'xmlParser'
    >>> upper_camel_case('my_component')
    'MyComponent'
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aig_generator.core.runcom import RunConfig

_ALREADY_CAMEL_RE = re.compile(r"^[a-z\d]+$")
_LEADING_SEPARATORS_RE = re.compile(r"^[_.\- ]+")
_SEPARATOR_RUN_RE = re.compile(r"[_.\- ]+(\w|$)")


def _is_ascii_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


def _split_case_boundaries(value: str) -> str:
    """Insert '-' where a mixed-case string changes word.

    ``fooBar`` becomes ``foo-Bar`` and ``XMLParser`` becomes ``XML-Parser``;
    the separators are consumed again by ``camel_case``.
    """
    chars = list(value)
    last_lower = last_upper = last_last_upper = False
    index = 0

    while index < len(chars):
        char = chars[index]
        if last_lower and _is_ascii_letter(char) and char.upper() == char:
            chars.insert(index, "-")
            last_lower = False
            last_last_upper = last_upper
            last_upper = True
            index += 1
        elif (
            last_upper
            and last_last_upper
            and _is_ascii_letter(char)
            and char.lower() == char
        ):
            chars.insert(index - 1, "-")
            last_last_upper = last_upper
            last_upper = False
            last_lower = True
        else:
            last_lower = char.lower() == char
            last_last_upper = last_upper
            last_upper = char.upper() == char
        index += 1

    return "".join(chars)


def camel_case(value: str) -> str:
    """Convert a dash/underscore/dot/space separated name to lowerCamelCase."""
    value = value.strip()
    if not value:
        return ""
    if len(value) == 1:
        return value.lower()
    if _ALREADY_CAMEL_RE.match(value):
        return value

    if value != value.lower():
        value = _split_case_boundaries(value)

    value = _LEADING_SEPARATORS_RE.sub("", value).lower()
    return _SEPARATOR_RUN_RE.sub(lambda match: match.group(1).upper(), value)


def upper_camel_case(value: str) -> str:
    """Convert a name to UpperCamelCase (class/component style)."""
    cased = camel_case(value)
    return cased[:1].upper() + cased[1:]


def module_identifier(base: str, stem: str, runcom: RunConfig) -> str:
    """Pick the exported identifier for a module file.

    Names listed in ``keep`` are used verbatim. A stem starting with an
    uppercase letter is treated as a class/component name, as is every
    stem when ``class`` naming is forced.
    """
    if base in runcom.keep_names:
        return stem
    if runcom.force_class_naming or stem[:1].isupper():
        return upper_camel_case(stem)
    return camel_case(stem)
