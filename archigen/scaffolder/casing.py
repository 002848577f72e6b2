"""Identifier case conversion helpers.

Pure, total functions that map an identifier between PascalCase, camelCase,
snake_case and kebab-case.  ``_`` and ``-`` are treated as word delimiters;
snake/kebab conversion additionally starts a new word at every uppercase
letter after position 0.  Empty segments (leading, trailing or consecutive
delimiters) are dropped silently.

Examples::

    to_pascal_case("user_name") -> "UserName"
    to_camel_case("user-api")   -> "userApi"
    to_snake_case("UserName")   -> "user_name"
    to_kebab_case("userApi")    -> "user-api"
"""

from __future__ import annotations

import re

_DELIMITERS = re.compile(r"[_-]")


def split_words(value: str) -> list[str]:
    """Split *value* on ``_``/``-`` boundaries, dropping empty segments."""
    return [part for part in _DELIMITERS.split(value) if part]


def split_camel_case(value: str) -> list[str]:
    """Split *value* on camel boundaries, then on ``_``/``-`` delimiters."""
    words: list[str] = []
    current: list[str] = []
    for index, char in enumerate(value):
        if index > 0 and char.isupper() and current:
            words.append("".join(current))
            current = []
        current.append(char)
    if current:
        words.append("".join(current))

    result: list[str] = []
    for word in words:
        result.extend(split_words(word))
    return result


def capitalize(word: str) -> str:
    """Uppercase the first character and lowercase the rest."""
    return word[:1].upper() + word[1:].lower()


def to_pascal_case(value: str) -> str:
    """Convert ``user_name`` or ``user-name`` to ``UserName``."""
    return "".join(capitalize(word) for word in split_words(value))


def to_camel_case(value: str) -> str:
    """Convert ``user_name`` or ``user-name`` to ``userName``."""
    words = split_words(value)
    if not words:
        return ""
    return words[0].lower() + "".join(capitalize(word) for word in words[1:])


def to_snake_case(value: str) -> str:
    """Convert ``UserName`` or ``user-name`` to ``user_name``."""
    return "_".join(word.lower() for word in split_camel_case(value))


def to_kebab_case(value: str) -> str:
    """Convert ``UserName`` or ``user_name`` to ``user-name``."""
    return "-".join(word.lower() for word in split_camel_case(value))
