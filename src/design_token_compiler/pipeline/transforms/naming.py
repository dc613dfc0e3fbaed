"""
naming.py

Does: Derive platform identifiers from a token path (camel / kebab / snake / pascal).
Returns: split_words(), camel_case(), kebab_case(), snake_case(), pascal_case().
Used by: name/* transforms and the resolver's default naming.

Words split on any non-alphanumeric run and on lower→upper case boundaries.
Digits stay attached to their neighbours ("2xl", "green500").
"""

from __future__ import annotations

import re
from collections.abc import Iterable

__all__ = [
    "split_words",
    "camel_case",
    "kebab_case",
    "snake_case",
    "pascal_case",
]

_CASE_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])|([A-Z])([A-Z][a-z])")
_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]+")


def split_words(parts: Iterable[str]) -> list[str]:
    """Does: Split path segments into lowercase words."""
    words: list[str] = []
    for part in parts:
        spaced = _CASE_BOUNDARY_RE.sub(
            lambda m: f"{m.group(1)} {m.group(2)}" if m.group(1) else f"{m.group(3)} {m.group(4)}",
            str(part),
        )
        words.extend(w.lower() for w in _NON_ALNUM_RE.split(spaced) if w)
    return words


def camel_case(parts: Iterable[str]) -> str:
    words = split_words(parts)
    if not words:
        return ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def pascal_case(parts: Iterable[str]) -> str:
    return "".join(w[:1].upper() + w[1:] for w in split_words(parts))


def kebab_case(parts: Iterable[str]) -> str:
    return "-".join(split_words(parts))


def snake_case(parts: Iterable[str]) -> str:
    return "_".join(split_words(parts))
