"""
model.py
========

Does: Define the immutable Token record, the closed set of token type tags,
      and the ordered TokenCollection with path lookup.
Used By: Resolver (construction), transforms (replace), renderers (read-only).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, overload

__all__ = [
    "TOKEN_TYPES",
    "NUMERIC_TYPES",
    "Path",
    "Token",
    "TokenCollection",
    "is_numeric",
    "format_number",
]
__docformat__ = "google"

Path = tuple[str, ...]

TOKEN_TYPES: frozenset[str] = frozenset(
    {
        "color",
        "number",
        "dimension",
        "fontFamily",
        "fontWeight",
        "duration",
        "cubicBezier",
        "shadow",
        "border",
        "gradient",
        "typography",
        "spacing",
        "borderRadius",
        "borderWidth",
        "opacity",
        "sizing",
        "fontFamilies",
        "fontSizes",
        "fontWeights",
        "lineHeights",
        "letterSpacing",
        "paragraphSpacing",
        "textCase",
        "textDecoration",
    }
)

# Types the size/* transforms and the dimension filter act on
NUMERIC_TYPES: frozenset[str] = frozenset({"number", "dimension"})


def is_numeric(value: Any) -> bool:
    """Does: True for int/float values (bools excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def format_number(value: int | float) -> str:
    """Does: Render a number the way JSON would (16.0 → "16", 1.5 → "1.5")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass(frozen=True)
class Token:
    """
    One resolved design token.

    `value` is always reference-free; `original_value` keeps what the source
    document declared (possibly "{a.b}") so renderers can emit references.
    """

    path: Path
    value: Any
    type: str | None = None
    name: str = ""
    original_value: Any = None
    description: str | None = None
    source: str | None = None

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    @property
    def category(self) -> str:
        return self.path[0] if self.path else "misc"


@dataclass(frozen=True)
class TokenCollection(Sequence[Token]):
    """Ordered, immutable token sequence with a path index."""

    tokens: tuple[Token, ...] = ()
    _index: dict[Path, Token] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))
        object.__setattr__(self, "_index", {t.path: t for t in self.tokens})

    @overload
    def __getitem__(self, i: int) -> Token: ...
    @overload
    def __getitem__(self, i: slice) -> Sequence[Token]: ...
    def __getitem__(self, i):
        return self.tokens[i]

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def get(self, path: Path | str) -> Token | None:
        """Does: Look a token up by tuple path or dotted string."""
        key = tuple(path.split(".")) if isinstance(path, str) else tuple(path)
        return self._index.get(key)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Token):
            return item.path in self._index
        if isinstance(item, (str, tuple)):
            return self.get(item) is not None
        return False

    def filter(self, predicate: Callable[[Token], bool]) -> TokenCollection:
        return TokenCollection(tuple(t for t in self.tokens if predicate(t)))

    def map(self, fn: Callable[[Token], Token]) -> TokenCollection:
        return TokenCollection(tuple(fn(t) for t in self.tokens))

    @classmethod
    def of(cls, tokens: Iterable[Token]) -> TokenCollection:
        return cls(tuple(tokens))
