# src/design_token_compiler/pipeline/transforms/registry.py
from __future__ import annotations

"""
transforms.registry

Does: Name every value/name transform and file filter in fixed, read-only tables
      and apply an ordered transform chain to a token collection.
Returns: Transform type, TRANSFORMS and FILTERS tables, apply_transforms().
Used By: Platform build planner (chains come from platforms.json by name).
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Literal

from design_token_compiler.pipeline.tokens.model import Token, TokenCollection
from design_token_compiler.pipeline.transforms import naming
from design_token_compiler.pipeline.transforms.value import (
    color_argb,
    color_roku_hex,
    is_color,
    is_dimension,
    is_font_size,
    is_typography,
    size_dp,
    size_number,
    size_px,
    size_sp,
)

# Public surface
__all__ = [
    "Transform",
    "TransformKind",
    "TRANSFORMS",
    "FILTERS",
    "UnknownTransformError",
    "get_transform",
    "apply_transforms",
]

TransformKind = Literal["value", "name"]
Filter = Callable[[Token], bool]


class UnknownTransformError(KeyError):
    """Raise when a chain names a transform that is not registered."""


@dataclass(frozen=True)
class Transform:
    """A named, filtered, pure mapping over one token (its value or its name)."""

    name: str
    kind: TransformKind
    transform: Callable[[Token, Mapping[str, Any]], Any]
    filter: Filter | None = None

    def matches(self, token: Token) -> bool:
        return self.filter is None or self.filter(token)

    def apply(self, token: Token, options: Mapping[str, Any]) -> Token:
        if not self.matches(token):
            return token
        out = self.transform(token, options)
        if self.kind == "name":
            return replace(token, name=out)
        return replace(token, value=out)


def _value(fn: Callable[[Token], Any]) -> Callable[[Token, Mapping[str, Any]], Any]:
    return lambda token, _options: fn(token)


def _name(case: Callable[[Sequence[str]], str]) -> Callable[[Token, Mapping[str, Any]], str]:
    def _apply(token: Token, options: Mapping[str, Any]) -> str:
        prefix = options.get("prefix")
        return case((prefix, *token.path) if prefix else token.path)

    return _apply


_ALL: tuple[Transform, ...] = (
    # names
    Transform("name/camel", "name", _name(naming.camel_case)),
    Transform("name/kebab", "name", _name(naming.kebab_case)),
    Transform("name/snake", "name", _name(naming.snake_case)),
    Transform("name/pascal", "name", _name(naming.pascal_case)),
    # colors (leading alpha / trailing alpha)
    Transform("color/argb", "value", _value(color_argb), is_color),
    Transform("color/rokuHex", "value", _value(color_roku_hex), is_color),
    # sizes
    Transform("size/px", "value", _value(size_px), is_dimension),
    Transform("size/dp", "value", _value(size_dp), is_dimension),
    Transform("size/sp", "value", _value(size_sp), is_font_size),
    Transform("size/number", "value", _value(size_number), is_dimension),
)

TRANSFORMS: Mapping[str, Transform] = MappingProxyType({t.name: t for t in _ALL})

# File-level filters referenced by name from platform configs
FILTERS: Mapping[str, Filter] = MappingProxyType(
    {
        "is_color": is_color,
        "is_dimension": is_dimension,
        "is_typography": is_typography,
    }
)


def get_transform(name: str) -> Transform:
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise UnknownTransformError(f"Unknown transform '{name}'") from None


def apply_transforms(
    tokens: TokenCollection,
    chain: Sequence[str],
    options: Mapping[str, Any] | None = None,
) -> TokenCollection:
    """
    Does: Run each named transform over every token, in chain order; a transform
          whose filter rejects a token leaves it as it is.
    Returns: A new TokenCollection (the input is untouched).
    """
    steps = [get_transform(n) for n in chain]
    opts = options or {}

    def _run(token: Token) -> Token:
        for step in steps:
            token = step.apply(token, opts)
        return token

    return tokens.map(_run)
