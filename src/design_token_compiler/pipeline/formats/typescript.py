"""
typescript.py
=============

Does: Render a TypeScript module with (a) one flat `export const` per token and
      (b) `export const tokens = {...} as const`, a nested object mirroring the
      token paths whose leaves reference the flat constants by identifier.
Returns: typescript_nested(), build_nested_tree(), format_nested().
Used By: React Native platform (and anything else wanting typed tokens).

Leaves hold identifiers, never literals, so the two exports cannot drift.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, Union

from design_token_compiler.pipeline.formats.base import banner, scalar_text, single_quoted
from design_token_compiler.pipeline.tokens.model import TokenCollection, is_numeric

__all__ = ["typescript_nested", "build_nested_tree", "format_nested", "ts_literal", "safe_key"]

NestedTree = dict[str, Union[str, "NestedTree"]]

_NEEDS_QUOTES_RE = re.compile(r"^[0-9]|-")


def ts_literal(value: Any) -> str:
    """Does: Strings single-quoted, numbers/booleans bare, composites as JSON."""
    if is_numeric(value) or isinstance(value, bool):
        return scalar_text(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return single_quoted(str(value))


def safe_key(key: str) -> str:
    """Does: Quote keys that start with a digit or contain a hyphen."""
    return single_quoted(key) if _NEEDS_QUOTES_RE.search(key) else key


def build_nested_tree(tokens: TokenCollection) -> NestedTree:
    """
    Does: Fold token paths into nested dicts; each leaf is the token's flat name.
    Raises: ValueError when a path is both a leaf and a branch.
    """
    root: NestedTree = {}
    for token in tokens:
        current = root
        *branches, leaf = token.path
        for depth, key in enumerate(branches):
            node = current.setdefault(key, {})
            if not isinstance(node, dict):
                prefix = ".".join(token.path[: depth + 1])
                raise ValueError(f"Token path '{prefix}' is both a token and a group")
            current = node
        if isinstance(current.get(leaf), dict):
            raise ValueError(f"Token path '{token.dotted_path}' is both a token and a group")
        current[leaf] = token.name
    return root


def format_nested(tree: NestedTree, indent: str = "") -> str:
    if not tree:
        return "{}"
    items = []
    for key, value in tree.items():
        rendered = value if isinstance(value, str) else format_nested(value, indent + "  ")
        items.append(f"{indent}  {safe_key(key)}: {rendered}")
    return "{\n" + ",\n".join(items) + f"\n{indent}}}"


def typescript_nested(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    flat = "\n".join(f"export const {t.name} = {ts_literal(t.value)};" for t in tokens)
    nested = f"export const tokens = {format_nested(build_nested_tree(tokens))} as const;"
    return f"{banner(options, 'TypeScript', 'block')}\n\n{flat}\n\n{nested}\n"
