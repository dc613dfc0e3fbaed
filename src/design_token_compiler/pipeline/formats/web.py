"""
web.py

Does: Web renderers: CSS custom properties, SCSS variables, ES6 constants.
Returns: css_variables(), scss_variables(), javascript_es6().
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from design_token_compiler.pipeline.formats.base import banner, scalar_text
from design_token_compiler.pipeline.tokens.model import Token, TokenCollection, is_numeric
from design_token_compiler.pipeline.tokens.resolve import REFERENCE_RE

__all__ = ["css_variables", "scss_variables", "javascript_es6"]


def _referenced_token(token: Token, tokens: TokenCollection) -> Token | None:
    """Does: Return the target of a whole-value reference when it is part of this output."""
    original = token.original_value
    if not isinstance(original, str):
        return None
    m = REFERENCE_RE.fullmatch(original.strip())
    return tokens.get(m.group(1).strip()) if m else None


def css_variables(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    """
    Does: `:root { --name: value; }`. With options["output_references"], a token
          aliasing another emitted token renders as `var(--other)`.
    """
    selector = options.get("selector", ":root")
    refs = bool(options.get("output_references"))
    lines = [banner(options, "CSS", "block"), "", f"{selector} {{"]
    for token in tokens:
        target = _referenced_token(token, tokens) if refs else None
        value = f"var(--{target.name})" if target is not None else scalar_text(token.value)
        lines.append(f"  --{token.name}: {value};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def scss_variables(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    lines = [banner(options, "SCSS", "line"), ""]
    lines.extend(f"${t.name}: {scalar_text(t.value)};" for t in tokens)
    return "\n".join(lines) + "\n"


def javascript_es6(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    """Does: One `export const name = <JSON literal>;` per token."""
    lines = [banner(options, "JavaScript", "block"), ""]
    for t in tokens:
        if is_numeric(t.value):
            literal = scalar_text(t.value)
        elif isinstance(t.value, (dict, list, bool)):
            literal = json.dumps(t.value)
        else:
            literal = json.dumps(str(t.value))
        lines.append(f"export const {t.name} = {literal};")
    return "\n".join(lines) + "\n"
