"""
brightscript.py

Does: Render a flat BrightScript associative-array factory for Roku.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from design_token_compiler.pipeline.formats.base import DEFAULT_NAMESPACE, banner, scalar_text
from design_token_compiler.pipeline.tokens.model import TokenCollection, is_numeric

__all__ = ["brightscript_tokens", "brs_literal", "brs_quoted"]


def brs_quoted(text: str) -> str:
    """Does: BrightScript string literal; an embedded quote is written twice, backslashes are literal."""
    return '"' + text.replace('"', '""') + '"'


def brs_literal(value: Any) -> str:
    """Does: Numbers bare; strings quoted unless already quoted (e.g. "0x16B087FF")."""
    if is_numeric(value) or isinstance(value, bool):
        return scalar_text(value)
    text = scalar_text(value)
    if len(text) >= 2 and text[0] == text[-1] == '"' and '"' not in text[1:-1]:
        return text
    return brs_quoted(text)


def brightscript_tokens(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    namespace = options.get("namespace") or DEFAULT_NAMESPACE
    body = "\n".join(f"        {t.name}: {brs_literal(t.value)}" for t in tokens)
    return (
        f"{banner(options, 'BrightScript', 'apostrophe')}\n\n"
        f"function {namespace}() as object\n"
        "    return {\n"
        f"{body}\n"
        "    }\n"
        "end function\n"
    )
