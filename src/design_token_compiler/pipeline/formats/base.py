"""
base.py
=======

Does: Shared renderer plumbing: the Renderer signature, the generation banner
      in each target's comment syntax, and literal quoting helpers.
Used By: Every module in formats/.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Literal

from design_token_compiler.pipeline.tokens.model import TokenCollection, format_number, is_numeric

__all__ = [
    "Renderer",
    "DEFAULT_TITLE",
    "DEFAULT_NAMESPACE",
    "CommentStyle",
    "generation_timestamp",
    "banner",
    "scalar_text",
    "double_quoted",
    "single_quoted",
]

Renderer = Callable[[TokenCollection, Mapping[str, Any]], str]
CommentStyle = Literal["block", "line", "hash", "apostrophe", "xml"]

DEFAULT_TITLE = "Design Tokens"
DEFAULT_NAMESPACE = "DesignTokens"


def generation_timestamp(options: Mapping[str, Any]) -> str:
    """Does: Use options["timestamp"] when given (str or datetime), else now in UTC."""
    ts = options.get("timestamp")
    if isinstance(ts, str):
        return ts
    when = ts if isinstance(ts, datetime) else datetime.now(timezone.utc)
    return when.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def banner(options: Mapping[str, Any], label: str, style: CommentStyle) -> str:
    """
    Does: Build the "<title> - <label> / DO NOT EDIT / Generated: <ts>" header.
    Returns: Header lines joined by newlines (no trailing newline).
    """
    lines = [
        f"{options.get('title') or DEFAULT_TITLE} - {label}",
        "Auto-generated - DO NOT EDIT",
        f"Generated: {generation_timestamp(options)}",
    ]
    if style == "block":
        return "\n".join(["/**", *(f" * {ln}" for ln in lines), " */"])
    if style == "xml":
        return "\n".join(f"<!-- {ln} -->" for ln in lines)
    prefix = {"line": "//", "hash": "#", "apostrophe": "'"}[style]
    return "\n".join(f"{prefix} {ln}" for ln in lines)


def scalar_text(value: Any) -> str:
    """Does: Render a resolved value as bare text (numbers JSON-style, composites as JSON)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_numeric(value):
        return format_number(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(", ", ": "))
    return str(value)


def double_quoted(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def single_quoted(text: str) -> str:
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"
