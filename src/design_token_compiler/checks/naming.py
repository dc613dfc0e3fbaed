"""
naming.py
=========

Does: Enforce the token key convention: lowercase snake_case words, numeric
      scale steps ("50", "500") and size steps ("2xl", "27xl"). Keys starting
      with `$` are metadata and skipped; keys inside a token object are not
      checked.
Returns: validate_key(), validate_naming_document(), validate_naming().
Used by: `design-tokens validate-naming`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from design_token_compiler.checks.discovery import ValidationResult, iter_documents
from design_token_compiler.pipeline.tokens.resolve import is_token_node

__all__ = [
    "VALID_KEY_PATTERN",
    "STATE_SUFFIXES",
    "NAMING_CONVENTIONS",
    "validate_key",
    "validate_naming_document",
    "validate_naming",
]

VALID_KEY_PATTERN = re.compile(r"^[a-z][a-z0-9_]*$|^[0-9]+$|^[0-9]+[a-z]+$")
STATE_SUFFIXES = ("_hover", "_pressed", "_disabled", "_focused", "_active", "_selected")

NAMING_CONVENTIONS = (
    'Use lowercase letters and underscores: "primary_background"',
    'Numeric keys allowed for scales: "50", "100", "500"',
    'State suffixes: "_hover", "_pressed", "_disabled", "_focused"',
)

_UPPER_RE = re.compile(r"([A-Z])")


def validate_key(key: str, parent: str, file: str) -> str | None:
    """
    Does: Check one key.
    Returns: An error message, or None when the key is valid (or `$`-prefixed).
    """
    if key.startswith("$") or VALID_KEY_PATTERN.match(key):
        return None
    where = f'{file}: Key "{key}" at "{parent}"'
    if any(c.isupper() for c in key):
        suggestion = _UPPER_RE.sub(r"_\1", key).lower()
        return f'{where} uses camelCase. Use snake_case instead (e.g., "{suggestion}")'
    if "-" in key:
        return f'{where} uses hyphens. Use underscores instead (e.g., "{key.replace("-", "_")}")'
    return f"{where} has invalid format. Use lowercase with underscores."


def validate_naming_document(data: Mapping[str, Any], file: str) -> list[str]:
    errors: list[str] = []

    def _walk(node: Mapping[str, Any], path: str) -> None:
        for key, child in node.items():
            error = validate_key(key, path or "root", file)
            if error:
                errors.append(error)
            if not is_token_node(child) and isinstance(child, Mapping):
                _walk(child, f"{path}.{key}" if path else key)

    _walk(data, "")
    return errors


def validate_naming(tokens_dir: str | Path) -> ValidationResult:
    """Does: Validate every key of every token file; parse failures count as errors."""
    result = ValidationResult()
    for label, data in iter_documents(tokens_dir, result):
        result.errors.extend(validate_naming_document(data, label))
    return result
