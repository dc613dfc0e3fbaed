"""
format.py
=========

Does: Check that every token declares a value and a known type, and that
      color and numeric values are usable by the build.
Returns: validate_token(), validate_format_document(), validate_format().
Used by: `design-tokens validate-format`.

Errors: missing value, missing type, a color that is neither a reference nor
parseable. Warnings: unknown type tag, non-numeric number/dimension values.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from design_token_compiler.checks.discovery import ValidationResult, iter_documents
from design_token_compiler.pipeline.color.normalize import ColorParseError, parse_color
from design_token_compiler.pipeline.tokens.model import NUMERIC_TYPES, TOKEN_TYPES, is_numeric
from design_token_compiler.pipeline.tokens.resolve import is_token_node

__all__ = ["validate_token", "validate_format_document", "validate_format"]


def _is_reference(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("{")


def validate_token(
    node: Mapping[str, Any], path: str, file: str, result: ValidationResult
) -> None:
    value = node["value"] if "value" in node else node.get("$value")
    kind = node["type"] if "type" in node else node.get("$type")
    where = f'{file}: Token "{path}"'

    if value is None:
        result.errors.append(f'{where} is missing "value" property')
        return
    if kind is None:
        result.errors.append(f'{where} is missing "type" property')
        return

    if kind not in TOKEN_TYPES:
        result.warnings.append(f'{where} has unknown type "{kind}"')

    if kind == "color" and not _is_reference(value):
        try:
            parse_color(value)
        except ColorParseError:
            result.errors.append(f'{where} has invalid color value "{value}"')

    if kind in NUMERIC_TYPES and not is_numeric(value) and not _is_reference(value):
        result.warnings.append(f'{where} has non-numeric value "{value}" with type "{kind}"')


def validate_format_document(
    data: Mapping[str, Any], file: str, result: ValidationResult | None = None
) -> ValidationResult:
    result = result if result is not None else ValidationResult()

    def _walk(node: Mapping[str, Any], path: str) -> None:
        for key, child in node.items():
            here = f"{path}.{key}" if path else key
            if is_token_node(child):
                validate_token(child, here, file, result)
            elif isinstance(child, Mapping):
                _walk(child, here)

    _walk(data, "")
    return result


def validate_format(tokens_dir: str | Path) -> ValidationResult:
    """Does: Validate every token of every token file under `tokens_dir`."""
    result = ValidationResult()
    for label, data in iter_documents(tokens_dir, result):
        validate_format_document(data, label, result)
    return result
