"""
checks
======

Does: Token-tree quality gates run in CI next to the build: breaking-change
      detection against a baseline tree, key naming rules and token format rules.
"""

from design_token_compiler.checks.breaking import (
    BreakingReport,
    RenameSuggestion,
    TypeChange,
    check_breaking,
    compare_token_sets,
    path_similarity,
)
from design_token_compiler.checks.discovery import (
    TokenRecord,
    ValidationResult,
    extract_token_paths,
    find_token_files,
    load_token_records,
)
from design_token_compiler.checks.format import validate_format, validate_format_document
from design_token_compiler.checks.naming import VALID_KEY_PATTERN, validate_key, validate_naming

__all__ = [
    "BreakingReport",
    "RenameSuggestion",
    "TypeChange",
    "check_breaking",
    "compare_token_sets",
    "path_similarity",
    "TokenRecord",
    "ValidationResult",
    "extract_token_paths",
    "find_token_files",
    "load_token_records",
    "validate_format",
    "validate_format_document",
    "VALID_KEY_PATTERN",
    "validate_key",
    "validate_naming",
]
__docformat__ = "google"
