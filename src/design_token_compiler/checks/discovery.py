"""
discovery.py
============

Does: Find token source files under a directory and flatten token trees into
      `dotted.path → TokenRecord(value, type)` maps for the checks.
Returns: find_token_files(), extract_token_paths(), load_token_records(),
         read_json_document(), ValidationResult.
Used by: checks.breaking, checks.naming, checks.format.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, NamedTuple

from design_token_compiler.pipeline.tokens.resolve import is_token_node, load_token_documents

__all__ = [
    "TokenRecord",
    "ValidationResult",
    "find_token_files",
    "extract_token_paths",
    "load_token_records",
    "read_json_document",
    "iter_documents",
    "display_path",
]

logger = logging.getLogger(__name__)


class TokenRecord(NamedTuple):
    value: Any
    type: str | None


@dataclass
class ValidationResult:
    """Batch of validator findings; errors decide the exit code, warnings never do."""

    files: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def find_token_files(directory: str | Path) -> list[Path]:
    """
    Does: Recursively collect `*.json` files whose name does not start with `$`
          (so `$metadata.json` / `$themes.json` are skipped).
    Returns: Sorted paths; [] when the directory does not exist.
    """
    root = Path(directory)
    if not root.is_dir():
        return []
    return sorted(p for p in root.rglob("*.json") if p.is_file() and not p.name.startswith("$"))


def extract_token_paths(data: Mapping[str, Any], prefix: str = "") -> dict[str, TokenRecord]:
    """Does: Map each token's dotted path to its value and type (`$`-forms accepted)."""
    found: dict[str, TokenRecord] = {}

    def _walk(node: Mapping[str, Any], path: str) -> None:
        for key, child in node.items():
            here = f"{path}.{key}" if path else key
            if is_token_node(child):
                value = child["value"] if "value" in child else child.get("$value")
                kind = child["type"] if "type" in child else child.get("$type")
                found[here] = TokenRecord(value, kind)
            elif isinstance(child, Mapping):
                _walk(child, here)

    _walk(data, prefix)
    return found


def load_token_records(directory: str | Path) -> dict[str, TokenRecord]:
    """
    Does: Merge the token maps of every file under `directory` (later files win).
    Raises: TokenSourceError on unreadable or malformed JSON.
    """
    records: dict[str, TokenRecord] = {}
    for doc in load_token_documents(find_token_files(directory)):
        records.update(extract_token_paths(doc.data))
    logger.debug("Loaded %d token paths from %s", len(records), directory)
    return records


# ── Validator plumbing ───────────────────────────────────────────────────────
def display_path(path: Path, root: Path) -> str:
    """Does: Path relative to the tokens directory's parent, for messages."""
    try:
        return str(path.relative_to(root.parent))
    except ValueError:
        return str(path)


def read_json_document(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def iter_documents(
    directory: str | Path, result: ValidationResult
) -> Iterator[tuple[str, Mapping[str, Any]]]:
    """
    Does: Yield `(label, data)` for every token file; unreadable files and
          non-object roots are recorded on `result` as errors instead.
    """
    root = Path(directory)
    for path in find_token_files(root):
        label = display_path(path, root)
        result.files.append(label)
        try:
            data = read_json_document(path)
        except (OSError, json.JSONDecodeError) as e:
            result.errors.append(f"{label}: Failed to parse JSON - {e}")
            continue
        if not isinstance(data, dict):
            result.errors.append(f"{label}: Token file root must be a JSON object")
            continue
        yield label, data
