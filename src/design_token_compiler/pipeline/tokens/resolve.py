"""
resolve.py
==========

Does: Load token source documents, merge them in declared order (last wins on
      identical paths), and resolve `{a.b.c}` references into literal values.
Returns: load_token_documents(), flatten_document(), resolve_tokens(),
         load_and_resolve().
Used By: Platform build planner (one fresh collection per platform).

Contract:
- A node is a token when it holds `value` or `$value`; `type`/`$type` and
  `description`/`$description` ride along.
- `$`-prefixed keys on non-token nodes (`$metadata`, `$themes`) are skipped.
- A value that is exactly one reference takes the referenced value as-is
  (numbers stay numbers); references embedded in a longer string are
  interpolated as text. Dicts and lists are resolved element-wise.
- Cycles and references to missing paths are fatal.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path as FsPath
from typing import Any

from design_token_compiler.pipeline.general.utils.log import debug
from design_token_compiler.pipeline.tokens.model import (
    TOKEN_TYPES,
    Path,
    Token,
    TokenCollection,
    format_number,
    is_numeric,
)
from design_token_compiler.pipeline.transforms.naming import camel_case

__all__ = [
    "TokenSourceError",
    "TokenResolutionError",
    "CircularReferenceError",
    "DanglingReferenceError",
    "TokenDocument",
    "REFERENCE_RE",
    "is_token_node",
    "find_references",
    "load_token_documents",
    "flatten_document",
    "resolve_tokens",
    "load_and_resolve",
]

logger = logging.getLogger(__name__)

REFERENCE_RE = re.compile(r"\{([^{}]+)\}")


# ── Exceptions ───────────────────────────────────────────────────────────────
class TokenSourceError(ValueError):
    """Raise when a token source cannot be read or is not valid JSON."""


class TokenResolutionError(ValueError):
    """Base class for reference resolution failures."""


class CircularReferenceError(TokenResolutionError):
    def __init__(self, chain: Sequence[str]):
        self.chain = tuple(chain)
        super().__init__("Circular token reference: " + " -> ".join(self.chain))


class DanglingReferenceError(TokenResolutionError):
    def __init__(self, path: str, reference: str):
        self.path = path
        self.reference = reference
        super().__init__(f"Token '{path}' references missing token '{{{reference}}}'")


# ── Source documents ─────────────────────────────────────────────────────────
@dataclass(frozen=True)
class TokenDocument:
    """A parsed source file (or in-memory tree) plus a label for messages."""

    label: str
    data: Mapping[str, Any]


def load_token_documents(paths: Iterable[str | FsPath]) -> list[TokenDocument]:
    """
    Does: Read each JSON source in order.
    Raises: TokenSourceError on missing files, bad JSON, or a non-object root.
    """
    docs: list[TokenDocument] = []
    for p in paths:
        path = FsPath(p)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise TokenSourceError(f"Token source not found: {path}") from e
        except json.JSONDecodeError as e:
            raise TokenSourceError(f"Invalid JSON in {path}: {e}") from e
        except OSError as e:
            raise TokenSourceError(f"Cannot read {path}: {e}") from e
        if not isinstance(data, dict):
            raise TokenSourceError(f"{path}: token source root must be a JSON object")
        docs.append(TokenDocument(label=str(path), data=data))
    return docs


def is_token_node(node: Any) -> bool:
    return isinstance(node, Mapping) and ("value" in node or "$value" in node)


def _pick(node: Mapping[str, Any], key: str) -> Any:
    return node[key] if key in node else node.get(f"${key}")


def flatten_document(doc: TokenDocument) -> list[Token]:
    """
    Does: Walk one document depth-first and emit unresolved Tokens in
          encounter order.
    """
    out: list[Token] = []

    def _walk(node: Mapping[str, Any], path: Path) -> None:
        for key, child in node.items():
            if is_token_node(child):
                value = _pick(child, "value")
                out.append(
                    Token(
                        path=(*path, key),
                        value=value,
                        type=_pick(child, "type"),
                        original_value=value,
                        description=_pick(child, "description"),
                        source=doc.label,
                    )
                )
            elif isinstance(child, Mapping) and not key.startswith("$"):
                _walk(child, (*path, key))

    _walk(doc.data, ())
    return out


# ── Reference resolution ─────────────────────────────────────────────────────
def find_references(value: Any) -> list[str]:
    """Does: Collect every `{ref}` path inside a (possibly composite) value."""
    if isinstance(value, str):
        return [m.strip() for m in REFERENCE_RE.findall(value)]
    if isinstance(value, Mapping):
        return [r for v in value.values() for r in find_references(v)]
    if isinstance(value, list):
        return [r for v in value for r in find_references(v)]
    return []


def _as_text(value: Any) -> str:
    if is_numeric(value):
        return format_number(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class _Resolver:
    def __init__(self, raw: Mapping[Path, Token]):
        self._raw = raw
        self._done: dict[Path, Any] = {}
        self._stack: list[Path] = []

    def value_of(self, path: Path) -> Any:
        if path in self._done:
            return self._done[path]
        if path in self._stack:
            chain = [".".join(p) for p in self._stack[self._stack.index(path):]]
            raise CircularReferenceError([*chain, ".".join(path)])
        self._stack.append(path)
        try:
            token = self._raw[path]
            resolved = self._substitute(token.value, token.dotted_path)
        finally:
            self._stack.pop()
        self._done[path] = resolved
        return resolved

    def _lookup(self, ref: str, owner: str) -> Any:
        target = tuple(ref.strip().split("."))
        if target not in self._raw:
            raise DanglingReferenceError(owner, ref.strip())
        return self.value_of(target)

    def _substitute(self, value: Any, owner: str) -> Any:
        if isinstance(value, str):
            whole = REFERENCE_RE.fullmatch(value.strip())
            if whole:
                return self._lookup(whole.group(1), owner)
            return REFERENCE_RE.sub(lambda m: _as_text(self._lookup(m.group(1), owner)), value)
        if isinstance(value, Mapping):
            return {k: self._substitute(v, owner) for k, v in value.items()}
        if isinstance(value, list):
            return [self._substitute(v, owner) for v in value]
        return value


def resolve_tokens(documents: Sequence[TokenDocument]) -> TokenCollection:
    """
    Does: Merge documents (later wins, first position kept) and resolve all
          references.
    Returns: TokenCollection of reference-free Tokens named in camelCase.
    Raises: CircularReferenceError / DanglingReferenceError.
    """
    merged: dict[Path, Token] = {}
    for doc in documents:
        for token in flatten_document(doc):
            if token.path in merged:
                debug(f"override {token.dotted_path} from {doc.label}", topic="resolve")
            merged[token.path] = token

    resolver = _Resolver(merged)
    resolved: list[Token] = []
    for path, token in merged.items():
        if token.type is not None and token.type not in TOKEN_TYPES:
            logger.warning("Token %s has unknown type %r", token.dotted_path, token.type)
        resolved.append(
            Token(
                path=path,
                value=resolver.value_of(path),
                type=token.type,
                name=camel_case(path),
                original_value=token.original_value,
                description=token.description,
                source=token.source,
            )
        )
    debug(f"resolved {len(resolved)} tokens from {len(documents)} document(s)", topic="resolve")
    return TokenCollection(tuple(resolved))


def load_and_resolve(paths: Iterable[str | FsPath]) -> TokenCollection:
    """Does: load_token_documents() then resolve_tokens()."""
    return resolve_tokens(load_token_documents(paths))
