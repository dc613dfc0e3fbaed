"""
tokens.
======

Does: Token data model and the source loader / reference resolver.
"""

from .model import TOKEN_TYPES, Token, TokenCollection
from .resolve import (
    CircularReferenceError,
    DanglingReferenceError,
    TokenDocument,
    TokenResolutionError,
    TokenSourceError,
    find_references,
    flatten_document,
    load_and_resolve,
    load_token_documents,
    resolve_tokens,
)

__all__ = [
    "TOKEN_TYPES",
    "Token",
    "TokenCollection",
    "TokenDocument",
    "TokenSourceError",
    "TokenResolutionError",
    "CircularReferenceError",
    "DanglingReferenceError",
    "find_references",
    "flatten_document",
    "load_token_documents",
    "resolve_tokens",
    "load_and_resolve",
]
