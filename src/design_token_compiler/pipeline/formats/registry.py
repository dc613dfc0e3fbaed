# src/design_token_compiler/pipeline/formats/registry.py
from __future__ import annotations

"""
formats.registry

Does: Map every output format name to its renderer in a fixed, read-only table.
Returns: FORMATS, UnknownFormatError, get_renderer(), render().
Used By: Platform build planner (file specs name their format).
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from design_token_compiler.pipeline.formats.base import Renderer
from design_token_compiler.pipeline.formats.brightscript import brightscript_tokens
from design_token_compiler.pipeline.formats.swift import swift_tokens
from design_token_compiler.pipeline.formats.typescript import typescript_nested
from design_token_compiler.pipeline.formats.web import css_variables, javascript_es6, scss_variables
from design_token_compiler.pipeline.formats.xml import (
    android_colors,
    android_resources,
    xaml_resource_dictionary,
)
from design_token_compiler.pipeline.tokens.model import TokenCollection

__all__ = ["FORMATS", "UnknownFormatError", "get_renderer", "render"]


class UnknownFormatError(KeyError):
    """Raise when a file spec names a format that is not registered."""


FORMATS: Mapping[str, Renderer] = MappingProxyType(
    {
        "css/variables": css_variables,
        "scss/variables": scss_variables,
        "javascript/es6": javascript_es6,
        "typescript/nested": typescript_nested,
        "brightscript/tokens": brightscript_tokens,
        "swift/tokens": swift_tokens,
        "xaml/resourceDictionary": xaml_resource_dictionary,
        "android/colors": android_colors,
        "android/resources": android_resources,
    }
)


def get_renderer(name: str) -> Renderer:
    try:
        return FORMATS[name]
    except KeyError:
        raise UnknownFormatError(f"Unknown format '{name}'") from None


def render(name: str, tokens: TokenCollection, options: Mapping[str, Any] | None = None) -> str:
    """Does: Look up the renderer by name and produce the document string."""
    return get_renderer(name)(tokens, options or {})
