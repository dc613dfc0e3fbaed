"""
xml.py

Does: XML-family renderers: XAML ResourceDictionary (Xbox) and Android
      resource files (colors.xml / dimens.xml).
Returns: xaml_resource_dictionary(), android_colors(), android_resources().
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from xml.sax.saxutils import escape, quoteattr

from design_token_compiler.pipeline.formats.base import banner, scalar_text
from design_token_compiler.pipeline.tokens.model import NUMERIC_TYPES, Token, TokenCollection, is_numeric

__all__ = ["xaml_resource_dictionary", "android_colors", "android_resources", "android_resource_tag"]

_XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_XAML_OPEN = """\
<ResourceDictionary
    xmlns="http://schemas.microsoft.com/winfx/2006/xaml/presentation"
    xmlns:x="http://schemas.microsoft.com/winfx/2006/xaml"
    xmlns:sys="clr-namespace:System;assembly=mscorlib">"""


def _xaml_entry(token: Token) -> str:
    key = quoteattr(token.name)
    text = escape(scalar_text(token.value))
    if token.type == "color":
        return f"    <Color x:Key={key}>{text}</Color>"
    if is_numeric(token.value):
        return f"    <sys:Double x:Key={key}>{text}</sys:Double>"
    return f"    <sys:String x:Key={key}>{text}</sys:String>"


def xaml_resource_dictionary(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    lines = [banner(options, "XAML", "xml"), _XAML_OPEN]
    lines.extend(_xaml_entry(t) for t in tokens)
    lines.append("</ResourceDictionary>")
    return "\n".join(lines) + "\n"


def android_resource_tag(token: Token, resource_type: str | None = None) -> str:
    """Does: Explicit resource_type wins; otherwise color → color, sizes → dimen, else string."""
    if resource_type:
        return resource_type
    if token.type == "color":
        return "color"
    if token.type in NUMERIC_TYPES:
        return "dimen"
    return "string"


def _android_document(tokens: TokenCollection, options: Mapping[str, Any], resource_type: str | None) -> str:
    lines = [_XML_DECLARATION, banner(options, "Android", "xml"), "<resources>"]
    for t in tokens:
        tag = android_resource_tag(t, resource_type)
        lines.append(f"  <{tag} name={quoteattr(t.name)}>{escape(scalar_text(t.value))}</{tag}>")
    lines.append("</resources>")
    return "\n".join(lines) + "\n"


def android_colors(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    return _android_document(tokens, options, "color")


def android_resources(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    return _android_document(tokens, options, options.get("resource_type"))
