"""
value.py

Does: Pure value transforms and filters applied per platform after reference
      resolution (color byte orders, unit suffixes, numeric coercion).
Returns: Filter predicates (is_color, is_dimension, is_font_size) and transform
         functions (color_argb, color_roku_hex, size_px, size_dp, size_sp,
         size_number).
Used by: transforms.registry (the only place these get names).

Every transform takes a Token and returns the new value; none mutates the token.
"""

from __future__ import annotations

import re
from typing import Any

from design_token_compiler.pipeline.color.normalize import (
    parse_color,
    to_argb_hex,
    to_hex8,
)
from design_token_compiler.pipeline.tokens.model import NUMERIC_TYPES, Token, format_number, is_numeric

__all__ = [
    "is_color",
    "is_dimension",
    "is_font_size",
    "is_typography",
    "color_argb",
    "color_roku_hex",
    "size_px",
    "size_dp",
    "size_sp",
    "size_number",
    "parse_leading_number",
]

# parseFloat-style leading numeric literal ("16", "-1.5", ".5rem")
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")

_FONT_TYPES = frozenset(
    {"fontFamily", "fontWeight", "fontFamilies", "fontSizes", "fontWeights",
     "lineHeights", "letterSpacing", "paragraphSpacing", "typography"}
)


# ─────────────────────────────────────────────────────────────────────────────
# Filters
# ─────────────────────────────────────────────────────────────────────────────

def is_color(token: Token) -> bool:
    return token.type == "color"


def is_dimension(token: Token) -> bool:
    return token.type in NUMERIC_TYPES


def is_font_size(token: Token) -> bool:
    """Does: Dotted path mentions a font and a size or line height."""
    dotted = token.dotted_path
    return "font" in dotted and ("size" in dotted or "line_height" in dotted)


def is_typography(token: Token) -> bool:
    return token.category == "typography" or token.type in _FONT_TYPES


# ─────────────────────────────────────────────────────────────────────────────
# Color
# ─────────────────────────────────────────────────────────────────────────────

def color_argb(token: Token) -> str:
    """Does: #16b087 → #FF16B087 ; #16b08780 → #8016B087 (Android, XAML)."""
    return "#" + to_argb_hex(parse_color(token.value))


def color_roku_hex(token: Token) -> str:
    """Does: #16b087 → "0x16B087FF" with the quotes kept for BrightScript."""
    return f'"0x{to_hex8(parse_color(token.value))}"'


# ─────────────────────────────────────────────────────────────────────────────
# Sizes
# ─────────────────────────────────────────────────────────────────────────────

def _suffix(value: Any, unit: str) -> Any:
    return f"{format_number(value)}{unit}" if is_numeric(value) else value


def size_px(token: Token) -> Any:
    return _suffix(token.value, "px")


def size_dp(token: Token) -> Any:
    return _suffix(token.value, "dp")


def size_sp(token: Token) -> Any:
    return _suffix(token.value, "sp")


def parse_leading_number(text: str) -> int | float | None:
    """
    Does: Read the leading numeric literal of a string, parseFloat-style.
    Returns: int when integral, float otherwise, None when there is none.
    """
    m = _LEADING_NUMBER_RE.match(text)
    if not m:
        return None
    number = float(m.group(1))
    return int(number) if number.is_integer() else number


def size_number(token: Token) -> Any:
    """Does: "16" → 16, "1.5rem" → 1.5 ; numbers and non-numeric strings unchanged."""
    value = token.value
    if isinstance(value, str):
        number = parse_leading_number(value)
        return value if number is None else number
    return value
