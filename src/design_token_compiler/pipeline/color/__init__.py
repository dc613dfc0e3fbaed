"""
color.
=====

Does: Aggregate the color normalizer used across transforms, renderers and checks.
Returns: Pure functions over the canonical RGBA type; no side effects.
"""

from .normalize import (
    RGBA,
    ColorParseError,
    alpha_fraction,
    is_opaque,
    parse_color,
    to_argb_hex,
    to_hex6,
    to_hex8,
)

__all__ = [
    "RGBA",
    "ColorParseError",
    "parse_color",
    "to_hex8",
    "to_argb_hex",
    "to_hex6",
    "alpha_fraction",
    "is_opaque",
]
