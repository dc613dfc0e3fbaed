"""
normalize.py
============

Does: Parse heterogeneous color literals (3/6/8-digit hex, rgb()/rgba()) into a
      canonical RGBA quadruple and render it back as hex in the byte orders the
      platform renderers need.
Used By: Color value transforms (ARGB / Roku hex), the Swift renderer, and the
         token format validator.
Returns: RGBA, parse_color(), to_hex8(), to_argb_hex(), to_hex6(), alpha_fraction().
"""

from __future__ import annotations

import logging
import math
import re
from typing import NamedTuple

from webcolors import hex_to_rgb

# Public surface
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
__docformat__ = "google"

logger = logging.getLogger(__name__)


# ── Types ─────────────────────────────────────────────────────────────────────
class RGBA(NamedTuple):
    """Canonical color: every channel an integer in 0–255 (alpha 255 = opaque)."""

    r: int
    g: int
    b: int
    a: int = 255


class ColorParseError(ValueError):
    """Raise when a literal is neither a supported hex form nor rgb()/rgba()."""


# =============================================================================
# 1) PARSING
# =============================================================================

_NUM = r"(\d+(?:\.\d*)?|\.\d+)"
_RGBA_RE = re.compile(
    rf"^rgba?\(\s*{_NUM}\s*,\s*{_NUM}\s*,\s*{_NUM}\s*(?:,\s*{_NUM}\s*)?\)$",
    re.IGNORECASE,
)
_HEX_RE = re.compile(r"^[0-9a-fA-F]+$")


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _parse_rgba_function(m: re.Match[str]) -> RGBA:
    r, g, b, a = m.groups()
    channels = [_round_half_up(float(v)) for v in (r, g, b)]
    if any(c > 255 for c in channels):
        raise ColorParseError(f"rgba() channel out of range: {m.group(0)!r}")
    if a is None:
        return RGBA(*channels, 255)
    alpha = float(a)
    if alpha > 1.0:
        raise ColorParseError(f"rgba() alpha must be a 0..1 fraction: {m.group(0)!r}")
    return RGBA(*channels, _round_half_up(alpha * 255))


def _parse_hex(hx: str) -> RGBA:
    if not _HEX_RE.match(hx):
        raise ColorParseError(f"Not a hex color: {hx!r}")
    if len(hx) in (3, 6):
        rgb = hex_to_rgb(f"#{hx}")
        return RGBA(rgb.red, rgb.green, rgb.blue, 255)
    if len(hx) == 8:
        r, g, b, a = (int(hx[i:i + 2], 16) for i in range(0, 8, 2))
        return RGBA(r, g, b, a)
    raise ColorParseError(f"Hex color must have 3, 6 or 8 digits: {hx!r}")


def parse_color(literal: object) -> RGBA:
    """
    Does: Parse `#abc`, `#aabbcc`, `#aabbccdd` (alpha last) or `rgba(r, g, b[, a])`.
    Returns: RGBA with channels 0–255.
    Raises: ColorParseError for anything else.
    """
    if not isinstance(literal, str):
        raise ColorParseError(f"Color literal must be a string, got {type(literal).__name__}")
    s = literal.strip().strip("\"'").strip()

    m = _RGBA_RE.match(s)
    if m:
        return _parse_rgba_function(m)

    return _parse_hex(s[1:] if s.startswith("#") else s)


# =============================================================================
# 2) RENDERING
# =============================================================================

def _clamp(c: int) -> int:
    return max(0, min(255, int(c)))


def _hex(*channels: int) -> str:
    return "".join(f"{_clamp(c):02X}" for c in channels)


def to_hex8(color: RGBA) -> str:
    """Does: Render as RRGGBBAA (alpha last), uppercase."""
    return _hex(color.r, color.g, color.b, color.a)


def to_argb_hex(color: RGBA) -> str:
    """Does: Render as AARRGGBB (alpha first), uppercase."""
    return _hex(color.a, color.r, color.g, color.b)


def to_hex6(color: RGBA) -> str:
    """Does: Render the RGB part only as RRGGBB, uppercase."""
    return _hex(color.r, color.g, color.b)


def alpha_fraction(color: RGBA) -> float:
    """Does: Alpha as a 0.00–1.00 fraction rounded to two decimals."""
    return round(_clamp(color.a) / 255, 2)


def is_opaque(color: RGBA) -> bool:
    return _clamp(color.a) == 255
