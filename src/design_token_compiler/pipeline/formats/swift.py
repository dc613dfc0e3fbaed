"""
swift.py
========

Does: Render a SwiftUI source file: one `public enum` per token category (first
      path segment) holding `public static let` constants, followed by the
      `Color(hex:alpha:)` helper extension.
Used By: tvOS platform.

Rules:
- color tokens go through the color normalizer: opaque → `Color(hex: 0xRRGGBB)`,
  translucent → `Color(hex: 0xRRGGBB, alpha: 0.50)`;
- numbers are `CGFloat` constants;
- everything else is a quoted String constant.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from design_token_compiler.pipeline.color.normalize import alpha_fraction, is_opaque, parse_color, to_hex6
from design_token_compiler.pipeline.formats.base import DEFAULT_NAMESPACE, banner, double_quoted, scalar_text
from design_token_compiler.pipeline.tokens.model import Token, TokenCollection, is_numeric
from design_token_compiler.pipeline.transforms.naming import pascal_case

__all__ = ["swift_tokens", "swift_identifier", "swift_color", "COLOR_EXTENSION"]

_INVALID_IDENT_RE = re.compile(r"[^A-Za-z0-9_]")

COLOR_EXTENSION = """\
// MARK: - Color Extension
extension Color {
    init(hex: UInt, alpha: Double = 1) {
        self.init(
            .sRGB,
            red: Double((hex >> 16) & 0xff) / 255,
            green: Double((hex >> 08) & 0xff) / 255,
            blue: Double((hex >> 00) & 0xff) / 255,
            opacity: alpha
        )
    }
}
"""


def swift_identifier(token: Token) -> str:
    """Does: Join the path after the category with '_' and make it a legal identifier."""
    rest = token.path[1:] or token.path
    ident = _INVALID_IDENT_RE.sub("_", "_".join(rest))
    return f"_{ident}" if ident[:1].isdigit() else ident


def swift_color(value: Any) -> str:
    # SwiftUI-qualified so a `Color` category enum cannot shadow the type
    color = parse_color(value)
    if is_opaque(color):
        return f"SwiftUI.Color(hex: 0x{to_hex6(color)})"
    return f"SwiftUI.Color(hex: 0x{to_hex6(color)}, alpha: {alpha_fraction(color):.2f})"


def _declaration(token: Token) -> str:
    name = swift_identifier(token)
    if token.type == "color":
        return f"public static let {name} = {swift_color(token.value)}"
    if is_numeric(token.value):
        return f"public static let {name}: CGFloat = {scalar_text(token.value)}"
    return f"public static let {name} = {double_quoted(scalar_text(token.value))}"


def swift_tokens(tokens: TokenCollection, options: Mapping[str, Any]) -> str:
    namespace = options.get("namespace") or DEFAULT_NAMESPACE

    grouped: dict[str, list[Token]] = {}
    for token in tokens:
        grouped.setdefault(token.category, []).append(token)

    parts = [banner(options, "Swift", "line"), "", "import SwiftUI", "", f"public enum {namespace} {{"]
    for category, members in grouped.items():
        parts.append(f"    public enum {pascal_case((category,)) or 'Misc'} {{")
        parts.extend(f"        {_declaration(t)}" for t in members)
        parts.append("    }")
    parts.append("}")
    return "\n".join(parts) + "\n\n" + COLOR_EXTENSION
