"""
formats.
=======

Does: Output renderers, one per target syntax, behind a read-only name table.
"""

from .registry import FORMATS, UnknownFormatError, get_renderer, render

__all__ = ["FORMATS", "UnknownFormatError", "get_renderer", "render"]
