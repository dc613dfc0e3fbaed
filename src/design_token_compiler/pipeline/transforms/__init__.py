"""
transforms.
==========

Does: Value and name transforms applied per platform, plus named file filters.
"""

from .registry import (
    FILTERS,
    TRANSFORMS,
    Transform,
    UnknownTransformError,
    apply_transforms,
    get_transform,
)

__all__ = [
    "Transform",
    "TRANSFORMS",
    "FILTERS",
    "UnknownTransformError",
    "get_transform",
    "apply_transforms",
]
