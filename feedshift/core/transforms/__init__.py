"""Transform Library: named, total functions applied after extraction."""

from .registry import (
    TRANSFORMS,
    TransformFn,
    TransformRegistry,
    get_transform,
    list_transforms,
    register_transform,
)

__all__ = [
    "TRANSFORMS",
    "TransformFn",
    "TransformRegistry",
    "get_transform",
    "list_transforms",
    "register_transform",
]
