"""Public package entrypoint for the Feedshift engine.

This package provides a stable import surface for the product feed field
resolution and validation engine, plus optional frontend adapters (CLI and
FastAPI server).
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Any

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "FIELD_SPECS": ("feedshift.core", "FIELD_SPECS"),
    "FieldSpec": ("feedshift.core", "FieldSpec"),
    "ReprocessOrchestrator": ("feedshift.core", "ReprocessOrchestrator"),
    "ShopSettings": ("feedshift.core", "ShopSettings"),
    "app": ("feedshift.server.main", "app"),
    "create_app": ("feedshift.server.main", "create_app"),
    "process_product": ("feedshift.core", "process_product"),
    "resolve_product": ("feedshift.core", "resolve_product"),
    "validate_feed_entry": ("feedshift.core", "validate_feed_entry"),
    "validate_literal": ("feedshift.core", "validate_literal"),
}

try:
    __version__ = version("feedshift")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "FIELD_SPECS",
    "FieldSpec",
    "ReprocessOrchestrator",
    "ShopSettings",
    "__version__",
    "app",
    "create_app",
    "process_product",
    "resolve_product",
    "validate_feed_entry",
    "validate_literal",
]


def __getattr__(name: str) -> Any:
    target = _LAZY_EXPORTS.get(name)
    if target is None:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module_name, attribute_name = target
    module = __import__(module_name, fromlist=[attribute_name])
    value = getattr(module, attribute_name)
    globals()[name] = value
    return value
