"""Core engine API.

The core layer is framework-agnostic and safe to import from scripts, tests,
CLI commands, and web frontends.
"""

from typing import Any

_LAZY_EXPORTS: dict[str, tuple[str, str]] = {
    "CoreConfig": ("feedshift.core.config", "CoreConfig"),
    "FIELD_SPECS": ("feedshift.core.spec", "FIELD_SPECS"),
    "FieldResolver": ("feedshift.core.resolve", "FieldResolver"),
    "FieldSpec": ("feedshift.core.spec", "FieldSpec"),
    "InMemoryProductStore": ("feedshift.core.reprocess", "InMemoryProductStore"),
    "ProcessResult": ("feedshift.core.api", "ProcessResult"),
    "ProductContext": ("feedshift.core.catalog", "ProductContext"),
    "ProductFlags": ("feedshift.core.catalog", "ProductFlags"),
    "ProductOverride": ("feedshift.core.catalog", "ProductOverride"),
    "ReprocessOrchestrator": ("feedshift.core.reprocess", "ReprocessOrchestrator"),
    "ResolvedFieldSet": ("feedshift.core.resolve", "ResolvedFieldSet"),
    "ShopSettings": ("feedshift.core.catalog", "ShopSettings"),
    "ValidationOutcome": ("feedshift.core.validate", "ValidationOutcome"),
    "check_literal_overrides": ("feedshift.core.api", "check_literal_overrides"),
    "config_from_env": ("feedshift.core.config", "config_from_env"),
    "extract": ("feedshift.core.extract", "extract"),
    "get_field_spec": ("feedshift.core.spec", "get_field_spec"),
    "get_transform": ("feedshift.core.transforms", "get_transform"),
    "list_fields": ("feedshift.core.api", "list_fields"),
    "parse_overrides": ("feedshift.core.catalog", "parse_overrides"),
    "process_product": ("feedshift.core.api", "process_product"),
    "register_transform": ("feedshift.core.transforms", "register_transform"),
    "resolve_product": ("feedshift.core.api", "resolve_product"),
    "validate_feed_entry": ("feedshift.core.api", "validate_feed_entry"),
    "validate_literal": ("feedshift.core.api", "validate_literal"),
}

__all__ = [
    "CoreConfig",
    "FIELD_SPECS",
    "FieldResolver",
    "FieldSpec",
    "InMemoryProductStore",
    "ProcessResult",
    "ProductContext",
    "ProductFlags",
    "ProductOverride",
    "ReprocessOrchestrator",
    "ResolvedFieldSet",
    "ShopSettings",
    "ValidationOutcome",
    "check_literal_overrides",
    "config_from_env",
    "extract",
    "get_field_spec",
    "get_transform",
    "list_fields",
    "parse_overrides",
    "process_product",
    "register_transform",
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
