"""Stable public API facade for the Feedshift core engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .catalog import ProductContext, ProductFlags, ProductOverride, ShopSettings, parse_overrides
from .config import config_from_env
from .errors import UnknownFieldError
from .resolve import FieldResolver, ResolvedFieldSet
from .spec import (
    CATEGORY_CONFIG,
    FIELD_SPECS,
    FieldCategory,
    FieldSpec,
    accepts_literal_override,
    fields_by_category,
)
from .validate import LiteralCheck, ValidationOptions, ValidationOutcome
from .validate import validate_feed_entry as _validate_feed_entry
from .validate import validate_literal as _validate_literal


@dataclass
class ProcessResult:
    resolved: ResolvedFieldSet
    outcome: ValidationOutcome
    eligible: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "resolved": self.resolved.to_dict(),
            "excluded": sorted(self.resolved.excluded),
            "sources": {key: source.value for key, source in self.resolved.sources.items()},
            "validation": self.outcome.to_snapshot(),
            "eligible": self.eligible,
        }


def resolve_product(
    item: Mapping[str, Any] | None,
    *,
    shop: ShopSettings | Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
    flags: ProductFlags | Mapping[str, Any] | None = None,
) -> ResolvedFieldSet:
    resolver = FieldResolver(_coerce_shop(shop))
    return resolver.resolve_all(item, _coerce_overrides(overrides), _coerce_flags(flags))


def validate_feed_entry(
    entry: Mapping[str, Any],
    *,
    context: ProductContext | None = None,
    strict: bool | None = None,
    skip_fields: Iterable[str] = (),
    validate_optional: bool = True,
) -> ValidationOutcome:
    config = config_from_env(strict=strict)
    options = ValidationOptions(
        skip_fields=frozenset(skip_fields),
        strict=config.strict,
        validate_optional=validate_optional,
    )
    return _validate_feed_entry(entry, context=context, options=options)


def validate_literal(attribute: str, value: str | None) -> LiteralCheck:
    return _validate_literal(attribute, value)


def check_literal_overrides(overrides: Mapping[str, Any] | None) -> dict[str, str]:
    """Errors keyed by attribute for literal overrides the feed would reject.

    Overrides the resolver would ignore, and non-text literals, are left to the
    resolver.
    """
    rejected: dict[str, str] = {}
    for attribute, override in _coerce_overrides(overrides).items():
        if not override.is_literal or not isinstance(override.value, str):
            continue
        if not accepts_literal_override(attribute):
            continue
        try:
            check = _validate_literal(attribute, override.value)
        except UnknownFieldError:
            continue
        if not check.is_valid:
            rejected[attribute] = check.error or "Invalid value"
    return rejected


def process_product(
    item: Mapping[str, Any] | None,
    *,
    shop: ShopSettings | Mapping[str, Any] | None = None,
    overrides: Mapping[str, Any] | None = None,
    flags: ProductFlags | Mapping[str, Any] | None = None,
    strict: bool | None = None,
) -> ProcessResult:
    """Resolve then validate one product, as the reprocess workflow does."""
    product_flags = _coerce_flags(flags) or ProductFlags()
    resolved = resolve_product(item, shop=shop, overrides=overrides, flags=product_flags)
    context = ProductContext.from_item(item, product_flags)
    outcome = validate_feed_entry(resolved.values, context=context, strict=strict)
    eligible = outcome.valid and product_flags.search_enabled
    return ProcessResult(resolved=resolved, outcome=outcome, eligible=eligible)


def describe_field(spec: FieldSpec) -> dict[str, Any]:
    return {
        "attribute": spec.name,
        "dataType": spec.data_type,
        "requirement": spec.requirement.value,
        "category": spec.category.value,
        "description": spec.description,
        "example": spec.example,
        "supportedValues": spec.supported_values,
        "dependency": spec.dependency,
        "validationRules": list(spec.validation_rules),
        "defaultMapping": spec.mapping.as_path_string() if spec.mapping else None,
        "transform": spec.mapping.transform if spec.mapping else None,
        "locked": spec.locked,
    }


def list_fields(category: FieldCategory | str | None = None) -> list[dict[str, Any]]:
    specs = fields_by_category(category) if category else list(FIELD_SPECS)
    return [describe_field(spec) for spec in specs]


def list_categories() -> list[dict[str, Any]]:
    ordered = sorted(CATEGORY_CONFIG.items(), key=lambda item: item[1].order)
    return [{"key": category.value, "label": info.label, "order": info.order} for category, info in ordered]


def _coerce_shop(shop: ShopSettings | Mapping[str, Any] | None) -> ShopSettings | None:
    if shop is None or isinstance(shop, ShopSettings):
        return shop
    return ShopSettings.from_dict(shop)


def _coerce_flags(flags: ProductFlags | Mapping[str, Any] | None) -> ProductFlags | None:
    if flags is None or isinstance(flags, ProductFlags):
        return flags
    return ProductFlags.from_dict(flags)


def _coerce_overrides(overrides: Mapping[str, Any] | None) -> dict[str, ProductOverride]:
    return parse_overrides(overrides)


__all__ = [
    "ProcessResult",
    "check_literal_overrides",
    "describe_field",
    "list_categories",
    "list_fields",
    "process_product",
    "resolve_product",
    "validate_feed_entry",
    "validate_literal",
]
