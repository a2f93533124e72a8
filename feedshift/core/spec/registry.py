"""Lookups over the feed attribute table."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from ..errors import UnknownFieldError
from .entities import FieldCategory, FieldSpec, Requirement
from .fields import FIELD_SPECS


@dataclass(frozen=True)
class CategoryInfo:
    label: str
    order: int


CATEGORY_CONFIG: Mapping[FieldCategory, CategoryInfo] = MappingProxyType(
    {
        FieldCategory.FLAGS: CategoryInfo("Feed Flags", 1),
        FieldCategory.BASIC_PRODUCT_DATA: CategoryInfo("Basic Product Data", 2),
        FieldCategory.ITEM_INFORMATION: CategoryInfo("Item Information", 3),
        FieldCategory.MEDIA: CategoryInfo("Media", 4),
        FieldCategory.PRICE_PROMOTIONS: CategoryInfo("Price & Promotions", 5),
        FieldCategory.AVAILABILITY_INVENTORY: CategoryInfo("Availability & Inventory", 6),
        FieldCategory.VARIANTS: CategoryInfo("Variants", 7),
        FieldCategory.FULFILLMENT: CategoryInfo("Fulfillment", 8),
        FieldCategory.MERCHANT_INFO: CategoryInfo("Merchant Info", 9),
        FieldCategory.RETURNS: CategoryInfo("Returns", 10),
        FieldCategory.PERFORMANCE_SIGNALS: CategoryInfo("Performance Signals", 11),
        FieldCategory.COMPLIANCE: CategoryInfo("Compliance", 12),
        FieldCategory.REVIEWS_QANDA: CategoryInfo("Reviews & Q&A", 13),
        FieldCategory.RELATED_PRODUCTS: CategoryInfo("Related Products", 14),
        FieldCategory.GEO_TAGGING: CategoryInfo("Geo Tagging", 15),
    }
)

SEARCH_TOGGLE = "enable_search"
CHECKOUT_TOGGLE = "enable_checkout"
TOGGLE_FIELDS = frozenset({SEARCH_TOGGLE, CHECKOUT_TOGGLE})

_SPECS_BY_NAME: Mapping[str, FieldSpec] = MappingProxyType({spec.name: spec for spec in FIELD_SPECS})

REQUIRED_FIELDS: tuple[FieldSpec, ...] = tuple(spec for spec in FIELD_SPECS if spec.is_required)
LOCKED_FIELDS: frozenset[str] = frozenset(spec.name for spec in FIELD_SPECS if spec.locked)

# Locked attributes whose extraction path is fixed but whose value can still
# be replaced by a hand-written literal.
STATIC_OVERRIDE_ALLOWED_LOCKED_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "product_category"}
)


def get_field_spec(name: str) -> FieldSpec:
    spec = _SPECS_BY_NAME.get(name)
    if spec is None:
        raise UnknownFieldError(name)
    return spec


def find_field_spec(name: str) -> FieldSpec | None:
    return _SPECS_BY_NAME.get(name)


def field_names() -> list[str]:
    return [spec.name for spec in FIELD_SPECS]


def fields_by_category(category: FieldCategory | str) -> list[FieldSpec]:
    wanted = FieldCategory(category)
    return [spec for spec in FIELD_SPECS if spec.category is wanted]


def accepts_literal_override(name: str) -> bool:
    return name not in LOCKED_FIELDS or name in STATIC_OVERRIDE_ALLOWED_LOCKED_FIELDS


def accepts_mapping_override(name: str) -> bool:
    return name not in LOCKED_FIELDS and name not in TOGGLE_FIELDS


def field_stats() -> dict[str, object]:
    by_category = {
        category.value: len(fields_by_category(category))
        for category in sorted(CATEGORY_CONFIG, key=lambda item: CATEGORY_CONFIG[item].order)
    }
    return {
        "total": len(FIELD_SPECS),
        "required": len(REQUIRED_FIELDS),
        "recommended": sum(1 for spec in FIELD_SPECS if spec.requirement is Requirement.RECOMMENDED),
        "locked": len(LOCKED_FIELDS),
        "by_category": by_category,
    }


def default_field_mappings() -> dict[str, str | None]:
    """Attribute name to default path string; ``None`` when unmapped."""
    mappings: dict[str, str | None] = {}
    for spec in FIELD_SPECS:
        mappings[spec.name] = spec.mapping.as_path_string() if spec.mapping else None
    return mappings


__all__ = [
    "CATEGORY_CONFIG",
    "CHECKOUT_TOGGLE",
    "CategoryInfo",
    "LOCKED_FIELDS",
    "REQUIRED_FIELDS",
    "SEARCH_TOGGLE",
    "STATIC_OVERRIDE_ALLOWED_LOCKED_FIELDS",
    "TOGGLE_FIELDS",
    "accepts_literal_override",
    "accepts_mapping_override",
    "default_field_mappings",
    "field_names",
    "field_stats",
    "fields_by_category",
    "find_field_spec",
    "get_field_spec",
]
