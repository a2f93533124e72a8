"""Caller-supplied records consumed by the resolution engine.

Raw catalog items stay plain ``dict`` trees; only the shop configuration,
per-product toggles and overrides get concrete types.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from .errors import InvalidOverrideError
from .values import clean_text, snake_case

RawCatalogItem = Mapping[str, Any]

# Legacy names some stores still send for shop settings.
_SHOP_FIELD_ALIASES = {
    "id": "shop_id",
    "shop_currency": "currency",
    "woo_store_url": "store_url",
}


@dataclass
class ShopSettings:
    """Tenant-wide configuration: shop-owned values plus default mappings.

    ``field_mappings`` maps a feed attribute to a custom extraction path. A
    ``None`` entry means the shop has no custom path for that attribute.
    """

    shop_id: str
    shop_name: str | None = None
    seller_name: str | None = None
    seller_url: str | None = None
    store_url: str | None = None
    seller_privacy_policy: str | None = None
    seller_tos: str | None = None
    return_policy: str | None = None
    return_window: int | None = None
    currency: str | None = None
    dimension_unit: str | None = None
    weight_unit: str | None = None
    field_mappings: dict[str, str | None] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        """Read a shop field by snake_case or camelCase name."""
        key = snake_case(name)
        key = _SHOP_FIELD_ALIASES.get(key, key)
        if key == "field_mappings" or key not in _SHOP_FIELD_NAMES:
            return None
        return getattr(self, key)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> ShopSettings:
        values: dict[str, Any] = {}
        for raw_key, raw_value in payload.items():
            key = snake_case(raw_key)
            key = _SHOP_FIELD_ALIASES.get(key, key)
            if key in _SHOP_FIELD_NAMES:
                values[key] = raw_value

        shop_id = clean_text(values.pop("shop_id", None))
        if shop_id is None:
            raise ValueError("Shop settings require a shop id.")

        mappings = values.pop("field_mappings", None) or {}
        if not isinstance(mappings, Mapping):
            raise ValueError("field_mappings must be an object of attribute -> path.")

        return cls(
            shop_id=shop_id,
            field_mappings={str(key): value for key, value in mappings.items()},
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        data = {name: getattr(self, name) for name in _SHOP_FIELD_NAMES}
        data["field_mappings"] = dict(self.field_mappings)
        return data


_SHOP_FIELD_NAMES = frozenset(item.name for item in fields(ShopSettings))


@dataclass(frozen=True)
class ProductFlags:
    """Per-product feed-inclusion toggles."""

    search_enabled: bool = True
    checkout_enabled: bool = False

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> ProductFlags:
        if not payload:
            return cls()
        search = payload.get("search_enabled", payload.get("enable_search", True))
        checkout = payload.get("checkout_enabled", payload.get("enable_checkout", False))
        return cls(search_enabled=_as_bool(search), checkout_enabled=_as_bool(checkout))


class OverrideKind(str, Enum):
    LITERAL = "static"
    MAPPING = "mapping"


@dataclass(frozen=True)
class ProductOverride:
    """One per-product, per-attribute override.

    A literal carries ``value`` verbatim. A mapping carries ``path``; a mapping
    with ``path=None`` excludes the attribute from the product's feed entry.
    """

    kind: OverrideKind
    value: Any = None
    path: str | None = None

    @classmethod
    def literal(cls, value: Any) -> ProductOverride:
        return cls(kind=OverrideKind.LITERAL, value=value)

    @classmethod
    def mapping(cls, path: str | None) -> ProductOverride:
        return cls(kind=OverrideKind.MAPPING, path=clean_text(path))

    @property
    def is_literal(self) -> bool:
        return self.kind is OverrideKind.LITERAL

    @property
    def excludes(self) -> bool:
        return self.kind is OverrideKind.MAPPING and self.path is None

    def to_dict(self) -> dict[str, Any]:
        if self.is_literal:
            return {"type": self.kind.value, "value": self.value}
        return {"type": self.kind.value, "value": self.path}


@dataclass(frozen=True)
class ProductContext:
    """What the conditional rules need to know about the product itself."""

    is_variant: bool = False
    product_type: str | None = None
    flags: ProductFlags = field(default_factory=ProductFlags)

    @property
    def has_variants(self) -> bool:
        return self.is_variant or (self.product_type or "").lower() == "variable"

    @classmethod
    def from_item(cls, item: RawCatalogItem | None, flags: ProductFlags | None = None) -> ProductContext:
        item = item or {}
        parent_id = item.get("parent_id")
        try:
            is_variant = int(parent_id or 0) > 0
        except (TypeError, ValueError):
            is_variant = False
        product_type = clean_text(item.get("type"))
        if product_type == "variation":
            is_variant = True
        return cls(is_variant=is_variant, product_type=product_type, flags=flags or ProductFlags())


def parse_overrides(payload: Mapping[str, Any] | None) -> dict[str, ProductOverride]:
    """Parse ``{attribute: {"type": "static"|"mapping", "value": ...}}`` payloads."""
    if not payload:
        return {}
    if not isinstance(payload, Mapping):
        raise InvalidOverrideError("Overrides must be an object keyed by feed attribute.")

    overrides: dict[str, ProductOverride] = {}
    for attribute, entry in payload.items():
        if isinstance(entry, ProductOverride):
            overrides[str(attribute)] = entry
            continue
        if not isinstance(entry, Mapping):
            raise InvalidOverrideError(f"Override for {attribute} must be an object.")

        kind = str(entry.get("type") or entry.get("kind") or "").strip().lower()
        if kind in {"static", "literal"}:
            overrides[str(attribute)] = ProductOverride.literal(entry.get("value"))
        elif kind == "mapping":
            path = entry["path"] if "path" in entry else entry.get("value")
            overrides[str(attribute)] = ProductOverride.mapping(path)
        else:
            raise InvalidOverrideError(
                f"Override for {attribute} has unsupported type: {kind or '<missing>'}"
            )
    return overrides


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


__all__ = [
    "OverrideKind",
    "ProductContext",
    "ProductFlags",
    "ProductOverride",
    "RawCatalogItem",
    "ShopSettings",
    "parse_overrides",
]
