"""Resolution Engine: decides the value emitted for every feed attribute.

Precedence per attribute, highest first:

1. feed-inclusion toggles read the product flags (a literal override still wins)
2. product literal override
3. product mapping override (``None`` path excludes the attribute)
4. shop default mapping
5. registry default mapping
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any

from ..catalog import ProductFlags, ProductOverride, RawCatalogItem, ShopSettings
from ..extract import SHOP_PREFIX, extract, extract_shop_value, is_shop_path
from ..spec import (
    FIELD_SPECS,
    SEARCH_TOGGLE,
    TOGGLE_FIELDS,
    FieldMapping,
    FieldSpec,
    accepts_literal_override,
    accepts_mapping_override,
)
from ..transforms import TRANSFORMS, TransformRegistry
from ..values import clean_text, is_empty

logger = logging.getLogger(__name__)


class FieldSource(str, Enum):
    TOGGLE = "toggle"
    LITERAL = "static"
    PRODUCT_MAPPING = "product_mapping"
    SHOP_MAPPING = "shop_mapping"
    DEFAULT = "default"
    EXCLUDED = "excluded"


@dataclass
class ResolvedFieldSet:
    """Resolved attribute values for one product; empty values are dropped.

    Attributes excluded by a ``None`` mapping override are listed in
    ``excluded`` so they stay distinguishable from attributes that simply
    resolved to nothing.
    """

    values: dict[str, Any] = field(default_factory=dict)
    excluded: set[str] = field(default_factory=set)
    sources: dict[str, FieldSource] = field(default_factory=dict)

    def get(self, attribute: str, default: Any = None) -> Any:
        return self.values.get(attribute, default)

    def __contains__(self, attribute: object) -> bool:
        return attribute in self.values

    def __len__(self) -> int:
        return len(self.values)

    def is_excluded(self, attribute: str) -> bool:
        return attribute in self.excluded

    def to_dict(self) -> dict[str, Any]:
        return dict(self.values)


class FieldResolver:
    """Resolver bound to one shop's configuration.

    Shop-level mappings are validated and compiled once at construction, so a
    single instance can be reused across every product of the shop.
    """

    def __init__(
        self,
        shop: ShopSettings | None = None,
        *,
        specs: Iterable[FieldSpec] = FIELD_SPECS,
        transforms: TransformRegistry = TRANSFORMS,
    ) -> None:
        self.shop = shop
        self.specs = tuple(specs)
        self.transforms = transforms
        self._shop_mappings = self._compile_shop_mappings()

    def resolve(
        self,
        spec: FieldSpec,
        item: RawCatalogItem | None,
        overrides: Mapping[str, ProductOverride] | None = None,
        flags: ProductFlags | None = None,
    ) -> Any:
        value, _ = self._resolve_with_source(spec, item, overrides or {}, flags)
        return value

    def resolve_all(
        self,
        item: RawCatalogItem | None,
        overrides: Mapping[str, ProductOverride] | None = None,
        flags: ProductFlags | None = None,
    ) -> ResolvedFieldSet:
        overrides = overrides or {}
        resolved = ResolvedFieldSet()
        for spec in self.specs:
            value, source = self._resolve_with_source(spec, item, overrides, flags)
            if source is FieldSource.EXCLUDED:
                resolved.excluded.add(spec.name)
                continue
            if source is None or is_empty(value):
                continue
            resolved.values[spec.name] = value
            resolved.sources[spec.name] = source
        return resolved

    def _resolve_with_source(
        self,
        spec: FieldSpec,
        item: RawCatalogItem | None,
        overrides: Mapping[str, ProductOverride],
        flags: ProductFlags | None,
    ) -> tuple[Any, FieldSource | None]:
        override = overrides.get(spec.name)

        if spec.name in TOGGLE_FIELDS:
            return self._resolve_toggle(spec, override, flags, item)

        if override is not None and override.is_literal:
            if accepts_literal_override(spec.name):
                return override.value, FieldSource.LITERAL
            logger.warning(
                "Ignoring static override for locked attribute %s (product %s).",
                spec.name,
                _product_id(item),
            )
        elif override is not None:
            if not accepts_mapping_override(spec.name):
                logger.warning(
                    "Ignoring mapping override for locked attribute %s (product %s).",
                    spec.name,
                    _product_id(item),
                )
            elif override.excludes:
                return None, FieldSource.EXCLUDED
            else:
                value = self._resolve_custom_path(spec, override.path or "", item)
                return value, FieldSource.PRODUCT_MAPPING

        shop_mapping = self._shop_mappings.get(spec.name)
        if shop_mapping is not None:
            return self._resolve_custom_path(spec, shop_mapping, item), FieldSource.SHOP_MAPPING

        if spec.mapping is not None:
            return self._apply_mapping(spec, spec.mapping, item), FieldSource.DEFAULT

        return None, None

    def _resolve_toggle(
        self,
        spec: FieldSpec,
        override: ProductOverride | None,
        flags: ProductFlags | None,
        item: RawCatalogItem | None,
    ) -> tuple[Any, FieldSource | None]:
        if override is not None and override.is_literal and override.value is not None:
            return override.value, FieldSource.LITERAL
        if override is not None and not override.is_literal:
            logger.warning(
                "Ignoring mapping override for locked attribute %s (product %s).",
                spec.name,
                _product_id(item),
            )
        if flags is None:
            return None, None
        enabled = flags.search_enabled if spec.name == SEARCH_TOGGLE else flags.checkout_enabled
        return ("true" if enabled else "false"), FieldSource.TOGGLE

    def _resolve_custom_path(self, spec: FieldSpec, path: str, item: RawCatalogItem | None) -> Any:
        if is_shop_path(path):
            return extract_shop_value(self.shop, path[len(SHOP_PREFIX):])
        base = spec.mapping or FieldMapping()
        return self._apply_mapping(spec, base.with_path(path), item)

    def _apply_mapping(self, spec: FieldSpec, mapping: FieldMapping, item: RawCatalogItem | None) -> Any:
        if mapping.shop_field:
            value = extract_shop_value(self.shop, mapping.path or "")
            if is_empty(value) and mapping.fallback:
                value = extract_shop_value(self.shop, mapping.fallback)
            return None if is_empty(value) else value

        value = extract(item, mapping.path, self.shop) if mapping.path else None
        if is_empty(value) and mapping.fallback:
            value = extract(item, mapping.fallback, self.shop)

        if mapping.transform:
            value = self._apply_transform(spec, mapping.transform, value, item)
        return value

    def _apply_transform(self, spec: FieldSpec, name: str, value: Any, item: RawCatalogItem | None) -> Any:
        handler = self.transforms.get(name)
        if handler is None:
            logger.warning("Unknown transform %s for attribute %s; passing value through.", name, spec.name)
            return value
        try:
            return handler(value, item or {}, self.shop)
        except Exception:
            logger.exception(
                "Transform %s failed for attribute %s (product %s).",
                name,
                spec.name,
                _product_id(item),
            )
            return None

    def _compile_shop_mappings(self) -> dict[str, str]:
        if self.shop is None:
            return {}

        known = {spec.name for spec in self.specs}
        compiled: dict[str, str] = {}
        for attribute, raw_path in self.shop.field_mappings.items():
            path = clean_text(raw_path)
            if path is None or attribute not in known:
                continue
            if not accepts_mapping_override(attribute):
                logger.warning(
                    "Ignoring shop mapping for locked attribute %s (shop %s).",
                    attribute,
                    self.shop.shop_id,
                )
                continue
            compiled[attribute] = path
        return compiled


def resolve_field(
    spec: FieldSpec,
    item: RawCatalogItem | None,
    shop: ShopSettings | None = None,
    override: ProductOverride | None = None,
    flags: ProductFlags | None = None,
) -> Any:
    overrides = {spec.name: override} if override is not None else None
    return FieldResolver(shop).resolve(spec, item, overrides, flags)


def resolve_all(
    item: RawCatalogItem | None,
    shop: ShopSettings | None = None,
    overrides: Mapping[str, ProductOverride] | None = None,
    flags: ProductFlags | None = None,
) -> ResolvedFieldSet:
    return FieldResolver(shop).resolve_all(item, overrides, flags)


def _product_id(item: RawCatalogItem | None) -> Any:
    return (item or {}).get("id")


__all__ = [
    "FieldResolver",
    "FieldSource",
    "ResolvedFieldSet",
    "resolve_all",
    "resolve_field",
]
