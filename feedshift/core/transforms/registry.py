"""Named registry of value transforms.

A transform receives ``(value, item, shop)`` and returns the feed value.
Names are stored snake_case; camelCase lookups are accepted.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from ..catalog import RawCatalogItem, ShopSettings
from ..values import snake_case

TransformFn = Callable[[Any, RawCatalogItem, ShopSettings | None], Any]


@dataclass
class TransformRegistry:
    transforms: dict[str, TransformFn] = field(default_factory=dict)

    def register(self, name: str, handler: TransformFn) -> None:
        self.transforms[snake_case(name)] = handler

    def get(self, name: str) -> TransformFn | None:
        return self.transforms.get(snake_case(name))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and snake_case(name) in self.transforms

    def names(self) -> list[str]:
        return sorted(self.transforms.keys())


TRANSFORMS = TransformRegistry()


def register_transform(name: str, handler: TransformFn) -> None:
    TRANSFORMS.register(name, handler)


def get_transform(name: str) -> TransformFn | None:
    return TRANSFORMS.get(name)


def list_transforms() -> list[str]:
    return TRANSFORMS.names()


def _register_defaults() -> None:
    from . import availability, catalog_data, identifiers, measurements, pricing, text

    defaults: dict[str, TransformFn] = {
        "strip_html": text.strip_html,
        "clean_variation_title": text.clean_variation_title,
        "build_category_path": text.build_category_path,
        "format_q_and_a": text.format_q_and_a,
        "generate_stable_id": identifiers.generate_stable_id,
        "generate_group_id": identifiers.generate_group_id,
        "generate_offer_id": identifiers.generate_offer_id,
        "format_related_ids": identifiers.format_related_ids,
        "format_price_with_currency": pricing.format_price_with_currency,
        "format_sale_date_range": pricing.format_sale_date_range,
        "calculate_popularity_score": pricing.calculate_popularity_score,
        "format_dimensions": measurements.format_dimensions,
        "add_unit": measurements.add_unit,
        "add_weight_unit": measurements.add_weight_unit,
        "extract_additional_images": catalog_data.extract_additional_images,
        "extract_gtin": catalog_data.extract_gtin,
        "extract_brand": catalog_data.extract_brand,
        "extract_custom_variant": catalog_data.extract_custom_variant,
        "extract_custom_variant_option": catalog_data.extract_custom_variant_option,
        "build_shipping_string": catalog_data.build_shipping_string,
        "map_stock_status": availability.map_stock_status,
        "default_to_new": availability.default_to_new,
        "default_to_zero": availability.default_to_zero,
    }
    for name, handler in defaults.items():
        if name not in TRANSFORMS.transforms:
            TRANSFORMS.register(name, handler)


_register_defaults()


__all__ = [
    "TRANSFORMS",
    "TransformFn",
    "TransformRegistry",
    "get_transform",
    "list_transforms",
    "register_transform",
]
