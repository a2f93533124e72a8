"""Stock-status mapping and default-value transforms."""

from __future__ import annotations

from typing import Any

from ..catalog import RawCatalogItem, ShopSettings
from ..values import is_empty

STOCK_STATUS_MAP = {
    "instock": "in_stock",
    "outofstock": "out_of_stock",
    "onbackorder": "preorder",
}
DEFAULT_AVAILABILITY = "in_stock"


def map_stock_status(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str:
    if not isinstance(value, str):
        return DEFAULT_AVAILABILITY
    return STOCK_STATUS_MAP.get(value.strip().lower(), DEFAULT_AVAILABILITY)


def default_to_new(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> Any:
    return "new" if is_empty(value) else value


def default_to_zero(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> Any:
    return 0 if value is None else value


__all__ = [
    "DEFAULT_AVAILABILITY",
    "STOCK_STATUS_MAP",
    "default_to_new",
    "default_to_zero",
    "map_stock_status",
]
