"""Identifier transforms."""

from __future__ import annotations

from typing import Any

from ..catalog import RawCatalogItem, ShopSettings
from ..values import (
    clean_text,
    format_decimal,
    ordered_unique_strings,
    parse_decimal_money,
    to_positive_int,
)


def generate_stable_id(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    own_id = clean_text(value) or clean_text((item or {}).get("id"))
    if own_id is None:
        return None
    return _scoped(shop, own_id)


def generate_group_id(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    """Variants share their parent's group; simple products form their own."""
    parent_id = to_positive_int(value)
    if parent_id is not None:
        return _scoped(shop, str(parent_id))

    own_id = clean_text((item or {}).get("id"))
    if own_id is None:
        return None
    return _scoped(shop, own_id)


def generate_offer_id(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    item = item or {}
    base = clean_text(value) or clean_text(item.get("sku")) or clean_text(item.get("id"))
    if base is None:
        return None

    parts = [base]
    if shop is not None:
        parts.append(shop.shop_id)
    price = parse_decimal_money(item.get("price"))
    if price is not None:
        parts.append(format_decimal(price))
    return "-".join(parts)


def format_related_ids(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    if not isinstance(value, list) or not value:
        return None
    ids = ordered_unique_strings(value)
    return ",".join(ids) or None


def _scoped(shop: ShopSettings | None, identifier: str) -> str:
    if shop is None:
        return identifier
    return f"{shop.shop_id}-{identifier}"


__all__ = [
    "format_related_ids",
    "generate_group_id",
    "generate_offer_id",
    "generate_stable_id",
]
