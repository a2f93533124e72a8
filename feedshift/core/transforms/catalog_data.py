"""Transforms that pick values out of catalog sub-records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..catalog import RawCatalogItem, ShopSettings
from ..values import clean_text

GTIN_META_KEYS = ("_gtin", "gtin", "_upc", "upc", "_ean", "ean", "_isbn", "isbn")


def extract_additional_images(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> list[str]:
    """Every image source after the first; the first one feeds ``image_link``."""
    if not isinstance(value, list) or len(value) <= 1:
        return []
    sources: list[str] = []
    for image in value[1:]:
        if isinstance(image, Mapping):
            src = clean_text(image.get("src"))
            if src:
                sources.append(src)
    return sources


def extract_gtin(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    """Accept a barcode string directly or dig it out of a metadata list."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, list):
        return None

    for entry in value:
        if isinstance(entry, Mapping) and entry.get("key") in GTIN_META_KEYS:
            return clean_text(entry.get("value"))
    return None


def extract_brand(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    if isinstance(value, list) and value and isinstance(value[0], Mapping):
        return clean_text(value[0].get("name"))

    attributes = (item or {}).get("attributes")
    if not isinstance(attributes, list):
        return None
    for attribute in attributes:
        if isinstance(attribute, Mapping) and str(attribute.get("name") or "").lower() == "brand":
            return _first_option(attribute)
    return None


def extract_custom_variant(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    if not isinstance(value, list) or not value or not isinstance(value[0], Mapping):
        return None
    return clean_text(value[0].get("name"))


def extract_custom_variant_option(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    if not isinstance(value, list) or not value or not isinstance(value[0], Mapping):
        return None
    return _first_option(value[0])


def build_shipping_string(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    """``country:region:service_class:price`` entries from a list of shipping rows."""
    if isinstance(value, str):
        return clean_text(value)
    if not isinstance(value, list):
        return None

    entries: list[str] = []
    for row in value:
        if not isinstance(row, Mapping):
            continue
        parts = [clean_text(row.get(key)) or "" for key in ("country", "region", "service_class", "price")]
        if parts[0] and parts[3]:
            entries.append(":".join(parts))
    return ",".join(entries) or None


def _first_option(attribute: Mapping[str, Any]) -> str | None:
    option = attribute.get("option")
    if option is not None:
        return clean_text(option)
    options = attribute.get("options")
    if isinstance(options, list) and options:
        return clean_text(options[0])
    return None


__all__ = [
    "GTIN_META_KEYS",
    "build_shipping_string",
    "extract_additional_images",
    "extract_brand",
    "extract_custom_variant",
    "extract_custom_variant_option",
    "extract_gtin",
]
