"""Dimension and weight transforms.

Units come from the shop settings, falling back to a ``unit`` carried on the
item's dimensions object.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..catalog import RawCatalogItem, ShopSettings
from ..values import clean_text

_AXES = ("length", "width", "height")


def format_dimensions(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    if not isinstance(value, Mapping):
        return None
    length, width, height = (clean_text(value.get(axis)) for axis in _AXES)
    if not (length and width and height):
        return None

    unit = _dimension_unit(value, shop)
    if unit is None:
        return None
    return f"{length}x{width}x{height} {unit}"


def add_unit(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    """Suffix one axis with the dimension unit, only when all three axes are set."""
    text = clean_text(value)
    if text is None:
        return None

    dimensions = (item or {}).get("dimensions")
    if not isinstance(dimensions, Mapping):
        return None

    filled = [axis for axis in _AXES if _is_filled(dimensions.get(axis))]
    if len(filled) != len(_AXES):
        return None

    unit = _dimension_unit(dimensions, shop)
    if unit is None:
        return None
    return f"{text} {unit}"


def add_weight_unit(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    text = clean_text(value)
    if text is None:
        return None
    unit = clean_text(shop.weight_unit) if shop is not None else None
    if unit is None:
        return None
    return f"{text} {unit}"


def _dimension_unit(dimensions: Mapping[str, Any], shop: ShopSettings | None) -> str | None:
    shop_unit = clean_text(shop.dimension_unit) if shop is not None else None
    return shop_unit or clean_text(dimensions.get("unit"))


def _is_filled(value: Any) -> bool:
    text = clean_text(value)
    return text is not None and text != "0"


__all__ = ["add_unit", "add_weight_unit", "format_dimensions"]
