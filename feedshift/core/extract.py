"""Path-based value extraction from raw catalog items.

Paths are dot-separated segments. A segment may index a list
(``images[0]``). Two leading forms are special:

* ``meta_data.<key>`` searches the item's ``{key, value}`` metadata list.
* ``attributes.<name>`` searches named variant attributes, case-insensitively.

``shop.<field>`` paths resolve against shop settings instead of the item.
Every miss yields ``None``; extraction never raises.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
import re
from typing import Any

from .catalog import RawCatalogItem, ShopSettings
from .values import is_empty

SHOP_PREFIX = "shop."
_INDEXED_SEGMENT_RE = re.compile(r"^(\w+)\[(\d+)\]$")


def is_shop_path(path: str | None) -> bool:
    return bool(path) and str(path).startswith(SHOP_PREFIX)


def extract(item: RawCatalogItem | None, path: str | None, shop: ShopSettings | None = None) -> Any:
    if not path:
        return None

    if is_shop_path(path):
        return extract_shop_value(shop, path[len(SHOP_PREFIX):])

    if not isinstance(item, Mapping):
        return None

    head, _, rest = path.partition(".")
    if head == "meta_data" and rest:
        return extract_meta_value(item, rest)
    if head == "attributes" and rest:
        return extract_attribute_value(item, rest)

    return extract_nested_value(item, path)


def extract_nested_value(item: Any, path: str) -> Any:
    current = item
    for segment in path.split("."):
        if current is None:
            return None

        match = _INDEXED_SEGMENT_RE.match(segment)
        if match:
            current = _get_key(current, match.group(1))
            current = _get_index(current, int(match.group(2)))
        else:
            current = _get_key(current, segment)
    return current


def extract_meta_value(item: RawCatalogItem, key: str) -> Any:
    entries = item.get("meta_data")
    if not _is_list(entries):
        return None

    for entry in entries:
        if isinstance(entry, Mapping) and entry.get("key") == key:
            value = entry.get("value")
            return None if is_empty(value) else value
    return None


def extract_attribute_value(item: RawCatalogItem, name: str) -> Any:
    """Variant attributes carry ``option``; parent attributes carry ``options``."""
    attributes = item.get("attributes")
    if not _is_list(attributes):
        return None

    wanted = name.strip().lower()
    for attribute in attributes:
        if not isinstance(attribute, Mapping):
            continue
        attribute_name = str(attribute.get("name") or "").strip().lower()
        if attribute_name not in {wanted, f"pa_{wanted}"}:
            continue

        option = attribute.get("option")
        if option is not None:
            return option

        options = attribute.get("options")
        if _is_list(options) and options:
            if len(options) == 1:
                return options[0]
            return ", ".join(str(option) for option in options)
        return None
    return None


def extract_shop_value(shop: ShopSettings | None, field_name: str) -> Any:
    if shop is None or not field_name:
        return None
    return shop.get(field_name)


def _get_key(current: Any, key: str) -> Any:
    if isinstance(current, Mapping):
        return current.get(key)
    return None


def _get_index(current: Any, index: int) -> Any:
    if not _is_list(current) or index >= len(current):
        return None
    return current[index]


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


__all__ = [
    "SHOP_PREFIX",
    "extract",
    "extract_attribute_value",
    "extract_meta_value",
    "extract_nested_value",
    "extract_shop_value",
    "is_shop_path",
]
