"""Text transforms: markup stripping, titles, category paths."""

from __future__ import annotations

from collections.abc import Mapping
from html import unescape
import re
from typing import Any

from ..catalog import RawCatalogItem, ShopSettings

_TAG_RE = re.compile(r"<[^>]*>")
_MAX_CATEGORY_DEPTH = 10


def strip_html(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str:
    if not value:
        return ""
    return unescape(_TAG_RE.sub("", str(value))).strip()


def clean_variation_title(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> Any:
    """Drop the duplicated parent name some platforms prepend to variation titles.

    ``"Shirt - Shirt - Red, M"`` becomes ``"Shirt - Red, M"``.
    """
    if not value or not isinstance(value, str):
        return value
    if not _is_variation(item):
        return value

    parts = value.split(" - ")
    if len(parts) < 3:
        return value
    if parts[0].strip() == parts[1].strip():
        return " - ".join(parts[1:])
    return value


def build_category_path(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str:
    """Deepest parent chain among the item's categories, joined with ``" > "``."""
    if not isinstance(value, list) or not value:
        return ""

    by_id: dict[Any, Mapping[str, Any]] = {}
    for category in value:
        if isinstance(category, Mapping) and category.get("id"):
            by_id[category["id"]] = category

    deepest: list[str] = []
    for category in value:
        if not isinstance(category, Mapping):
            continue
        path = _category_chain(category, by_id)
        if len(path) > len(deepest):
            deepest = path

    return " > ".join(deepest)


def format_q_and_a(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    if not value:
        return None
    if isinstance(value, list):
        blocks = [
            f"Q: {entry.get('q')}\nA: {entry.get('a')}"
            for entry in value
            if isinstance(entry, Mapping)
        ]
        return "\n\n".join(blocks) or None
    return value if isinstance(value, str) else None


def _category_chain(category: Mapping[str, Any], by_id: Mapping[Any, Mapping[str, Any]]) -> list[str]:
    path: list[str] = []
    current: Mapping[str, Any] | None = category
    depth = 0
    while current is not None and depth < _MAX_CATEGORY_DEPTH:
        name = current.get("name")
        if name:
            path.insert(0, str(name))
        parent = current.get("parent")
        current = by_id.get(parent) if parent and isinstance(parent, (int, str)) else None
        depth += 1
    return path


def _is_variation(item: RawCatalogItem) -> bool:
    try:
        return int((item or {}).get("parent_id") or 0) > 0
    except (TypeError, ValueError):
        return False


__all__ = [
    "build_category_path",
    "clean_variation_title",
    "format_q_and_a",
    "strip_html",
]
