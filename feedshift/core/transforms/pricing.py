"""Price, sale window and popularity transforms."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
import math
from typing import Any

from ..catalog import RawCatalogItem, ShopSettings
from ..values import clean_text, parse_decimal_money

_CENTS = Decimal("0.01")


def format_price_with_currency(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    """Render ``"79.99 USD"`` using the shop currency; bare amount without one."""
    amount = parse_decimal_money(value)
    if amount is None:
        return None

    text = str(amount.quantize(_CENTS, rounding=ROUND_HALF_UP))
    currency = clean_text(shop.currency) if shop is not None else None
    return f"{text} {currency.upper()}" if currency else text


def format_sale_date_range(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> str | None:
    """``"YYYY-MM-DD / YYYY-MM-DD"`` for items with an active sale window."""
    item = item or {}
    if not clean_text(item.get("sale_price")):
        return None

    start = _iso_date(item.get("date_on_sale_from"))
    end = _iso_date(item.get("date_on_sale_to"))
    if start is None or end is None:
        return None
    return f"{start.isoformat()} / {end.isoformat()}"


def calculate_popularity_score(value: Any, item: RawCatalogItem, shop: ShopSettings | None = None) -> float | None:
    """Map total sales onto a 0-5 scale: ``min(5, log10(sales + 1))``."""
    sales = parse_decimal_money(value)
    if sales is None or sales <= 0:
        return None
    score = min(5.0, math.log10(float(sales) + 1))
    return round(score, 1)


def _iso_date(value: Any) -> date | None:
    text = clean_text(value)
    if text is None:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


__all__ = [
    "calculate_popularity_score",
    "format_price_with_currency",
    "format_sale_date_range",
]
