from typing import Any

from babel.numbers import get_currency_symbol

from ..config import get_settings
from ..core.reprocess import ProductSnapshot

_DEFAULT_DESCRIPTION_LIMITS = {
    "low": 80,
    "medium": 160,
    "high": 240,
}
_SUPPORTED_VERBOSITIES = {"low", "medium", "high", "extrahigh"}


def _truncate_description(value: Any, *, limit: int) -> str:
    text = str(value or "").strip()
    if len(text) <= limit:
        return text
    return f"{text[:limit].rstrip()}... [truncated]"


def _normalize_verbosity(verbosity: str) -> str:
    normalized = str(verbosity or "").strip().lower()
    if normalized in _SUPPORTED_VERBOSITIES:
        return normalized
    return "medium"


def _format_number(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def _format_price(value: Any) -> str:
    """Render a resolved ``"<amount> <ISO 4217>"`` price with its currency symbol."""
    text = str(value or "").strip()
    if not text:
        return ""
    parts = text.split()
    if len(parts) != 2:
        return text
    amount_text, currency_code = parts
    try:
        number = _format_number(float(amount_text))
    except ValueError:
        return text

    try:
        symbol = get_currency_symbol(currency_code.upper(), locale="en_US")
    except Exception:
        symbol = currency_code.upper()

    if symbol.isalpha():
        return f"{number} {symbol}"
    return f"{number}{symbol}"


def _issue_count(grouped: dict[str, list[str]]) -> int:
    return sum(len(messages) for messages in grouped.values())


def snapshot_to_loggable(
    snapshot: ProductSnapshot,
    *,
    verbosity: str | None = None,
    debug_enabled: bool | None = None,
) -> dict[str, Any] | None:
    settings = get_settings()
    if debug_enabled is None:
        debug_enabled = settings.debug

    if not debug_enabled:
        return None

    resolved_verbosity = verbosity if verbosity is not None else settings.log_verbosity
    level = _normalize_verbosity(resolved_verbosity)
    data = snapshot.to_dict()
    if level == "extrahigh":
        return data

    resolved = data["resolved"]
    if level == "high":
        if "description" in resolved:
            resolved["description"] = _truncate_description(
                resolved.get("description"),
                limit=_DEFAULT_DESCRIPTION_LIMITS["high"],
            )
        return data

    summary: dict[str, Any] = {
        "product_id": snapshot.product_id,
        "is_valid": snapshot.is_valid,
        "title": resolved.get("title"),
        "price": _format_price(resolved.get("price")),
        "error_count": _issue_count(snapshot.errors),
        "warning_count": _issue_count(snapshot.warnings),
    }
    if level == "low":
        return summary

    summary.update(
        {
            "sale_price": _format_price(resolved.get("sale_price")),
            "availability": resolved.get("availability"),
            "description": _truncate_description(
                resolved.get("description"),
                limit=_DEFAULT_DESCRIPTION_LIMITS["medium"],
            ),
            "field_count": len(resolved),
            "errors": data["errors"],
            "warnings": data["warnings"],
        }
    )
    return summary


__all__ = ["snapshot_to_loggable"]
