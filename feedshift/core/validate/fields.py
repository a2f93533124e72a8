"""Per-field validators and their dispatch tables.

Every validator takes ``(value, spec)`` and returns a ``FieldCheck``. A check
that is valid but carries a message is an advisory, surfaced as a warning.
Validators never raise.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
import logging
import math
import re
from typing import Any
from urllib.parse import urlsplit

from ..spec import FieldSpec

logger = logging.getLogger(__name__)

VALID_CURRENCIES = frozenset(
    {
        "USD", "EUR", "GBP", "CAD", "AUD", "JPY", "CNY", "INR", "BRL", "MXN",
        "CHF", "SEK", "NOK", "DKK", "PLN", "CZK", "HUF", "RON", "BGN", "HRK",
        "RUB", "TRY", "ZAR", "NZD", "SGD", "HKD", "KRW", "THB", "MYR", "IDR",
        "PHP", "VND", "AED", "SAR", "EGP", "NGN", "KES", "GHS", "MAD", "TND",
    }
)

PRICE_RE = re.compile(r"^\d+(\.\d{2})?\s[A-Z]{3}$")
GEO_PRICE_RE = re.compile(r"^(\d+(?:\.\d{2})?\s[A-Z]{3})(?:\s\([^()]+\))?$")
GTIN_RE = re.compile(r"^\d{8,14}$")
DIMENSIONS_RE = re.compile(r"^\d+\.?\d*x\d+\.?\d*x\d+\.?\d*\s\w+$")
MEASUREMENT_RE = re.compile(r"^\d+\.?\d*\s\w+$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
ALPHANUMERIC_RE = re.compile(r"^[a-zA-Z0-9\-_\s]+$")
COUNTRY_CODE_RE = re.compile(r"^[A-Z]{2}$")
INTEGER_RE = re.compile(r"^-?\d+$")
HTML_TAG_RE = re.compile(r"<[^>]+>")

CATEGORY_BAD_SEPARATORS = (" / ", " | ", ",")
DATE_RANGE_SEPARATOR = " / "
RATING_MAX = 5
RETURN_RATE_MAX = 100


@dataclass(frozen=True)
class FieldCheck:
    valid: bool
    error: str | None = None

    @property
    def is_advisory(self) -> bool:
        return self.valid and self.error is not None


OK = FieldCheck(valid=True)

Validator = Callable[[Any, FieldSpec], FieldCheck]


def _fail(message: str) -> FieldCheck:
    return FieldCheck(valid=False, error=message)


def validate_price(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail(f"{spec.name} must be a string")
    if not PRICE_RE.match(value):
        return _fail(
            f'Invalid price format: "{value}". Expected format: "XX.XX CCC" (e.g., "79.99 USD")'
        )
    return _check_currency(value.split(" ")[1])


def validate_geo_price(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail(f"{spec.name} must be a string")
    match = GEO_PRICE_RE.match(value)
    if not match:
        return _fail(
            f'Invalid price format: "{value}". Expected format: "XX.XX CCC (Region)" '
            '(e.g., "79.99 USD (California)")'
        )
    return _check_currency(match.group(1).split(" ")[1])


def _check_currency(currency: str) -> FieldCheck:
    if currency not in VALID_CURRENCIES:
        return _fail(
            f'Invalid currency code: "{currency}". Must be valid ISO 4217 code (e.g., USD, EUR, GBP)'
        )
    return OK


def validate_gtin(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail("GTIN must be a string")
    if not GTIN_RE.match(value.strip()):
        return _fail(f'Invalid GTIN: "{value}". Must be 8-14 digits with no dashes or spaces')
    return OK


def validate_url(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail(f"{spec.name} must be a string")
    return _check_url(value, spec.name)


def _check_url(value: str, label: str) -> FieldCheck:
    try:
        parts = urlsplit(value.strip())
    except ValueError:
        return _fail(f'Invalid URL format for {label}: "{value}"')

    if not parts.scheme or not parts.netloc:
        return _fail(f'Invalid URL format for {label}: "{value}"')
    if parts.scheme not in {"http", "https"}:
        return _fail(f"{label} must use HTTP or HTTPS protocol")
    if parts.scheme == "http":
        return FieldCheck(valid=True, error=f"{label} uses HTTP. HTTPS is preferred for security")
    return OK


def validate_url_list(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, (list, tuple)):
        return _fail(f"{spec.name} must be an array")

    advisory: FieldCheck | None = None
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            return _fail(f"{spec.name}[{index}] must be a string")
        check = _check_url(entry, f"{spec.name}[{index}]")
        if not check.valid:
            return check
        if check.is_advisory and advisory is None:
            advisory = check
    return advisory or OK


def validate_category_path(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail("Category path must be a string")
    if not value.strip():
        return _fail("Category path is required")
    if any(separator in value for separator in CATEGORY_BAD_SEPARATORS):
        return _fail(
            f'Invalid separator in category: "{value}". Use " > " not " / ", " | ", or ","'
        )
    return OK


def validate_enum(value: Any, spec: FieldSpec) -> FieldCheck:
    allowed = spec.allowed_values
    if not allowed:
        return OK
    if not isinstance(value, str):
        return _fail(f"{spec.name} must be a string")
    if value not in allowed:
        return _fail(f'Invalid {spec.name}: "{value}". Must be one of: {", ".join(allowed)}')
    return OK


def validate_boolean_enum(value: Any, spec: FieldSpec) -> FieldCheck:
    if isinstance(value, bool):
        return _fail(f'{spec.name} must be string "true" or "false", not boolean')
    if not isinstance(value, str):
        return _fail(f"{spec.name} must be a string")
    if value not in {"true", "false"}:
        return _fail(f'{spec.name} must be lowercase string "true" or "false"')
    return OK


def validate_dimensions(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail("Dimensions must be a string")
    if not DIMENSIONS_RE.match(value):
        return _fail(
            f'Invalid dimensions format: "{value}". Expected format: "LxWxH unit" (e.g., "12x8x5 in")'
        )
    return OK


def validate_weight(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail("Weight must be a string")
    if not MEASUREMENT_RE.match(value):
        return _fail(f'Invalid weight format: "{value}". Expected format: "XX unit" (e.g., "1.5 lb")')
    return OK


def validate_measurement(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail(f"{spec.name} must be a string")
    if not MEASUREMENT_RE.match(value):
        return _fail(f'{spec.name} must be a number with unit (e.g., "{spec.example or "10 mm"}")')
    return OK


def validate_date(value: Any, spec: FieldSpec) -> FieldCheck:
    return _check_date(value, spec.name)


def _check_date(value: Any, label: str) -> FieldCheck:
    if not isinstance(value, str):
        return _fail(f"{label} must be a string")
    if not DATE_RE.match(value):
        return _fail(f'Invalid date format for {label}: "{value}". Expected format: YYYY-MM-DD')
    try:
        date.fromisoformat(value)
    except ValueError:
        return _fail(f'Invalid date for {label}: "{value}". Not a valid date')
    return OK


def validate_date_range(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str):
        return _fail(f"{spec.name} must be a string")

    parts = value.split(DATE_RANGE_SEPARATOR)
    if len(parts) != 2:
        return _fail(
            f'Invalid date range format for {spec.name}: "{value}". '
            'Expected format: "YYYY-MM-DD / YYYY-MM-DD"'
        )

    start_check = _check_date(parts[0], f"{spec.name} start date")
    if not start_check.valid:
        return start_check
    end_check = _check_date(parts[1], f"{spec.name} end date")
    if not end_check.valid:
        return end_check

    if date.fromisoformat(parts[0]) >= date.fromisoformat(parts[1]):
        return _fail(f"{spec.name} start date must be before end date")
    return OK


def validate_string(value: Any, spec: FieldSpec) -> FieldCheck:
    text = _as_text(value)
    if text is None:
        return _fail(f"{spec.name} must be a string or number")

    max_length = spec.max_length
    if max_length is not None and len(text) > max_length:
        return _fail(
            f"{spec.name} exceeds maximum length of {max_length} characters (current: {len(text)})"
        )
    return OK


def validate_alphanumeric(value: Any, spec: FieldSpec) -> FieldCheck:
    check = validate_string(value, spec)
    if not check.valid:
        return check
    if not ALPHANUMERIC_RE.match(_as_text(value) or ""):
        return _fail(f"{spec.name} must be alphanumeric (letters, numbers, dashes, underscores only)")
    return OK


def validate_digits(value: Any, spec: FieldSpec) -> FieldCheck:
    text = _as_text(value)
    if text is None or not text.strip().isdigit():
        return _fail(f"{spec.name} must contain digits only")
    return validate_string(text.strip(), spec)


def validate_non_negative(value: Any, spec: FieldSpec) -> FieldCheck:
    number = _as_number(value)
    if number is None:
        return _fail(f"{spec.name} must be a valid number")
    if number < 0:
        return _fail(f"{spec.name} must be a positive number")
    return OK


def validate_integer(value: Any, spec: FieldSpec) -> FieldCheck:
    if isinstance(value, bool):
        return _fail(f"{spec.name} must be a whole number")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        if not isinstance(value, str) or not INTEGER_RE.match(value.strip()):
            return _fail(f"{spec.name} must be a whole number")
        value = int(value.strip())
    if value < 0:
        return _fail(f"{spec.name} must be a positive number")
    return OK


def validate_rating(value: Any, spec: FieldSpec) -> FieldCheck:
    check = validate_non_negative(value, spec)
    if not check.valid:
        return check
    number = _as_number(value)
    if number is not None and number > RATING_MAX:
        return _fail(f"{spec.name} must be between 0 and {RATING_MAX} (current: {_format_number(number)})")
    return OK


def validate_return_rate(value: Any, spec: FieldSpec) -> FieldCheck:
    raw = value.strip().removesuffix("%").strip() if isinstance(value, str) else value
    number = _as_number(raw)
    if number is None:
        return _fail(f'{spec.name} must be a percentage (e.g., "2%")')
    if number < 0 or number > RETURN_RATE_MAX:
        return _fail(f"{spec.name} must be between 0 and {RETURN_RATE_MAX}% (current: {_format_number(number)})")
    return OK


def validate_country_code(value: Any, spec: FieldSpec) -> FieldCheck:
    if not isinstance(value, str) or not COUNTRY_CODE_RE.match(value):
        return _fail(f'{spec.name} must be a 2-letter uppercase country code (e.g., "US")')
    return OK


def _as_text(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    return None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _format_number(number: float) -> str:
    return str(int(number)) if number.is_integer() else str(number)


ATTRIBUTE_VALIDATORS: Mapping[str, Validator] = {
    "enable_search": validate_boolean_enum,
    "enable_checkout": validate_boolean_enum,
    "gtin": validate_gtin,
    "product_category": validate_category_path,
    "availability": validate_enum,
    "condition": validate_enum,
    "dimensions": validate_dimensions,
    "weight": validate_weight,
    "geo_price": validate_geo_price,
    "additional_image_link": validate_url_list,
    "return_rate": validate_return_rate,
    "inventory_quantity": validate_integer,
    "return_window": validate_integer,
    "product_review_count": validate_integer,
    "store_review_count": validate_integer,
    "age_restriction": validate_non_negative,
    "popularity_score": validate_rating,
    "product_review_rating": validate_rating,
    "store_review_rating": validate_rating,
}

DATA_TYPE_VALIDATORS: Mapping[str, Validator] = {
    "Enum": validate_enum,
    "String": validate_string,
    "String (UTF-8 text)": validate_string,
    "String (numeric)": validate_digits,
    "String (alphanumeric)": validate_alphanumeric,
    "URL": validate_url,
    "URL array": validate_url_list,
    "Number + currency": validate_price,
    "Number + unit": validate_measurement,
    "Number + duration": validate_measurement,
    "Number": validate_non_negative,
    "Integer": validate_integer,
    "Date": validate_date,
    "Date range": validate_date_range,
    "Country code": validate_country_code,
}


def get_validator(spec: FieldSpec) -> Validator | None:
    return ATTRIBUTE_VALIDATORS.get(spec.name) or DATA_TYPE_VALIDATORS.get(spec.data_type)


def validate_field_value(spec: FieldSpec, value: Any) -> FieldCheck:
    """Run the validator registered for ``spec``; unknown types always pass."""
    validator = get_validator(spec)
    if validator is None:
        return OK
    try:
        return validator(value, spec)
    except Exception:
        logger.exception("Validator for %s failed; treating value as valid.", spec.name)
        return OK


def rule_advisories(spec: FieldSpec, value: Any) -> list[str]:
    """Non-blocking hints derived from the attribute's free-text rules."""
    if not isinstance(value, str):
        return []

    hints: list[str] = []
    if spec.has_rule("ALL CAPS") and len(value) > 3 and value == value.upper() and value != value.lower():
        hints.append(f"{spec.name}: avoid using ALL CAPS")
    if (spec.has_rule("plain text") or spec.has_rule("no HTML")) and HTML_TAG_RE.search(value):
        hints.append(f"{spec.name} must be plain text (no HTML tags)")
    return hints


__all__ = [
    "ATTRIBUTE_VALIDATORS",
    "DATA_TYPE_VALIDATORS",
    "FieldCheck",
    "OK",
    "VALID_CURRENCIES",
    "Validator",
    "get_validator",
    "rule_advisories",
    "validate_alphanumeric",
    "validate_boolean_enum",
    "validate_category_path",
    "validate_country_code",
    "validate_date",
    "validate_date_range",
    "validate_digits",
    "validate_dimensions",
    "validate_enum",
    "validate_field_value",
    "validate_geo_price",
    "validate_gtin",
    "validate_integer",
    "validate_measurement",
    "validate_non_negative",
    "validate_price",
    "validate_rating",
    "validate_return_rate",
    "validate_string",
    "validate_url",
    "validate_url_list",
    "validate_weight",
]
