"""Static-Value Validator for hand-written literal overrides.

Checks operate on the string form; nothing is extracted or transformed. A
literal is emitted verbatim, so it must also pass the per-field feed validator.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date
import math
import re
from typing import Any
from urllib.parse import urlsplit

from ..spec import DataType, FieldSpec, get_field_spec
from .fields import ALPHANUMERIC_RE, VALID_CURRENCIES, validate_field_value

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_PRICE_RE = re.compile(r"^\d+(\.\d{1,2})?\s+[A-Z]{3}$")
_NUMBER_WITH_UNIT_RE = re.compile(r"^\d+(\.\d+)?\s+\w+$")
_MAX_LENGTH_RE = re.compile(r"Max (\d+) characters", re.IGNORECASE)
_NON_DIGIT_RE = re.compile(r"\D")
_DASH_OR_SPACE_RE = re.compile(r"[\s-]")


@dataclass(frozen=True)
class LiteralCheck:
    is_valid: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"isValid": self.is_valid}
        if self.error:
            payload["error"] = self.error
        return payload


_VALID = LiteralCheck(is_valid=True)


def _invalid(message: str) -> LiteralCheck:
    return LiteralCheck(is_valid=False, error=message)


def validate_literal(attribute: str, raw: str | None) -> LiteralCheck:
    """Check a literal override before it is stored.

    Raises ``UnknownFieldError`` for attributes outside the registry.
    """
    spec = get_field_spec(attribute)

    text = "" if raw is None else str(raw)
    if not text.strip():
        return _invalid("This field is required") if spec.is_required else _VALID

    value = text.strip()
    checker = _LITERAL_CHECKS.get(spec.data_type, _check_string)
    check = checker(value, spec)
    if not check.is_valid:
        return check

    field_check = validate_field_value(spec, value)
    if not field_check.valid:
        return _invalid(field_check.error or "Invalid value")
    return _VALID


def _check_enum(value: str, spec: FieldSpec) -> LiteralCheck:
    allowed = spec.allowed_values
    if not allowed or value in allowed:
        return _VALID
    return _invalid(f"Must be one of: {spec.supported_values}")


def _check_url(value: str, spec: FieldSpec) -> LiteralCheck:
    try:
        parts = urlsplit(value)
    except ValueError:
        return _invalid("Invalid URL format")
    if not parts.scheme or not parts.netloc:
        return _invalid("Invalid URL format")
    if parts.scheme not in {"http", "https"}:
        return _invalid("URL must use http or https protocol")
    return _VALID


def _check_price(value: str, spec: FieldSpec) -> LiteralCheck:
    if not _PRICE_RE.match(value):
        return _invalid('Must be in format "79.99 USD" (number + ISO 4217 currency code)')
    currency = value.split()[-1]
    if currency not in VALID_CURRENCIES:
        return _invalid(f'Unsupported currency code: "{currency}"')
    return _VALID


def _check_integer(value: str, spec: FieldSpec) -> LiteralCheck:
    try:
        number = int(value)
    except ValueError:
        return _invalid("Must be a whole number")
    if str(number) != value:
        return _invalid("Must be a whole number")
    return _VALID


def _check_number(value: str, spec: FieldSpec) -> LiteralCheck:
    try:
        number = float(value)
    except ValueError:
        return _invalid("Must be a valid number")
    if not math.isfinite(number):
        return _invalid("Must be a valid number")
    return _VALID


def _parse_date(value: str) -> tuple[date | None, str | None]:
    if not _DATE_RE.match(value):
        return None, "Must be in ISO 8601 format (YYYY-MM-DD)"
    try:
        return date.fromisoformat(value), None
    except ValueError:
        return None, "Invalid date"


def _check_date(value: str, spec: FieldSpec) -> LiteralCheck:
    _, error = _parse_date(value)
    return _invalid(error) if error else _VALID


def _check_date_range(value: str, spec: FieldSpec) -> LiteralCheck:
    parts = [part.strip() for part in value.split("/")]
    if len(parts) != 2:
        return _invalid('Must be in format "YYYY-MM-DD / YYYY-MM-DD"')

    start, start_error = _parse_date(parts[0])
    if start_error:
        return _invalid(f"Start date: {start_error}")
    end, end_error = _parse_date(parts[1])
    if end_error:
        return _invalid(f"End date: {end_error}")

    if start is not None and end is not None and start >= end:
        return _invalid("Start date must be before end date")
    return _VALID


def _check_number_with_unit(value: str, spec: FieldSpec) -> LiteralCheck:
    if not _NUMBER_WITH_UNIT_RE.match(value):
        return _invalid(f'Must be in format "{spec.example or "10 mm"}" (number + unit)')
    return _VALID


def _check_alphanumeric(value: str, spec: FieldSpec) -> LiteralCheck:
    check = _check_string(value, spec)
    if not check.is_valid:
        return check
    if not ALPHANUMERIC_RE.match(value):
        return _invalid("Must be alphanumeric (letters, numbers, dashes, underscores only)")
    return _VALID


def _check_string(value: str, spec: FieldSpec) -> LiteralCheck:
    """Apply the free-text rules that can be checked on a plain string."""
    for rule in spec.validation_rules:
        match = _MAX_LENGTH_RE.search(rule)
        if match:
            max_length = int(match.group(1))
            if len(value) > max_length:
                return _invalid(f"Maximum {max_length} characters allowed")

        if "8-14 digits" in rule:
            digits = _NON_DIGIT_RE.sub("", value)
            if not 8 <= len(digits) <= 14:
                return _invalid("GTIN must be 8-14 digits")

        if "No dashes or spaces" in rule and _DASH_OR_SPACE_RE.search(value):
            return _invalid("Must not contain dashes or spaces")
    return _VALID


_LITERAL_CHECKS: Mapping[str, Callable[[str, FieldSpec], LiteralCheck]] = {
    DataType.ENUM: _check_enum,
    DataType.URL: _check_url,
    DataType.PRICE: _check_price,
    DataType.INTEGER: _check_integer,
    DataType.NUMBER: _check_number,
    DataType.DATE: _check_date,
    DataType.DATE_RANGE: _check_date_range,
    DataType.MEASUREMENT: _check_number_with_unit,
    DataType.DURATION: _check_number_with_unit,
    DataType.STRING_ALPHANUMERIC: _check_alphanumeric,
}


def get_validation_info(attribute: str) -> dict[str, Any]:
    """Data type, supported values, rules and example for form hints."""
    spec = get_field_spec(attribute)
    return {
        "attribute": spec.name,
        "dataType": spec.data_type,
        "requirement": spec.requirement.value,
        "supportedValues": spec.supported_values,
        "validationRules": list(spec.validation_rules),
        "example": spec.example,
    }


__all__ = ["LiteralCheck", "get_validation_info", "validate_literal"]
