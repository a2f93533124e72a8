"""Conditional requirements and cross-field consistency checks."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from ..catalog import ProductContext
from ..spec import CHECKOUT_TOGGLE, SEARCH_TOGGLE, ConditionalRule, FieldSpec, Requirement
from ..values import is_empty
from .fields import PRICE_RE
from .report import ValidationIssue

ConditionCheck = Callable[[Mapping[str, Any], ProductContext | None], bool]


def _checkout_enabled(entry: Mapping[str, Any], context: ProductContext | None) -> bool:
    if entry.get(CHECKOUT_TOGGLE) == "true":
        return True
    return context is not None and context.flags.checkout_enabled


def _gtin_absent(entry: Mapping[str, Any], context: ProductContext | None) -> bool:
    return is_empty(entry.get("gtin"))


def _availability_preorder(entry: Mapping[str, Any], context: ProductContext | None) -> bool:
    return entry.get("availability") == "preorder"


def _has_variants(entry: Mapping[str, Any], context: ProductContext | None) -> bool:
    return context is not None and context.has_variants


def _never(entry: Mapping[str, Any], context: ProductContext | None) -> bool:
    return False


CONDITION_CHECKS: Mapping[ConditionalRule, ConditionCheck] = {
    ConditionalRule.CHECKOUT_ENABLED: _checkout_enabled,
    ConditionalRule.GTIN_ABSENT: _gtin_absent,
    ConditionalRule.AVAILABILITY_PREORDER: _availability_preorder,
    ConditionalRule.HAS_VARIANTS: _has_variants,
    ConditionalRule.NONE: _never,
}


def is_conditionally_required(
    spec: FieldSpec,
    entry: Mapping[str, Any],
    context: ProductContext | None = None,
) -> bool:
    if spec.requirement is not Requirement.CONDITIONAL:
        return False
    check = CONDITION_CHECKS.get(spec.conditional_rule, _never)
    return check(entry, context)


def cross_field_issues(entry: Mapping[str, Any]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    availability_date = entry.get("availability_date")
    if not is_empty(availability_date) and entry.get("availability") != "preorder":
        issues.append(
            ValidationIssue(
                code="availability_date_not_preorder",
                message='availability_date must be null when availability is not "preorder"',
                field="availability_date",
            )
        )

    price = _price_amount(entry.get("price"))
    sale_price = _price_amount(entry.get("sale_price"))
    # Amounts in different currencies are not compared.
    if price and sale_price and sale_price[1] == price[1] and sale_price[0] > price[0]:
        issues.append(
            ValidationIssue(
                code="sale_price_exceeds_price",
                message=f'sale_price ({entry["sale_price"]}) must not exceed price ({entry["price"]})',
                field="sale_price",
            )
        )

    if entry.get(CHECKOUT_TOGGLE) == "true" and entry.get(SEARCH_TOGGLE) == "false":
        issues.append(
            ValidationIssue(
                code="checkout_without_search",
                message="enable_checkout cannot be true while enable_search is false",
                field=CHECKOUT_TOGGLE,
            )
        )

    return issues


def _price_amount(value: Any) -> tuple[Decimal, str] | None:
    if not isinstance(value, str) or not PRICE_RE.match(value):
        return None
    amount, currency = value.split(" ")
    return Decimal(amount), currency


__all__ = [
    "CONDITION_CHECKS",
    "ConditionCheck",
    "cross_field_issues",
    "is_conditionally_required",
]
