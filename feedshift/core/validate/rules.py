"""Feed-entry validation: required checks, per-field rules, cross-field pass."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..catalog import ProductContext
from ..spec import FIELD_SPECS, FieldSpec, Requirement
from ..values import is_empty
from .conditions import cross_field_issues, is_conditionally_required
from .fields import rule_advisories, validate_field_value
from .report import WARNING, ValidationIssue, ValidationOutcome

COMMON_ERROR_LIMIT = 10


@dataclass(frozen=True)
class ValidationOptions:
    skip_fields: frozenset[str] = field(default_factory=frozenset)
    strict: bool = False
    validate_optional: bool = True


def validate_feed_entry(
    entry: Mapping[str, Any],
    *,
    context: ProductContext | None = None,
    options: ValidationOptions | None = None,
    specs: Iterable[FieldSpec] = FIELD_SPECS,
) -> ValidationOutcome:
    options = options or ValidationOptions()
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    for spec in specs:
        if spec.name in options.skip_fields:
            continue
        if not options.validate_optional and spec.requirement is Requirement.OPTIONAL:
            continue

        value = entry.get(spec.name)
        if is_empty(value):
            issue = _missing_value_issue(spec, entry, context)
            if issue is not None:
                (warnings if issue.severity == WARNING else errors).append(issue)
            continue

        check = validate_field_value(spec, value)
        if not check.valid:
            errors.append(
                ValidationIssue(code="invalid_format", message=check.error or "Invalid value", field=spec.name)
            )
        elif check.error:
            warnings.append(_warning("advisory", check.error, spec.name))

        for hint in rule_advisories(spec, value):
            warnings.append(_warning("advisory", hint, spec.name))

    errors.extend(issue for issue in cross_field_issues(entry) if issue.field not in options.skip_fields)

    if options.strict:
        errors.extend(warnings)

    return ValidationOutcome.from_issues(errors, warnings)


def _missing_value_issue(
    spec: FieldSpec,
    entry: Mapping[str, Any],
    context: ProductContext | None,
) -> ValidationIssue | None:
    if spec.requirement is Requirement.REQUIRED:
        return ValidationIssue(code="missing_required", message=f"{spec.name} is required", field=spec.name)
    if spec.requirement is Requirement.RECOMMENDED:
        return _warning("missing_recommended", f"{spec.name} is recommended but missing", spec.name)
    if is_conditionally_required(spec, entry, context):
        return ValidationIssue(
            code="missing_conditional",
            message=f"{spec.name} is required: {spec.dependency}",
            field=spec.name,
        )
    return None


def _warning(code: str, message: str, attribute: str) -> ValidationIssue:
    return ValidationIssue(code=code, message=message, severity=WARNING, field=attribute)


def validate_feed_entries(
    entries: Sequence[Mapping[str, Any]],
    *,
    options: ValidationOptions | None = None,
) -> dict[int, ValidationOutcome]:
    """Outcomes keyed by entry index, kept only for entries with findings."""
    results: dict[int, ValidationOutcome] = {}
    for index, entry in enumerate(entries):
        outcome = validate_feed_entry(entry, options=options)
        if not outcome.valid or outcome.warnings:
            results[index] = outcome
    return results


def summarize_outcomes(outcomes: Mapping[int, ValidationOutcome]) -> dict[str, Any]:
    error_counts: Counter[str] = Counter()
    invalid = 0
    with_warnings = 0
    total_errors = 0
    total_warnings = 0

    for outcome in outcomes.values():
        if not outcome.valid:
            invalid += 1
        if outcome.warnings:
            with_warnings += 1
        total_errors += len(outcome.errors)
        total_warnings += len(outcome.warnings)
        error_counts.update(issue.message for issue in outcome.errors)

    return {
        "total": len(outcomes),
        "invalid": invalid,
        "with_warnings": with_warnings,
        "total_errors": total_errors,
        "total_warnings": total_warnings,
        "common_errors": [
            {"error": message, "count": count}
            for message, count in error_counts.most_common(COMMON_ERROR_LIMIT)
        ],
    }


__all__ = [
    "ValidationOptions",
    "summarize_outcomes",
    "validate_feed_entries",
    "validate_feed_entry",
]
