"""Feed validation: per-field rules, conditional requirements, literal checks."""

from .conditions import cross_field_issues, is_conditionally_required
from .fields import FieldCheck, rule_advisories, validate_field_value
from .literal import LiteralCheck, get_validation_info, validate_literal
from .report import ValidationIssue, ValidationOutcome
from .rules import ValidationOptions, summarize_outcomes, validate_feed_entries, validate_feed_entry

__all__ = [
    "FieldCheck",
    "LiteralCheck",
    "ValidationIssue",
    "ValidationOptions",
    "ValidationOutcome",
    "cross_field_issues",
    "get_validation_info",
    "is_conditionally_required",
    "rule_advisories",
    "summarize_outcomes",
    "validate_feed_entries",
    "validate_feed_entry",
    "validate_field_value",
    "validate_literal",
]
