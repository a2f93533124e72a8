"""Validation outcome types for feed entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    severity: str = ERROR
    field: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "field": self.field,
            "message": self.message,
            "severity": self.severity,
        }


@dataclass
class ValidationOutcome:
    """Errors block feed eligibility; warnings never do."""

    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    @classmethod
    def from_issues(
        cls,
        errors: list[ValidationIssue],
        warnings: list[ValidationIssue],
    ) -> ValidationOutcome:
        return cls(valid=not errors, errors=list(errors), warnings=list(warnings))

    @property
    def issues(self) -> list[ValidationIssue]:
        return [*self.errors, *self.warnings]

    def errors_for(self, attribute: str) -> list[ValidationIssue]:
        return [issue for issue in self.errors if issue.field == attribute]

    def warnings_for(self, attribute: str) -> list[ValidationIssue]:
        return [issue for issue in self.warnings if issue.field == attribute]

    def to_snapshot(self) -> dict[str, Any]:
        """Group messages by attribute: ``{"isValid", "errors", "warnings"}``."""
        return {
            "isValid": self.valid,
            "errors": _group_by_field(self.errors),
            "warnings": _group_by_field(self.warnings),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
        }


def _group_by_field(issues: list[ValidationIssue]) -> dict[str, list[str]]:
    grouped: dict[str, list[str]] = {}
    for issue in issues:
        grouped.setdefault(issue.field or "_entry", []).append(issue.message)
    return grouped


__all__ = ["ERROR", "WARNING", "ValidationIssue", "ValidationOutcome"]
