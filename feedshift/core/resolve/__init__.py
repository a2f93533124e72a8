"""Resolution Engine."""

from .engine import FieldResolver, FieldSource, ResolvedFieldSet, resolve_all, resolve_field

__all__ = [
    "FieldResolver",
    "FieldSource",
    "ResolvedFieldSet",
    "resolve_all",
    "resolve_field",
]
