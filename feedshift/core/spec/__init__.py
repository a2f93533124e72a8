"""Field Specification Registry."""

from .entities import (
    ConditionalRule,
    DataType,
    FieldCategory,
    FieldMapping,
    FieldSpec,
    Requirement,
)
from .fields import FIELD_SPECS
from .registry import (
    CATEGORY_CONFIG,
    CHECKOUT_TOGGLE,
    LOCKED_FIELDS,
    REQUIRED_FIELDS,
    SEARCH_TOGGLE,
    STATIC_OVERRIDE_ALLOWED_LOCKED_FIELDS,
    TOGGLE_FIELDS,
    CategoryInfo,
    accepts_literal_override,
    accepts_mapping_override,
    default_field_mappings,
    field_names,
    field_stats,
    fields_by_category,
    find_field_spec,
    get_field_spec,
)

__all__ = [
    "CATEGORY_CONFIG",
    "CHECKOUT_TOGGLE",
    "CategoryInfo",
    "ConditionalRule",
    "DataType",
    "FIELD_SPECS",
    "FieldCategory",
    "FieldMapping",
    "FieldSpec",
    "LOCKED_FIELDS",
    "REQUIRED_FIELDS",
    "Requirement",
    "SEARCH_TOGGLE",
    "STATIC_OVERRIDE_ALLOWED_LOCKED_FIELDS",
    "TOGGLE_FIELDS",
    "accepts_literal_override",
    "accepts_mapping_override",
    "default_field_mappings",
    "field_names",
    "field_stats",
    "fields_by_category",
    "find_field_spec",
    "get_field_spec",
]
