"""Validation, coercion and visibility processing."""

from listschema.processing.coercion import coerce_value, is_empty_value
from listschema.processing.defaults import decode_default, get_default_values
from listschema.processing.form_validation import (
    ensure_valid_form_data,
    validate_field_value,
    validate_form_data,
)
from listschema.processing.schema_validation import summarize_schema, validate_fields, validate_schema
from listschema.processing.visibility import (
    evaluate_condition,
    get_visible_fields,
    is_field_visible,
    sort_fields_by_order,
)

__all__ = [
    "coerce_value",
    "decode_default",
    "ensure_valid_form_data",
    "evaluate_condition",
    "get_default_values",
    "get_visible_fields",
    "is_empty_value",
    "is_field_visible",
    "sort_fields_by_order",
    "summarize_schema",
    "validate_field_value",
    "validate_fields",
    "validate_schema",
]
