"""listschema package."""

from listschema.exceptions import (
    DSLParseError,
    FormValidationError,
    InputTooLargeError,
    PackageError,
    SchemaEditError,
    SchemaParseError,
    SchemaValidationError,
    SettingsError,
)
from listschema.logging import configure_logging, get_logger
from listschema.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("listschema")

from listschema.dsl import (  # noqa: E402
    derive_label,
    load_schema,
    parse_condition,
    parse_field_line,
    parse_schema,
    serialize_field,
    serialize_schema,
)
from listschema.forms import format_field_value, get_field_widget, parse_field_value  # noqa: E402
from listschema.processing import (  # noqa: E402
    ensure_valid_form_data,
    evaluate_condition,
    get_default_values,
    get_visible_fields,
    sort_fields_by_order,
    summarize_schema,
    validate_fields,
    validate_form_data,
    validate_schema,
)
from listschema.transformers import (  # noqa: E402
    filter_fields,
    merge_schemas,
    rename_field,
    schema_stats,
    sort_fields,
    to_json_schema,
    to_simplified,
)
from listschema.typing import (  # noqa: E402
    DSLSchema,
    FieldDeclaration,
    FieldType,
    VisibilityCondition,
    VisibilityOperator,
)

__all__ = [
    "DSLParseError",
    "DSLSchema",
    "FieldDeclaration",
    "FieldType",
    "FormValidationError",
    "InputTooLargeError",
    "PackageError",
    "SchemaEditError",
    "SchemaParseError",
    "SchemaValidationError",
    "Settings",
    "SettingsError",
    "VisibilityCondition",
    "VisibilityOperator",
    "__version__",
    "configure_logging",
    "derive_label",
    "ensure_valid_form_data",
    "evaluate_condition",
    "filter_fields",
    "format_field_value",
    "get_default_values",
    "get_field_widget",
    "get_logger",
    "get_settings",
    "get_visible_fields",
    "load_schema",
    "logger",
    "merge_schemas",
    "parse_condition",
    "parse_field_line",
    "parse_field_value",
    "parse_schema",
    "rename_field",
    "schema_stats",
    "serialize_field",
    "serialize_schema",
    "sort_fields",
    "sort_fields_by_order",
    "summarize_schema",
    "to_json_schema",
    "to_simplified",
    "validate_fields",
    "validate_form_data",
    "validate_schema",
]
