"""Schema transformations and exports."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from listschema.dsl.field_parser import KEY_PATTERN
from listschema.exceptions import SchemaEditError
from listschema.logging import get_logger
from listschema.processing.defaults import get_default_values
from listschema.processing.visibility import sort_fields_by_order
from listschema.typing.enums import FieldType
from listschema.typing.models import (
    ChoiceRules,
    NumberRules,
    SanitizedJsonSchema,
    SchemaStats,
    TextRules,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from listschema.typing.models import DSLSchema, FieldDeclaration

logger = get_logger(__name__)

_JSON_TYPES: dict[FieldType, dict[str, Any]] = {
    FieldType.NUMBER: {"type": "number"},
    FieldType.BOOLEAN: {"type": "boolean"},
    FieldType.CHECKBOX: {"type": "boolean"},
    FieldType.DATE: {"type": "string", "format": "date"},
    FieldType.DATETIME: {"type": "string", "format": "date-time"},
    FieldType.EMAIL: {"type": "string", "format": "email"},
    FieldType.URL: {"type": "string", "format": "uri"},
    FieldType.COLOR: {"type": "string", "pattern": "^#[0-9a-fA-F]{6}$"},
    FieldType.MULTISELECT: {"type": "array", "items": {"type": "string"}, "uniqueItems": True},
}


def merge_schemas(base: DSLSchema, extension: DSLSchema) -> DSLSchema:
    """Extend a base schema with another one.

    Extension fields replace base fields declared under the same key; the
    remaining base fields come first. Extension headers win when set.

    Args:
        base (DSLSchema): Base schema.
        extension (DSLSchema): Schema whose fields take precedence.

    Returns:
        DSLSchema: Merged schema.
    """
    extension_keys = {field.property_key for field in extension.fields}
    kept = tuple(field for field in base.fields if field.property_key not in extension_keys)
    merged = base.model_copy(
        update={
            "name": extension.name or base.name,
            "description": extension.description or base.description,
            "fields": kept + extension.fields,
        },
    )
    logger.debug(
        "Schemas merged",
        extra={"base": base.name, "extension": extension.name, "field_count": len(merged.fields)},
    )
    return merged


def rename_field(schema: DSLSchema, old_key: str, new_key: str) -> DSLSchema:
    """Rename a field key and every visibility condition that refers to it.

    Args:
        schema (DSLSchema): Source schema.
        old_key (str): Current key.
        new_key (str): Replacement key.

    Raises:
        SchemaEditError: If `old_key` is missing, `new_key` is malformed or
            already used.

    Returns:
        DSLSchema: Schema with the field renamed.
    """
    if schema.get_field(old_key) is None:
        raise SchemaEditError(message=f"Field '{old_key}' not found")
    if not KEY_PATTERN.fullmatch(new_key):
        raise SchemaEditError(message=f"Invalid field key '{new_key}'")
    if new_key != old_key and schema.get_field(new_key) is not None:
        raise SchemaEditError(message=f"Field '{new_key}' already exists")

    fields: list[FieldDeclaration] = []
    for field in schema.fields:
        update: dict[str, Any] = {}
        if field.property_key == old_key:
            update["property_key"] = new_key
        condition = field.visibility_condition
        if condition is not None and condition.depends_on_key == old_key:
            update["visibility_condition"] = condition.model_copy(update={"depends_on_key": new_key})
        fields.append(field.model_copy(update=update) if update else field)
    return schema.model_copy(update={"fields": tuple(fields)})


def filter_fields(schema: DSLSchema, predicate: Callable[[FieldDeclaration], bool]) -> DSLSchema:
    """Keep the fields matching `predicate`, in their current order."""
    return schema.model_copy(update={"fields": tuple(field for field in schema.fields if predicate(field))})


def sort_fields(schema: DSLSchema) -> DSLSchema:
    """Reorder fields by display order; ties keep declaration order."""
    return schema.model_copy(update={"fields": tuple(sort_fields_by_order(schema.fields))})


def schema_stats(schema: DSLSchema) -> SchemaStats:
    """Count fields by requirement, condition and type.

    Args:
        schema (DSLSchema): Schema to inspect.

    Returns:
        SchemaStats: Field counts.
    """
    required = sum(1 for field in schema.fields if field.is_required)
    types = Counter(str(field.property_type) for field in schema.fields)
    return SchemaStats(
        field_count=len(schema.fields),
        required_field_count=required,
        optional_field_count=len(schema.fields) - required,
        conditional_field_count=sum(1 for field in schema.fields if field.visibility_condition is not None),
        field_types=dict(types),
    )


def to_simplified(schema: DSLSchema) -> dict[str, Any]:
    """Return a display-oriented summary of the schema.

    Args:
        schema (DSLSchema): Schema to export.

    Returns:
        dict[str, Any]: Name, description and `key/label/type/required` per field.
    """
    return {
        "name": schema.name,
        "description": schema.description,
        "fields": [
            {
                "key": field.property_key,
                "label": field.property_name,
                "type": str(field.property_type),
                "required": field.is_required,
            }
            for field in schema.fields
        ],
    }


def to_json_schema(schema: DSLSchema) -> SanitizedJsonSchema:
    """Describe the shape of a data row as a closed JSON Schema object.

    Only fields that are always shown (visible, unconditional) and required
    end up in `required`.

    Args:
        schema (DSLSchema): Schema to export.

    Returns:
        SanitizedJsonSchema: Row schema wrapper.
    """
    defaults = get_default_values(field for field in schema.fields if field.default_value)
    properties: dict[str, Any] = {}
    required: list[str] = []
    for field in sort_fields_by_order(schema.fields):
        node = _property_schema(field)
        if field.property_key in defaults:
            node["default"] = defaults[field.property_key]
        properties[field.property_key] = node
        if field.is_required and field.is_visible and field.visibility_condition is None:
            required.append(field.property_key)

    return SanitizedJsonSchema(
        name=schema.name,
        description=schema.description,
        schema={
            "type": "object",
            "properties": properties,
            "required": required,
            "additionalProperties": False,
        },
        strict=True,
    )


def _property_schema(field: FieldDeclaration) -> dict[str, Any]:
    """Build the JSON Schema node of one field.

    Args:
        field (FieldDeclaration): Field declaration.

    Returns:
        dict[str, Any]: Property schema.
    """
    node: dict[str, Any] = {"title": field.property_name}
    node.update(_JSON_TYPES.get(field.property_type, {"type": "string"}))
    if field.help_text:
        node["description"] = field.help_text

    rules = field.validation_rules
    if isinstance(rules, ChoiceRules) and rules.options:
        if field.property_type == FieldType.MULTISELECT:
            node["items"] = {"type": "string", "enum": list(rules.options)}
        else:
            node["enum"] = list(rules.options)
    elif isinstance(rules, TextRules):
        for keyword, value in (
            ("minLength", rules.min_length),
            ("maxLength", rules.max_length),
            ("pattern", rules.pattern),
        ):
            if value is not None:
                node[keyword] = value
    elif isinstance(rules, NumberRules):
        if rules.min is not None:
            node["minimum"] = rules.min
        if rules.max is not None:
            node["maximum"] = rules.max
        # multipleOf is anchored at zero, steps are anchored at min.
        if rules.step is not None and not rules.min:
            node["multipleOf"] = rules.step
    return node
