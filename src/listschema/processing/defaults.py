"""Initial row values derived from field defaults."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from listschema.processing.coercion import coerce_boolean, coerce_number
from listschema.typing.enums import FieldType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from listschema.typing.models import FieldDeclaration


def decode_default(field: FieldDeclaration) -> Any:
    """Return the stored default in the shape a form value would have.

    Multiselect defaults are stored either as a JSON array or as a
    comma-separated string; both decode to a list of options. Every other
    default stays a string.

    Args:
        field (FieldDeclaration): Field declaration.

    Returns:
        Any: Decoded default, `None` when the field has none.
    """
    raw = field.default_value
    if raw is None or raw == "":
        return None
    if field.property_type != FieldType.MULTISELECT:
        return raw
    try:
        decoded = json.loads(raw)
    except ValueError:
        decoded = raw
    if isinstance(decoded, list):
        return [str(item) for item in decoded]
    if isinstance(decoded, str):
        return [item.strip() for item in decoded.split(",") if item.strip()]
    return []


def get_default_values(fields: Iterable[FieldDeclaration]) -> dict[str, Any]:
    """Build the initial values of a new row.

    Declared defaults are converted to the field's value type when
    possible. Fields without a default get `False` (flags), `0` (numbers),
    `[]` (multiselect) or `""`.

    Args:
        fields (Iterable[FieldDeclaration]): Parsed field declarations.

    Returns:
        dict[str, Any]: Initial values keyed by property key.
    """
    defaults: dict[str, Any] = {}
    for field in fields:
        key = field.property_key
        field_type = field.property_type
        value = decode_default(field)
        if value is None:
            defaults[key] = _empty_value(field_type)
        elif field_type == FieldType.NUMBER:
            defaults[key] = _try(coerce_number, value)
        elif field_type.is_boolean:
            defaults[key] = _try(coerce_boolean, value)
        else:
            defaults[key] = value
    return defaults


def _empty_value(field_type: FieldType) -> Any:
    if field_type.is_boolean:
        return False
    if field_type == FieldType.NUMBER:
        return 0
    if field_type == FieldType.MULTISELECT:
        return []
    return ""


def _try(convert: Any, value: str) -> Any:
    """Apply `convert`, keeping the raw string if it does not convert."""
    try:
        return convert(value)
    except ValueError:
        return value
