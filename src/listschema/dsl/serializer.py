"""Render schemas back into canonical DSL text."""

from __future__ import annotations

import json
import re

from listschema.dsl.field_parser import OPERATOR_SYMBOLS, UNARY_FUNCTIONS, derive_label
from listschema.typing.enums import FieldType
from listschema.typing.models import (
    ChoiceRules,
    DateRules,
    DSLSchema,
    FieldDeclaration,
    NumberRules,
    TextRules,
    VisibilityCondition,
)

_BARE_VALUE = re.compile(r'[^\s"\[\],#\\]+')
_QUOTE_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"})
_SYMBOL_BY_OPERATOR = {operator: symbol for symbol, operator in OPERATOR_SYMBOLS.items()}
_FUNCTION_BY_OPERATOR = {operator: name for name, operator in UNARY_FUNCTIONS.items()}


def serialize_schema(schema: DSLSchema) -> str:
    """Render a schema as DSL text.

    Output is deterministic: headers first, then one declaration per field
    in declaration order, with modifiers in a fixed order and defaults left
    out.

    Args:
        schema (DSLSchema): Schema to render.

    Returns:
        str: DSL text ending with a newline.
    """
    lines: list[str] = []
    if schema.name:
        lines.append(f"@name {_header_value(schema.name)}")
    if schema.description is not None:
        lines.append(f"@description {_header_value(schema.description)}")
    if lines and schema.fields:
        lines.append("")
    lines.extend(serialize_field(field, index=index) for index, field in enumerate(schema.fields))
    return "\n".join(lines) + "\n"


def serialize_field(field: FieldDeclaration, *, index: int | None = None) -> str:
    """Render one declaration line.

    Args:
        field (FieldDeclaration): Field to render.
        index (int | None): Declaration index; `order=` is written only when
            the display order differs from it. `None` always writes it.

    Returns:
        str: Declaration line without newline.
    """
    parts = [f"{field.property_key}: {field.property_type}"]
    if field.is_required:
        parts.append("required")
    if not field.is_visible:
        parts.append("hidden")
    if field.property_name != derive_label(field.property_key):
        parts.append(f"label={format_value(field.property_name)}")
    if index is None or field.display_order != index:
        parts.append(f"order={field.display_order}")
    parts.extend(_rule_parts(field))
    if field.default_value is not None:
        parts.append(f"default={_default_value(field)}")
    if field.visibility_condition is not None:
        parts.append(f"visible_if={format_value(format_condition(field.visibility_condition))}")
    if field.help_text is not None:
        parts.append(f"help={format_value(field.help_text)}")
    if field.placeholder is not None:
        parts.append(f"placeholder={format_value(field.placeholder)}")
    return " ".join(parts)


def format_value(value: str) -> str:
    """Return `value` bare when it is a plain word, quoted otherwise."""
    if _BARE_VALUE.fullmatch(value):
        return value
    return '"' + value.translate(_QUOTE_ESCAPES) + '"'


def format_list(values: tuple[str, ...] | list[str]) -> str:
    """Return a bracketed DSL list."""
    return "[" + ",".join(format_value(item) for item in values) + "]"


def format_number(value: int | float) -> str:
    """Return the shortest literal that parses back to `value`."""
    return str(value) if isinstance(value, int) else repr(value)


def format_condition(condition: VisibilityCondition) -> str:
    """Return the `visible_if` expression for a condition.

    Args:
        condition (VisibilityCondition): Condition to render.

    Returns:
        str: Expression such as `tier=gold` or `empty(notes)`.
    """
    if condition.operator.is_unary:
        return f"{_FUNCTION_BY_OPERATOR[condition.operator]}({condition.depends_on_key})"
    symbol = _SYMBOL_BY_OPERATOR[condition.operator]
    value = condition.value or ""
    # keep `a> =b` from collapsing into `a>=b`
    separator = " " if value[:1] in {"=", "~", "<", ">", "!"} else ""
    return f"{condition.depends_on_key}{symbol}{separator}{value}"


def _header_value(value: str) -> str:
    if value and value == value.strip() and not value.startswith('"') and not any(
        char in value for char in "\n\r\t"
    ):
        return value
    return '"' + value.translate(_QUOTE_ESCAPES) + '"'


def _rule_parts(field: FieldDeclaration) -> list[str]:
    rules = field.validation_rules
    parts: list[str] = []
    if isinstance(rules, TextRules):
        if rules.min_length is not None:
            parts.append(f"min_length={rules.min_length}")
        if rules.max_length is not None:
            parts.append(f"max_length={rules.max_length}")
        if rules.pattern is not None:
            parts.append(f"pattern={format_value(rules.pattern)}")
    elif isinstance(rules, NumberRules):
        for name, number in (("min", rules.min), ("max", rules.max), ("step", rules.step)):
            if number is not None:
                parts.append(f"{name}={format_number(number)}")
    elif isinstance(rules, DateRules):
        for name, bound in (("min", rules.min), ("max", rules.max)):
            if bound is not None:
                parts.append(f"{name}={format_value(bound)}")
    elif isinstance(rules, ChoiceRules) and rules.options:
        parts.append(f"options={format_list(rules.options)}")
    return parts


def _default_value(field: FieldDeclaration) -> str:
    default = field.default_value or ""
    if field.property_type == FieldType.MULTISELECT:
        try:
            decoded = json.loads(default)
        except ValueError:
            decoded = None
        if (
            isinstance(decoded, list)
            and all(isinstance(item, str) for item in decoded)
            and json.dumps(decoded) == default
        ):
            return format_list(decoded)
    return format_value(default)
