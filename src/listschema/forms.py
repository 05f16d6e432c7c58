"""Form rendering helpers: widget metadata, display formatting, input parsing."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from listschema.processing.coercion import (
    TRUTHY_STRINGS,
    coerce_choices,
    coerce_date,
    coerce_datetime,
    coerce_number,
    comparable_text,
)
from listschema.typing.enums import FieldType
from listschema.typing.models import ChoiceRules, DateRules, FieldWidget, NumberRules, TextRules

if TYPE_CHECKING:
    from listschema.typing.models import FieldDeclaration

TEXTAREA_ROWS = 4

_INPUT_TYPES: dict[FieldType, str] = {
    FieldType.TEXT: "text",
    FieldType.EMAIL: "email",
    FieldType.URL: "url",
    FieldType.TEL: "tel",
    FieldType.NUMBER: "number",
    FieldType.DATE: "date",
    FieldType.DATETIME: "datetime-local",
    FieldType.COLOR: "color",
    FieldType.FILE: "file",
}


def get_field_widget(field: FieldDeclaration) -> FieldWidget:
    """Describe the form element that renders a field.

    Args:
        field (FieldDeclaration): Field declaration.

    Returns:
        FieldWidget: Element name and HTML-style attributes.
    """
    props: dict[str, Any] = {
        "id": field.property_key,
        "name": field.property_key,
        "required": field.is_required,
        "aria-label": field.property_name,
    }
    if field.placeholder:
        props["placeholder"] = field.placeholder
    if field.help_text:
        props["aria-describedby"] = f"{field.property_key}-help"

    field_type = field.property_type
    rules = field.validation_rules

    if field_type.is_boolean:
        return FieldWidget(element="checkbox", props={**props, "type": "checkbox"})
    if field_type.is_choice:
        options = list(rules.options) if isinstance(rules, ChoiceRules) else []
        if field_type == FieldType.MULTISELECT:
            props["multiple"] = True
        return FieldWidget(element="select", props={**props, "options": options})
    if field_type == FieldType.TEXTAREA:
        props["rows"] = TEXTAREA_ROWS
        if isinstance(rules, TextRules):
            props.update(_text_props(rules, with_pattern=False))
        return FieldWidget(element="textarea", props=props)

    props["type"] = _INPUT_TYPES.get(field_type, "text")
    if isinstance(rules, TextRules):
        props.update(_text_props(rules, with_pattern=True))
    elif isinstance(rules, NumberRules | DateRules):
        props.update(
            {
                attribute: bound
                for attribute, bound in rules.model_dump(include={"min", "max", "step"}).items()
                if bound is not None
            },
        )
    return FieldWidget(element="input", props=props)


def format_field_value(field: FieldDeclaration, value: Any) -> str:
    """Render a stored value as form input text.

    Args:
        field (FieldDeclaration): Field declaration.
        value (Any): Stored value.

    Returns:
        str: Input text, empty for missing values.
    """
    if value is None:
        return ""
    field_type = field.property_type
    if field_type == FieldType.DATE and isinstance(value, date):
        return (value.date() if isinstance(value, datetime) else value).isoformat()
    if field_type == FieldType.DATETIME and isinstance(value, date):
        moment = value if isinstance(value, datetime) else datetime.combine(value, datetime.min.time())
        return moment.isoformat(timespec="minutes")
    if field_type.is_boolean:
        return "true" if value is True or comparable_text(value).lower() in TRUTHY_STRINGS else "false"
    return comparable_text(value)


def parse_field_value(field: FieldDeclaration, raw: str | None) -> Any:
    """Convert form input text into a stored value.

    Unparseable numbers and dates become `None`; they are reported by form
    validation rather than here.

    Args:
        field (FieldDeclaration): Field declaration.
        raw (str | None): Input text.

    Returns:
        Any: Parsed value.
    """
    field_type = field.property_type
    if raw is None or raw == "":
        if field_type.is_boolean:
            return False
        if field_type == FieldType.MULTISELECT:
            return []
        return None

    if field_type.is_boolean:
        return raw.strip().lower() in TRUTHY_STRINGS
    if field_type == FieldType.MULTISELECT:
        return coerce_choices(raw)
    converters = {
        FieldType.NUMBER: coerce_number,
        FieldType.DATE: coerce_date,
        FieldType.DATETIME: coerce_datetime,
    }
    convert = converters.get(field_type)
    if convert is None:
        return raw
    try:
        return convert(raw)
    except ValueError:
        return None


def _text_props(rules: TextRules, *, with_pattern: bool) -> dict[str, Any]:
    props: dict[str, Any] = {}
    if rules.min_length:
        props["minLength"] = rules.min_length
    if rules.max_length:
        props["maxLength"] = rules.max_length
    if with_pattern and rules.pattern:
        props["pattern"] = rules.pattern
    return props
