"""Validate list data rows against parsed field declarations."""

from __future__ import annotations

import re
from datetime import UTC, date, datetime
from decimal import Decimal, localcontext
from typing import TYPE_CHECKING, Any
from urllib.parse import urlparse

from listschema.exceptions import FormValidationError
from listschema.logging import get_logger
from listschema.processing.coercion import (
    coerce_date,
    coerce_datetime,
    coerce_value,
    is_empty_value,
)
from listschema.processing.visibility import is_field_visible, sort_fields_by_order
from listschema.typing.enums import FieldType
from listschema.typing.models import (
    ChoiceRules,
    DateRules,
    FieldError,
    FormValidationResult,
    NumberRules,
    TextRules,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from listschema.typing.models import FieldDeclaration

logger = get_logger(__name__)

_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_TEL_PATTERN = re.compile(r"\+?[0-9().\s-]+")
_COLOR_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")
_MIN_TEL_DIGITS = 3
_MIN_DECIMAL_PRECISION = 28

_TYPE_MESSAGES: dict[FieldType, str] = {
    FieldType.NUMBER: "must be a valid number",
    FieldType.BOOLEAN: "must be true or false",
    FieldType.CHECKBOX: "must be true or false",
    FieldType.DATE: "must be a valid date",
    FieldType.DATETIME: "must be a valid date and time",
    FieldType.MULTISELECT: "must be a list of options",
}


def validate_form_data(
    fields: Iterable[FieldDeclaration],
    data: Mapping[str, Any],
) -> FormValidationResult:
    """Validate one data row.

    Fields are visited once, in display order. Visibility is decided from
    the raw row values. A hidden field is never required, but a value it
    still carries is checked like any other. Every failing field is
    reported; nothing short-circuits across fields.

    Args:
        fields (Iterable[FieldDeclaration]): Parsed field declarations.
        data (Mapping[str, Any]): Row values keyed by property key.

    Returns:
        FormValidationResult: Errors per field and the coerced values.
    """
    errors: list[FieldError] = []
    cleaned: dict[str, Any] = {}

    for field in sort_fields_by_order(fields):
        key = field.property_key
        value = data.get(key)
        visible = is_field_visible(field, data)

        if is_empty_value(value):
            if visible and field.is_required:
                errors.append(FieldError(field=key, message=f"{field.property_name} is required"))
            continue

        coerced, messages = validate_field_value(field, value)
        if not messages and visible and field.is_required:
            if is_empty_value(coerced):
                messages = [f"{field.property_name} is required"]
            elif field.property_type == FieldType.CHECKBOX and coerced is False:
                messages = [f"{field.property_name} must be checked"]
        errors.extend(FieldError(field=key, message=message) for message in messages)
        if not messages:
            cleaned[key] = coerced

    logger.debug(
        "Form data validated",
        extra={"error_count": len(errors), "field_keys": sorted(cleaned)},
    )
    return FormValidationResult(is_valid=not errors, errors=errors, cleaned_data=cleaned)


def ensure_valid_form_data(fields: Iterable[FieldDeclaration], data: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a row and return its coerced values.

    Args:
        fields (Iterable[FieldDeclaration]): Parsed field declarations.
        data (Mapping[str, Any]): Row values keyed by property key.

    Raises:
        FormValidationError: If any field fails validation.

    Returns:
        dict[str, Any]: Coerced values.
    """
    result = validate_form_data(fields, data)
    if not result.is_valid:
        raise FormValidationError(errors=tuple(result.errors))
    return result.cleaned_data


def validate_field_value(field: FieldDeclaration, value: Any) -> tuple[Any, list[str]]:
    """Coerce a non-empty value and check it against the field rules.

    Args:
        field (FieldDeclaration): Field declaration.
        value (Any): Non-empty raw value.

    Returns:
        tuple[Any, list[str]]: Coerced value (None when coercion failed) and
        error messages, all prefixed with the field's display name.
    """
    name = field.property_name
    field_type = field.property_type
    try:
        coerced = coerce_value(value, field_type)
    except ValueError:
        message = _TYPE_MESSAGES.get(field_type, "must be text")
        return None, [f"{name} {message}"]

    rules = field.validation_rules
    problems: list[str] = []
    if isinstance(rules, NumberRules):
        problems = _check_number(coerced, rules)
    elif isinstance(rules, TextRules):
        problems = _check_text(coerced, rules)
    elif isinstance(rules, DateRules):
        problems = _check_date_bounds(coerced, rules, field_type)
    elif isinstance(rules, ChoiceRules):
        problems = _check_choices(coerced, rules, field_type)
    problems.extend(_check_shape(coerced, value, field_type))
    return coerced, [f"{name} {problem}" for problem in problems]


def _check_number(number: int | float, rules: NumberRules) -> list[str]:
    problems: list[str] = []
    if rules.min is not None and number < rules.min:
        problems.append(f"must be at least {rules.min}")
    if rules.max is not None and number > rules.max:
        problems.append(f"must be at most {rules.max}")
    if rules.step is not None and rules.step > 0 and not _is_step_aligned(number, rules):
        problems.append(f"must be in increments of {rules.step}")
    return problems


def _is_step_aligned(number: int | float, rules: NumberRules) -> bool:
    """Check `number` against `min + k * step` with exact decimal arithmetic."""
    value = _as_decimal(number)
    base = _as_decimal(rules.min if rules.min is not None else 0)
    step = _as_decimal(rules.step)
    operands = (value, base, step)
    with localcontext() as context:
        # Wide enough that neither the subtraction nor the remainder rounds.
        context.prec = max(
            _MIN_DECIMAL_PRECISION,
            max(item.adjusted() for item in operands) - min(item.as_tuple().exponent for item in operands) + 2,
        )
        return (value - base) % step == 0


def _as_decimal(number: int | float) -> Decimal:
    if isinstance(number, int):
        return Decimal(number)
    return Decimal(repr(number))


def _check_text(text: str, rules: TextRules) -> list[str]:
    problems: list[str] = []
    if rules.min_length is not None and len(text) < rules.min_length:
        problems.append(f"must be at least {rules.min_length} characters")
    if rules.max_length is not None and len(text) > rules.max_length:
        problems.append(f"must be at most {rules.max_length} characters")
    if rules.pattern is not None:
        try:
            matched = re.search(rules.pattern, text) is not None
        except re.error:
            problems.append("cannot be checked: the field pattern is invalid")
        else:
            if not matched:
                problems.append("format is invalid")
    return problems


def _check_date_bounds(moment: date, rules: DateRules, field_type: FieldType) -> list[str]:
    convert = coerce_date if field_type == FieldType.DATE else coerce_datetime
    try:
        lower = None if rules.min is None else _as_naive(convert(rules.min))
        upper = None if rules.max is None else _as_naive(convert(rules.max))
    except ValueError:
        return ["cannot be checked: the field date bounds are invalid"]
    problems: list[str] = []
    if lower is not None and _as_naive(moment) < lower:
        problems.append(f"must be on or after {rules.min}")
    if upper is not None and _as_naive(moment) > upper:
        problems.append(f"must be on or before {rules.max}")
    return problems


def _check_choices(coerced: Any, rules: ChoiceRules, field_type: FieldType) -> list[str]:
    if not rules.options:
        return []
    if field_type == FieldType.MULTISELECT:
        invalid = [item for item in coerced if item not in rules.options]
        if invalid:
            return [f"contains invalid options: {', '.join(invalid)}"]
        return []
    if coerced not in rules.options:
        return [f"must be one of: {', '.join(rules.options)}"]
    return []


def _check_shape(coerced: Any, raw: Any, field_type: FieldType) -> list[str]:
    if field_type == FieldType.EMAIL and not _EMAIL_PATTERN.fullmatch(coerced):
        return ["must be a valid email address"]
    if field_type == FieldType.URL:
        parsed = urlparse(coerced)
        if not parsed.scheme or not parsed.netloc:
            return ["must be a valid URL"]
    if field_type == FieldType.TEL:
        text = str(raw).strip()
        if not _TEL_PATTERN.fullmatch(text) or sum(ch.isdigit() for ch in text) < _MIN_TEL_DIGITS:
            return ["must be a valid phone number"]
    if field_type == FieldType.COLOR and not _COLOR_PATTERN.fullmatch(coerced):
        return ["must be a hex color like #336699"]
    return []


def _as_naive(moment: date) -> date:
    """Drop timezone info so aware and naive datetimes compare."""
    if isinstance(moment, datetime) and moment.tzinfo is not None:
        return moment.astimezone(UTC).replace(tzinfo=None)
    return moment
