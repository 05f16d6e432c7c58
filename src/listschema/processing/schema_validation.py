"""Structural validation of parsed schemas."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from listschema.logging import get_logger
from listschema.processing.coercion import coerce_date, coerce_datetime
from listschema.processing.defaults import decode_default
from listschema.processing.form_validation import validate_field_value
from listschema.typing.enums import FieldType
from listschema.typing.models import (
    ChoiceRules,
    DateRules,
    FieldError,
    NumberRules,
    SchemaSummary,
    TextRules,
    ValidationResult,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from listschema.typing.models import DSLSchema, FieldDeclaration

logger = get_logger(__name__)


def validate_fields(
    fields: Sequence[FieldDeclaration],
    *,
    strict_visibility_order: bool = False,
) -> ValidationResult:
    """Check a field list for structural problems.

    Args:
        fields (Sequence[FieldDeclaration]): Field declarations in declaration order.
        strict_visibility_order (bool): Report conditions that depend on a
            later field as errors instead of warnings.

    Returns:
        ValidationResult: Errors and warnings, each addressed to a field key.
    """
    errors: list[FieldError] = []
    warnings: list[FieldError] = []

    first_index: dict[str, int] = {}
    for index, field in enumerate(fields):
        key = field.property_key
        if key in first_index:
            errors.append(
                FieldError(
                    field=key,
                    message=f"Duplicate field key '{key}' (fields #{first_index[key] + 1} and #{index + 1})",
                ),
            )
        else:
            first_index[key] = index

    for index, field in enumerate(fields):
        errors.extend(FieldError(field=field.property_key, message=message) for message in _field_errors(field))
        dependency_errors, dependency_warnings = _check_dependency(
            field,
            index,
            fields,
            first_index,
            strict_visibility_order=strict_visibility_order,
        )
        errors.extend(dependency_errors)
        warnings.extend(dependency_warnings)
        warnings.extend(_field_warnings(field))

    logger.debug(
        "Schema fields validated",
        extra={"field_count": len(fields), "error_count": len(errors), "warning_count": len(warnings)},
    )
    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def validate_schema(schema: DSLSchema, *, strict_visibility_order: bool = False) -> ValidationResult:
    """Check a schema's header and fields.

    Args:
        schema (DSLSchema): Parsed schema.
        strict_visibility_order (bool): Forwarded to `validate_fields`.

    Returns:
        ValidationResult: Schema-level and field-level findings.
    """
    errors: list[FieldError] = []
    if not schema.name.strip():
        errors.append(FieldError(field="name", message="Schema name is required"))
    if not schema.fields:
        errors.append(FieldError(field="fields", message="Schema must declare at least one field"))

    result = validate_fields(schema.fields, strict_visibility_order=strict_visibility_order)
    errors.extend(result.errors)
    return ValidationResult(is_valid=not errors, errors=errors, warnings=result.warnings)


def summarize_schema(schema: DSLSchema, *, strict_visibility_order: bool = False) -> SchemaSummary:
    """Validate a schema and count its fields.

    Args:
        schema (DSLSchema): Parsed schema.
        strict_visibility_order (bool): Forwarded to `validate_fields`.

    Returns:
        SchemaSummary: Validation findings with field counts.
    """
    result = validate_schema(schema, strict_visibility_order=strict_visibility_order)
    return SchemaSummary(
        is_valid=result.is_valid,
        errors=result.errors,
        warnings=result.warnings,
        field_count=len(schema.fields),
        required_field_count=sum(1 for field in schema.fields if field.is_required),
        conditional_field_count=sum(1 for field in schema.fields if field.visibility_condition is not None),
    )


def _field_errors(field: FieldDeclaration) -> list[str]:
    """Return errors that concern one field in isolation."""
    name = field.property_name
    problems: list[str] = []
    if field.display_order < 0:
        problems.append(f"{name}: display order cannot be negative")

    rules = field.validation_rules
    if field.property_type.is_choice:
        problems.extend(_choice_errors(name, rules if isinstance(rules, ChoiceRules) else None))
    elif isinstance(rules, NumberRules):
        problems.extend(_number_errors(name, rules))
    elif isinstance(rules, TextRules):
        problems.extend(_text_errors(name, rules))
    elif isinstance(rules, DateRules):
        problems.extend(_date_errors(name, rules, field.property_type))

    default = decode_default(field)
    if default is not None and not problems:
        _, messages = validate_field_value(field, default)
        problems.extend(f"Default value is invalid: {message}" for message in messages)
    return problems


def _choice_errors(name: str, rules: ChoiceRules | None) -> list[str]:
    options = rules.options if rules is not None else ()
    if not options:
        return [f"{name}: select fields must declare at least one option"]
    seen: set[str] = set()
    duplicates: list[str] = []
    for option in options:
        if option in seen and option not in duplicates:
            duplicates.append(option)
        seen.add(option)
    if duplicates:
        return [f"{name}: duplicate options: {', '.join(duplicates)}"]
    return []


def _number_errors(name: str, rules: NumberRules) -> list[str]:
    problems: list[str] = []
    if rules.min is not None and rules.max is not None and rules.min > rules.max:
        problems.append(f"{name}: min ({rules.min}) cannot be greater than max ({rules.max})")
    if rules.step is not None and rules.step <= 0:
        problems.append(f"{name}: step must be greater than 0")
    return problems


def _text_errors(name: str, rules: TextRules) -> list[str]:
    problems: list[str] = []
    for label, length in (("min_length", rules.min_length), ("max_length", rules.max_length)):
        if length is not None and length < 0:
            problems.append(f"{name}: {label} cannot be negative")
    if rules.min_length is not None and rules.max_length is not None and rules.min_length > rules.max_length:
        problems.append(
            f"{name}: min_length ({rules.min_length}) cannot be greater than max_length ({rules.max_length})",
        )
    if rules.pattern is not None:
        try:
            re.compile(rules.pattern)
        except re.error as exc:
            problems.append(f"{name}: invalid pattern: {exc}")
    return problems


def _date_errors(name: str, rules: DateRules, field_type: FieldType) -> list[str]:
    convert = coerce_date if field_type == FieldType.DATE else coerce_datetime
    try:
        lower = convert(rules.min) if rules.min is not None else None
        upper = convert(rules.max) if rules.max is not None else None
    except ValueError:
        return [f"{name}: date bounds must be ISO-8601 values"]
    if lower is None or upper is None:
        return []
    try:
        reversed_bounds = lower > upper
    except TypeError:
        return [f"{name}: date bounds cannot mix naive and timezone-aware values"]
    if reversed_bounds:
        return [f"{name}: min ({rules.min}) cannot be after max ({rules.max})"]
    return []


def _check_dependency(
    field: FieldDeclaration,
    index: int,
    fields: Sequence[FieldDeclaration],
    first_index: dict[str, int],
    *,
    strict_visibility_order: bool,
) -> tuple[list[FieldError], list[FieldError]]:
    """Check the field's visibility condition against the other fields.

    Returns:
        tuple[list[FieldError], list[FieldError]]: Errors and warnings.
    """
    condition = field.visibility_condition
    if condition is None:
        return [], []

    key = field.property_key
    name = field.property_name
    target = condition.depends_on_key
    if target == key:
        return [FieldError(field=key, message=f"{name}: visibility condition cannot depend on the field itself")], []
    if target not in first_index:
        return [FieldError(field=key, message=f"{name}: visibility condition depends on unknown field '{target}'")], []

    errors: list[FieldError] = []
    warnings: list[FieldError] = []
    target_index = first_index[target]
    if target_index > index:
        finding = FieldError(
            field=key,
            message=f"{name}: visibility condition depends on '{target}', which is declared later",
        )
        (errors if strict_visibility_order else warnings).append(finding)
    if fields[target_index].visibility_condition is not None:
        warnings.append(
            FieldError(
                field=key,
                message=f"{name}: visibility condition depends on '{target}', which is itself conditional",
            ),
        )
    return errors, warnings


def _field_warnings(field: FieldDeclaration) -> list[FieldError]:
    key = field.property_key
    name = field.property_name
    warnings: list[FieldError] = []
    if field.is_required and field.visibility_condition is not None:
        warnings.append(
            FieldError(field=key, message=f"{name}: required only applies while the field is visible"),
        )
    if field.is_required and not field.is_visible:
        warnings.append(FieldError(field=key, message=f"{name}: hidden fields are never required"))
    return warnings
