"""Visibility condition evaluation and field ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from listschema.processing.coercion import coerce_number, comparable_text, is_empty_value
from listschema.typing.enums import VisibilityOperator

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from listschema.typing.models import FieldDeclaration, VisibilityCondition


def evaluate_condition(condition: VisibilityCondition, data: Mapping[str, Any]) -> bool:
    """Evaluate a visibility condition against the current row values.

    The referenced value is read straight from `data`; conditions of other
    fields are not consulted.

    Args:
        condition (VisibilityCondition): Condition to evaluate.
        data (Mapping[str, Any]): Raw row values.

    Returns:
        bool: Whether the condition holds.
    """
    actual = data.get(condition.depends_on_key)
    expected = condition.value or ""
    operator = condition.operator

    if operator == VisibilityOperator.IS_EMPTY:
        return is_empty_value(actual)
    if operator == VisibilityOperator.IS_NOT_EMPTY:
        return not is_empty_value(actual)
    if operator == VisibilityOperator.EQUALS:
        return _equals(actual, expected)
    if operator == VisibilityOperator.NOT_EQUALS:
        return not _equals(actual, expected)
    if operator == VisibilityOperator.CONTAINS:
        return _contains(actual, expected) is True
    if operator == VisibilityOperator.NOT_CONTAINS:
        return _contains(actual, expected) is not True
    return _compare(actual, expected, operator)


def is_field_visible(field: FieldDeclaration, data: Mapping[str, Any]) -> bool:
    """Return whether a field is shown for the given row values.

    Args:
        field (FieldDeclaration): Field to check.
        data (Mapping[str, Any]): Raw row values.

    Returns:
        bool: False when statically hidden or when its condition fails.
    """
    if not field.is_visible:
        return False
    if field.visibility_condition is None:
        return True
    return evaluate_condition(field.visibility_condition, data)


def get_visible_fields(fields: Iterable[FieldDeclaration], data: Mapping[str, Any]) -> list[FieldDeclaration]:
    """Return the fields shown for the given row values, in input order."""
    return [field for field in fields if is_field_visible(field, data)]


def sort_fields_by_order(fields: Iterable[FieldDeclaration]) -> list[FieldDeclaration]:
    """Return fields sorted by display order; ties keep declaration order."""
    return sorted(fields, key=lambda field: field.display_order)


def _equals(actual: Any, expected: str) -> bool:
    if is_empty_value(actual):
        return expected == ""
    if isinstance(actual, int | float) and not isinstance(actual, bool):
        try:
            return coerce_number(expected) == actual
        except ValueError:
            return False
    return comparable_text(actual) == expected


def _contains(actual: Any, expected: str) -> bool | None:
    """Return membership, or None when `actual` is not a string or collection."""
    if isinstance(actual, list | tuple | set | frozenset):
        return any(comparable_text(item) == expected for item in actual)
    if isinstance(actual, str):
        return expected in actual
    return None


def _compare(actual: Any, expected: str, operator: VisibilityOperator) -> bool:
    try:
        left = coerce_number(actual)
        right = coerce_number(expected)
    except ValueError:
        return False
    if operator == VisibilityOperator.GREATER_THAN:
        return left > right
    if operator == VisibilityOperator.LESS_THAN:
        return left < right
    if operator == VisibilityOperator.GREATER_THAN_OR_EQUAL:
        return left >= right
    return left <= right
