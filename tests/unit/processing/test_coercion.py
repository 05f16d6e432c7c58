from __future__ import annotations

from datetime import date, datetime

import pytest

from listschema.processing.coercion import (
    coerce_boolean,
    coerce_choices,
    coerce_date,
    coerce_datetime,
    coerce_number,
    coerce_value,
    comparable_text,
    is_empty_value,
    normalize_phone,
)
from listschema.typing.enums import FieldType


@pytest.mark.parametrize("value", [None, "", "   ", [], (), set()])
def test_is_empty_value_true(value: object) -> None:
    assert is_empty_value(value)


@pytest.mark.parametrize("value", [0, False, "0", ["a"], 0.0])
def test_is_empty_value_false(value: object) -> None:
    assert not is_empty_value(value)


def test_coerce_number_accepts_numeric_strings() -> None:
    assert coerce_number(" 42 ") == 42
    assert isinstance(coerce_number("42.0"), int)
    assert coerce_number("1.5") == 1.5
    assert coerce_number(3.25) == 3.25


@pytest.mark.parametrize("value", [True, "abc", "NaN", float("inf"), [1]])
def test_coerce_number_rejects_non_numbers(value: object) -> None:
    with pytest.raises(ValueError, match="number|finite"):
        coerce_number(value)


@pytest.mark.parametrize("value", ["1e5000", "-1e400", "1e999999999", 10**400])
def test_coerce_number_rejects_values_beyond_float_range(value: object) -> None:
    with pytest.raises(ValueError, match="out of range"):
        coerce_number(value)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(True, True), ("on", True), ("YES", True), (1, True), ("off", False), ("0", False), (0, False)],
)
def test_coerce_boolean(value: object, expected: bool) -> None:  # noqa: FBT001
    assert coerce_boolean(value) is expected


def test_coerce_boolean_rejects_unknown_flags() -> None:
    with pytest.raises(ValueError, match="Not a boolean"):
        coerce_boolean("maybe")


def test_coerce_date_and_datetime() -> None:
    assert coerce_date("2024-03-01") == date(2024, 3, 1)
    assert coerce_date("2024-03-01T10:30") == date(2024, 3, 1)
    assert coerce_datetime("2024-03-01T10:30") == datetime(2024, 3, 1, 10, 30)
    assert coerce_datetime(date(2024, 3, 1)) == datetime(2024, 3, 1)
    with pytest.raises(ValueError):  # noqa: PT011
        coerce_date("March 1st")


def test_coerce_choices_splits_comma_separated_text() -> None:
    assert coerce_choices("a, b,,c ") == ["a", "b", "c"]
    assert coerce_choices(("a", 2)) == ["a", "2"]
    with pytest.raises(ValueError, match="Not a list"):
        coerce_choices(5)


def test_comparable_text() -> None:
    assert comparable_text(True) == "true"
    assert comparable_text(2.0) == "2"
    assert comparable_text(["a", 1]) == "a,1"


def test_normalize_phone() -> None:
    assert normalize_phone("00 33 6 12 34 56 78") == "+33612345678"
    assert normalize_phone("+1 (555) 123-4567") == "+15551234567"


def test_coerce_value_by_field_type() -> None:
    assert coerce_value(" Ada@Example.COM ", FieldType.EMAIL) == "ada@example.com"
    assert coerce_value("  hello ", FieldType.TEXT) == "hello"
    assert coerce_value("2", FieldType.NUMBER) == 2
    assert coerce_value("true", FieldType.CHECKBOX) is True
    assert coerce_value("a,b", FieldType.MULTISELECT) == ["a", "b"]
    with pytest.raises(ValueError, match="Not text"):
        coerce_value(["a"], FieldType.SELECT)
