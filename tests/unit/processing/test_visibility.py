from __future__ import annotations

from typing import Any

import pytest

from listschema.dsl.field_parser import parse_condition, parse_field_line
from listschema.processing.visibility import (
    evaluate_condition,
    get_visible_fields,
    is_field_visible,
    sort_fields_by_order,
)


@pytest.mark.parametrize(
    ("expression", "data", "expected"),
    [
        ("tier=gold", {"tier": "gold"}, True),
        ("tier=gold", {"tier": "basic"}, False),
        ("tier=gold", {}, False),
        ("tier!=gold", {}, True),
        ("notes=", {"notes": "  "}, True),
        ("count=2", {"count": 2.0}, True),
        ("count=2", {"count": "2"}, True),
        ("done=true", {"done": True}, True),
        ("tags~urgent", {"tags": ["urgent", "bug"]}, True),
        ("tags~urg", {"tags": ["urgent"]}, False),
        ("title~urg", {"title": "urgent fix"}, True),
        ("tags!~urgent", {"tags": ["bug"]}, True),
        ("tags!~urgent", {"tags": 5}, True),
        ("tags~urgent", {"tags": 5}, False),
        ("age>18", {"age": "19"}, True),
        ("age>18", {"age": 18}, False),
        ("age>=18", {"age": 18}, True),
        ("age<18", {"age": "abc"}, False),
        ("age<=1.5", {"age": 1.5}, True),
        ("empty(notes)", {}, True),
        ("empty(notes)", {"notes": []}, True),
        ("present(notes)", {"notes": "x"}, True),
        ("present(notes)", {"notes": ""}, False),
    ],
)
def test_evaluate_condition(expression: str, data: dict[str, Any], expected: bool) -> None:  # noqa: FBT001
    assert evaluate_condition(parse_condition(expression), data) is expected


def test_is_field_visible_combines_static_flag_and_condition() -> None:
    hidden = parse_field_line("secret: text hidden")
    conditional = parse_field_line("bonus: number visible_if=tier=gold")
    plain = parse_field_line("title: text")

    assert not is_field_visible(hidden, {})
    assert is_field_visible(conditional, {"tier": "gold"})
    assert not is_field_visible(conditional, {"tier": "basic"})
    assert is_field_visible(plain, {})


def test_get_visible_fields_keeps_input_order() -> None:
    fields = [
        parse_field_line("tier: select options=[basic,gold]", index=0),
        parse_field_line("bonus: number visible_if=tier=gold", index=1),
        parse_field_line("notes: text", index=2),
    ]

    visible = get_visible_fields(fields, {"tier": "basic"})

    assert [field.property_key for field in visible] == ["tier", "notes"]


def test_sort_fields_by_order_is_stable() -> None:
    fields = [
        parse_field_line("c: text order=2"),
        parse_field_line("a: text order=1"),
        parse_field_line("b: text order=1"),
    ]

    assert [field.property_key for field in sort_fields_by_order(fields)] == ["a", "b", "c"]
