from __future__ import annotations

import pytest

from listschema.dsl.parser import parse_schema
from listschema.exceptions import SchemaEditError
from listschema.transformers import (
    filter_fields,
    merge_schemas,
    rename_field,
    schema_stats,
    sort_fields,
    to_json_schema,
    to_simplified,
)
from listschema.typing.models import DSLSchema


def _schema(text: str) -> DSLSchema:
    result = parse_schema(text)
    assert result.ok, result.issues
    return result.dsl_schema


BASE = _schema(
    "@name Base\n"
    "@description Shared fields\n"
    "title: text required\n"
    "tier: select options=[basic,gold]\n"
    "bonus: number visible_if=tier=gold min=0 step=0.5\n",
)


def test_merge_schemas_lets_extension_fields_win() -> None:
    extension = _schema("@name Extended\ntier: select options=[basic,gold,platinum]\nnotes: textarea\n")

    merged = merge_schemas(BASE, extension)

    assert merged.name == "Extended"
    assert merged.description == "Shared fields"
    assert [field.property_key for field in merged.fields] == ["title", "bonus", "tier", "notes"]
    assert merged.get_field("tier").options == ("basic", "gold", "platinum")


def test_rename_field_rewrites_dependent_conditions() -> None:
    renamed = rename_field(BASE, "tier", "plan")

    assert renamed.get_field("tier") is None
    assert renamed.get_field("plan").property_name == "Tier"
    assert renamed.get_field("bonus").visibility_condition.depends_on_key == "plan"
    assert BASE.get_field("bonus").visibility_condition.depends_on_key == "tier"


@pytest.mark.parametrize(
    ("old_key", "new_key", "message"),
    [
        ("missing", "other", "Field 'missing' not found"),
        ("tier", "1plan", "Invalid field key '1plan'"),
        ("tier", "title", "Field 'title' already exists"),
    ],
)
def test_rename_field_rejects_bad_edits(old_key: str, new_key: str, message: str) -> None:
    with pytest.raises(SchemaEditError, match=message):
        rename_field(BASE, old_key, new_key)


def test_filter_and_sort_fields() -> None:
    schema = _schema("@name S\nc: text order=3\na: text required order=1\nb: text order=2\n")

    required_only = filter_fields(schema, lambda field: field.is_required)
    ordered = sort_fields(schema)

    assert [field.property_key for field in required_only.fields] == ["a"]
    assert [field.property_key for field in ordered.fields] == ["a", "b", "c"]


def test_schema_stats() -> None:
    stats = schema_stats(BASE)

    assert stats.field_count == 3
    assert stats.required_field_count == 1
    assert stats.optional_field_count == 2
    assert stats.conditional_field_count == 1
    assert stats.field_types == {"text": 1, "select": 1, "number": 1}


def test_to_simplified() -> None:
    assert to_simplified(BASE)["fields"][0] == {"key": "title", "label": "Title", "type": "text", "required": True}


def test_to_json_schema_describes_row_shape() -> None:
    schema = _schema(
        "@name Rows\n"
        "title: text required max_length=10 help=Headline\n"
        "tier: select required options=[basic,gold] default=basic\n"
        "bonus: number required visible_if=tier=gold min=0\n"
        "qty: number step=2\n"
        "tags: multiselect options=[a,b] default=[a]\n"
        "due: date\n",
    )

    wrapper = to_json_schema(schema)
    body = wrapper.json_schema

    assert wrapper.strict is True
    assert body["additionalProperties"] is False
    assert body["required"] == ["title", "tier"]
    assert body["properties"]["title"] == {
        "title": "Title",
        "type": "string",
        "description": "Headline",
        "maxLength": 10,
    }
    assert body["properties"]["tier"]["enum"] == ["basic", "gold"]
    assert body["properties"]["tier"]["default"] == "basic"
    assert body["properties"]["bonus"]["minimum"] == 0
    assert body["properties"]["qty"]["multipleOf"] == 2
    assert body["properties"]["tags"]["items"] == {"type": "string", "enum": ["a", "b"]}
    assert body["properties"]["tags"]["default"] == ["a"]
    assert body["properties"]["due"]["format"] == "date"
    assert wrapper.to_document()["title"] == "Rows"
