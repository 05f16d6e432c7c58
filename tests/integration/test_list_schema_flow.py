from __future__ import annotations

import pytest

from listschema import (
    get_default_values,
    get_visible_fields,
    load_schema,
    parse_schema,
    summarize_schema,
    validate_form_data,
    validate_schema,
)
from listschema.exceptions import SchemaValidationError
from listschema.settings import Settings


def test_title_status_example() -> None:
    schema = load_schema(
        "@name Tickets\ntitle: text required\nstatus: select options=[open,closed] required\n",
        settings=Settings(),
    )

    missing_title = validate_form_data(schema.fields, {"title": "", "status": "open"})
    bogus_status = validate_form_data(schema.fields, {"title": "x", "status": "bogus"})

    assert [error.field for error in missing_title.errors] == ["title"]
    assert [error.field for error in bogus_status.errors] == ["status"]


def test_dangling_condition_fails_schema_validation() -> None:
    schema = parse_schema("@name Bonus\nbonus: number visible_if=tier=gold\n").dsl_schema

    result = validate_schema(schema)

    assert not result.is_valid
    assert result.errors_for("bonus")
    with pytest.raises(SchemaValidationError):
        load_schema("@name Bonus\nbonus: number visible_if=tier=gold\n", settings=Settings())


def test_duplicate_keys_always_fail() -> None:
    schema = parse_schema("@name Dupes\nname: text\nname: text required\n").dsl_schema

    result = validate_schema(schema)

    assert "fields #1 and #2" in result.errors_for("name")[0]


def test_task_tracker_row_lifecycle(task_tracker_text: str) -> None:
    schema = load_schema(task_tracker_text, settings=Settings())
    row = get_default_values(schema.fields)

    assert row["status"] == "todo"
    assert row["priority"] == "medium"
    assert row["isRecurring"] is False

    fresh = validate_form_data(schema.fields, row)
    assert fresh.errors_for("title") == ["Task Title is required"]
    assert "actualHours" not in {field.property_key for field in get_visible_fields(schema.fields, row)}

    row.update(
        {"title": "Write the docs", "status": "done", "estimatedHours": 4, "actualHours": "2.5", "tags": ["docs"]},
    )
    done = validate_form_data(schema.fields, row)

    assert done.errors_for("tags") == ["Tags contains invalid options: docs"]
    assert done.cleaned_data["actualHours"] == 2.5

    row["tags"] = ["documentation"]
    assert validate_form_data(schema.fields, row).is_valid


def test_event_registration_summary(event_registration_text: str) -> None:
    schema = load_schema(event_registration_text, settings=Settings())

    summary = summarize_schema(schema)

    assert summary.is_valid
    assert summary.field_count == 12
    assert summary.conditional_field_count == 3
    assert [warning.field for warning in summary.warnings] == ["quantity"]

    vip = validate_form_data(
        schema.fields,
        {
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "phone": "+1 (555) 123-4567",
            "ticketType": "vip",
        },
    )
    assert vip.is_valid
    assert vip.cleaned_data["phone"] == "+15551234567"

    general = validate_form_data(schema.fields, {**vip.cleaned_data, "ticketType": "general", "quantity": 11})
    assert general.errors_for("quantity") == ["Number of Tickets must be at most 10"]
