from __future__ import annotations

import pytest

from listschema.dsl.tokenizer import LineKind, Token, read_header_value, split_lines, tokenize_modifiers
from listschema.exceptions import DSLParseError


def test_split_lines_classifies_every_line() -> None:
    text = "\ufeff# comment\n@name Demo\n\n  title: text\r\n   # indented comment"

    lines = split_lines(text)

    assert [line.kind for line in lines] == [
        LineKind.COMMENT,
        LineKind.HEADER,
        LineKind.BLANK,
        LineKind.FIELD,
        LineKind.COMMENT,
    ]
    assert [line.line_number for line in lines] == [1, 2, 3, 4, 5]
    assert lines[3].text == "  title: text"


def test_tokenize_modifiers_reads_words_and_values() -> None:
    tokens = tokenize_modifiers(' text required label="Task Title" min_length=5 options=[a, "b c",d]')

    assert [token.name for token in tokens] == ["text", "required", "label", "min_length", "options"]
    assert tokens[0].is_word
    assert tokens[2].value == "Task Title"
    assert tokens[3].value == "5"
    assert tokens[4].value == ("a", "b c", "d")


def test_tokenize_modifiers_keeps_operators_inside_bare_values() -> None:
    tokens = tokenize_modifiers("number visible_if=tier=gold")

    assert tokens[1] == Token(name="visible_if", value="tier=gold")


def test_tokenize_modifiers_decodes_escapes() -> None:
    tokens = tokenize_modifiers(r'text help="say \"hi\"\nnow \d"')

    assert tokens[1].value == 'say "hi"\nnow \\d'


def test_tokenize_modifiers_stops_at_comment() -> None:
    tokens = tokenize_modifiers('text required # label="ignored"')

    assert [token.name for token in tokens] == ["text", "required"]


def test_tokenize_modifiers_keeps_hash_inside_values() -> None:
    tokens = tokenize_modifiers("color default=#336699")

    assert tokens[1].value == "#336699"


def test_tokenize_modifiers_accepts_empty_list() -> None:
    tokens = tokenize_modifiers("multiselect options=[ ]")

    assert tokens[1].value == ()


@pytest.mark.parametrize(
    ("text", "reason"),
    [
        ('text label="open', "Unterminated quoted string"),
        ("select options=[a,b", "Unterminated list"),
        ("select options=[a,,b]", "Empty list item"),
        ("text label=", "Missing value for 'label'"),
        ('text label="a"b', "Unexpected character 'b'"),
        ("text !required", "Unexpected character '!'"),
    ],
)
def test_tokenize_modifiers_rejects_malformed_input(text: str, reason: str) -> None:
    with pytest.raises(DSLParseError, match=reason) as exc_info:
        tokenize_modifiers(text, line_number=7, line=f"key: {text}")

    assert exc_info.value.line_number == 7
    assert exc_info.value.line == f"key: {text}"


def test_read_header_value_supports_bare_and_quoted_text() -> None:
    assert read_header_value("  Task Tracker  ") == "Task Tracker"
    assert read_header_value(' "Track \\"all\\" tasks" # note') == 'Track "all" tasks'


def test_read_header_value_rejects_trailing_text() -> None:
    with pytest.raises(DSLParseError, match="Unexpected text after quoted header value"):
        read_header_value('"Tasks" extra')
