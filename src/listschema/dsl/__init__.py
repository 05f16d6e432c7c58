"""List schema DSL: tokenizer, parsers and serializer."""

from listschema.dsl.field_parser import derive_label, parse_condition, parse_field_line
from listschema.dsl.parser import load_schema, parse_schema
from listschema.dsl.serializer import format_condition, serialize_field, serialize_schema
from listschema.dsl.tokenizer import DSLLine, LineKind, Token, split_lines, tokenize_modifiers

__all__ = [
    "DSLLine",
    "LineKind",
    "Token",
    "derive_label",
    "format_condition",
    "load_schema",
    "parse_condition",
    "parse_field_line",
    "parse_schema",
    "serialize_field",
    "serialize_schema",
    "split_lines",
    "tokenize_modifiers",
]
