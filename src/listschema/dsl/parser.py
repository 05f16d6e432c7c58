"""Parse whole DSL documents into schemas."""

from __future__ import annotations

import re

from listschema.dsl.field_parser import parse_field_line
from listschema.dsl.tokenizer import LineKind, read_header_value, split_lines
from listschema.exceptions import (
    DSLParseError,
    InputTooLargeError,
    SchemaParseError,
    SchemaValidationError,
)
from listschema.logging import get_logger
from listschema.processing.schema_validation import validate_schema
from listschema.settings import Settings, get_settings
from listschema.typing.models import DSLSchema, FieldDeclaration, ParseIssue, ParseResult

logger = get_logger(__name__)

HEADERS = ("name", "description")
_HEADER_PATTERN = re.compile(r"@(?P<directive>[A-Za-z_][A-Za-z0-9_]*)(?P<rest>.*)", re.DOTALL)


def parse_schema(text: str) -> ParseResult:
    """Parse a DSL document, collecting one issue per unparseable line.

    Lines that fail to parse are left out of the schema; the remaining
    declarations keep their relative order.

    Args:
        text (str): DSL source text.

    Returns:
        ParseResult: Parsed schema and line-addressed issues.
    """
    headers: dict[str, str] = {}
    fields: list[FieldDeclaration] = []
    issues: list[ParseIssue] = []

    for dsl_line in split_lines(text):
        try:
            if dsl_line.kind == LineKind.HEADER:
                directive, value = _parse_header(dsl_line.text, dsl_line.line_number)
                if directive in headers:
                    raise DSLParseError(
                        reason=f"Duplicate header '@{directive}'",
                        line_number=dsl_line.line_number,
                        line=dsl_line.text,
                    )
                headers[directive] = value
            elif dsl_line.kind == LineKind.FIELD:
                fields.append(
                    parse_field_line(dsl_line.text, line_number=dsl_line.line_number, index=len(fields)),
                )
        except DSLParseError as exc:
            issues.append(ParseIssue(line=exc.line_number, message=exc.reason, text=exc.line))

    schema = DSLSchema(
        name=headers.get("name", ""),
        description=headers.get("description"),
        fields=tuple(fields),
    )
    logger.debug(
        "DSL schema parsed",
        extra={"schema_name": schema.name, "field_count": len(fields), "issue_count": len(issues)},
    )
    return ParseResult(dsl_schema=schema, issues=issues)


def load_schema(text: str, *, settings: Settings | None = None) -> DSLSchema:
    """Parse and validate a DSL document, raising on any problem.

    Args:
        text (str): DSL source text.
        settings (Settings | None): Runtime settings, defaults to cached settings.

    Raises:
        InputTooLargeError: If the text exceeds `max_schema_bytes`.
        SchemaParseError: If any line fails to parse.
        SchemaValidationError: If the parsed schema is structurally invalid.

    Returns:
        DSLSchema: Valid schema.
    """
    config = settings or get_settings()
    size = len(text.encode("utf-8"))
    if size > config.max_schema_bytes:
        raise InputTooLargeError(size=size, limit=config.max_schema_bytes)

    result = parse_schema(text)
    if result.issues:
        raise SchemaParseError(issues=tuple(result.issues))

    validation = validate_schema(
        result.dsl_schema,
        strict_visibility_order=config.strict_visibility_order,
    )
    if not validation.is_valid:
        raise SchemaValidationError(errors=tuple(validation.errors))
    return result.dsl_schema


def _parse_header(line: str, line_number: int) -> tuple[str, str]:
    """Split a header line into its directive and decoded value.

    Args:
        line (str): Source line starting with `@`.
        line_number (int): Line number used in error reports.

    Raises:
        DSLParseError: If the directive is unknown or the value is missing.

    Returns:
        tuple[str, str]: Directive name and value.
    """
    match = _HEADER_PATTERN.fullmatch(line.strip())
    if not match:
        raise DSLParseError(reason="Malformed header line", line_number=line_number, line=line)
    directive = match.group("directive")
    rest = match.group("rest")
    if directive not in HEADERS:
        supported = ", ".join(f"@{name}" for name in HEADERS)
        raise DSLParseError(
            reason=f"Unknown header '@{directive}'. Expected one of: {supported}",
            line_number=line_number,
            line=line,
        )
    if rest and not rest[0].isspace():
        raise DSLParseError(reason="Malformed header line", line_number=line_number, line=line)
    if not rest.strip():
        raise DSLParseError(
            reason=f"Header '@{directive}' requires a value",
            line_number=line_number,
            line=line,
        )
    return directive, read_header_value(rest, line_number=line_number, line=line)
