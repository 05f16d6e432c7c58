"""Line classification and token scanning for the list schema DSL.

A DSL document is read line by line. Each line is a blank line, a comment,
a header (`@name ...`) or a field declaration (`key: type modifier...`).
Declarations are split into tokens by `tokenize_modifiers`: bare words,
`name=value` pairs whose value is a bare run, a double-quoted string or a
bracketed list.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from listschema.exceptions import DSLParseError

_ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t", "r": "\r"}
_NAME_CHARS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-")


class LineKind(StrEnum):
    """Kind of a DSL source line."""

    BLANK = "blank"
    COMMENT = "comment"
    HEADER = "header"
    FIELD = "field"


@dataclass(frozen=True)
class DSLLine:
    """A classified source line."""

    kind: LineKind
    line_number: int
    text: str


@dataclass(frozen=True)
class Token:
    """A bare word (`value is None`) or a `name=value` modifier."""

    name: str
    value: str | tuple[str, ...] | None = None

    @property
    def is_word(self) -> bool:
        """Return whether the token carries no value."""
        return self.value is None


def split_lines(text: str) -> list[DSLLine]:
    """Classify every line of a DSL document.

    Args:
        text (str): DSL source text.

    Returns:
        list[DSLLine]: Lines numbered from 1.
    """
    lines: list[DSLLine] = []
    for number, raw in enumerate(text.removeprefix("\ufeff").split("\n"), start=1):
        line = raw.removesuffix("\r")
        stripped = line.strip()
        if not stripped:
            kind = LineKind.BLANK
        elif stripped.startswith("#"):
            kind = LineKind.COMMENT
        elif stripped.startswith("@"):
            kind = LineKind.HEADER
        else:
            kind = LineKind.FIELD
        lines.append(DSLLine(kind=kind, line_number=number, text=line))
    return lines


class _Scanner:
    """Character cursor over one line fragment."""

    def __init__(self, text: str, *, line_number: int, line: str) -> None:
        self.text = text
        self.pos = 0
        self.line_number = line_number
        self.line = line

    def error(self, reason: str) -> DSLParseError:
        return DSLParseError(reason=reason, line_number=self.line_number, line=self.line)

    def current(self) -> str | None:
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def at_boundary(self) -> bool:
        char = self.current()
        return char is None or char.isspace()

    def skip_whitespace(self) -> None:
        while self.current() is not None and self.current().isspace():
            self.pos += 1

    def read_name(self) -> str:
        start = self.pos
        while self.current() is not None and self.current() in _NAME_CHARS:
            self.pos += 1
        return self.text[start : self.pos]

    def read_quoted(self) -> str:
        self.pos += 1
        chars: list[str] = []
        while True:
            char = self.current()
            if char is None:
                raise self.error("Unterminated quoted string")
            self.pos += 1
            if char == '"':
                return "".join(chars)
            if char == "\\":
                escaped = self.current()
                if escaped is None:
                    raise self.error("Unterminated quoted string")
                self.pos += 1
                chars.append(_ESCAPES.get(escaped, "\\" + escaped))
            else:
                chars.append(char)

    def read_bare(self, stop: str = "") -> str:
        start = self.pos
        while self.current() is not None and not self.current().isspace() and self.current() not in stop:
            self.pos += 1
        return self.text[start : self.pos]

    def read_list(self) -> tuple[str, ...]:
        self.pos += 1
        items: list[str] = []
        self.skip_whitespace()
        if self.current() == "]":
            self.pos += 1
            return ()
        while True:
            self.skip_whitespace()
            char = self.current()
            if char is None:
                raise self.error("Unterminated list, expected ']'")
            if char == '"':
                items.append(self.read_quoted())
            else:
                item = self.read_bare(stop=",]")
                if not item:
                    raise self.error("Empty list item")
                items.append(item)
            self.skip_whitespace()
            char = self.current()
            if char == ",":
                self.pos += 1
                continue
            if char == "]":
                self.pos += 1
                return tuple(items)
            if char is None:
                raise self.error("Unterminated list, expected ']'")
            raise self.error(f"Unexpected character '{char}' in list")

    def read_value(self, name: str) -> str | tuple[str, ...]:
        char = self.current()
        if char == '"':
            return self.read_quoted()
        if char == "[":
            return self.read_list()
        value = self.read_bare()
        if not value:
            raise self.error(f"Missing value for '{name}'")
        return value


def tokenize_modifiers(text: str, *, line_number: int = 1, line: str | None = None) -> list[Token]:
    """Split the part of a declaration after the colon into tokens.

    A `#` at the start of a token ends the line.

    Args:
        text (str): Declaration tail, e.g. `text required label="Title"`.
        line_number (int): Source line number for error reporting.
        line (str | None): Full source line for error reporting.

    Raises:
        DSLParseError: On unterminated strings or lists and stray characters.

    Returns:
        list[Token]: Tokens in source order.
    """
    scanner = _Scanner(text, line_number=line_number, line=text if line is None else line)
    tokens: list[Token] = []
    while True:
        scanner.skip_whitespace()
        char = scanner.current()
        if char is None or char == "#":
            return tokens
        name = scanner.read_name()
        if not name:
            raise scanner.error(f"Unexpected character '{char}'")
        if scanner.current() == "=":
            scanner.pos += 1
            tokens.append(Token(name=name, value=scanner.read_value(name)))
        else:
            tokens.append(Token(name=name))
        if not scanner.at_boundary():
            raise scanner.error(f"Unexpected character '{scanner.current()}' after '{name}'")


def read_header_value(text: str, *, line_number: int = 1, line: str | None = None) -> str:
    """Decode a header value: one quoted string or the raw rest of the line.

    Args:
        text (str): Text after the header directive.
        line_number (int): Source line number for error reporting.
        line (str | None): Full source line for error reporting.

    Raises:
        DSLParseError: If a quoted value is unterminated or followed by text.

    Returns:
        str: Decoded header value.
    """
    stripped = text.strip()
    if not stripped.startswith('"'):
        return stripped
    scanner = _Scanner(stripped, line_number=line_number, line=text if line is None else line)
    value = scanner.read_quoted()
    scanner.skip_whitespace()
    trailing = scanner.current()
    if trailing is not None and trailing != "#":
        raise scanner.error(f"Unexpected text after quoted header value: '{stripped[scanner.pos :]}'")
    return value
