"""Parse one DSL declaration line into a field declaration."""

from __future__ import annotations

import json
import math
import re
from datetime import date, datetime
from typing import TYPE_CHECKING

from listschema.dsl.tokenizer import Token, tokenize_modifiers
from listschema.exceptions import DSLParseError
from listschema.typing.enums import FieldType, RuleKind, VisibilityOperator
from listschema.typing.models import (
    ChoiceRules,
    DateRules,
    FieldDeclaration,
    NumberRules,
    TextRules,
    VisibilityCondition,
)

if TYPE_CHECKING:
    from listschema.typing.models.rules import ValidationRules

KEY_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9_-]*")

FLAG_MODIFIERS = frozenset({"required", "hidden"})
VALUE_MODIFIERS = frozenset({"label", "default", "help", "placeholder", "order", "visible_if"})
RULE_MODIFIERS: dict[RuleKind, frozenset[str]] = {
    RuleKind.TEXT: frozenset({"min_length", "max_length", "pattern"}),
    RuleKind.NUMBER: frozenset({"min", "max", "step"}),
    RuleKind.DATE: frozenset({"min", "max"}),
    RuleKind.CHOICE: frozenset({"options"}),
}
ALL_RULE_MODIFIERS = frozenset().union(*RULE_MODIFIERS.values())

OPERATOR_SYMBOLS: dict[str, VisibilityOperator] = {
    ">=": VisibilityOperator.GREATER_THAN_OR_EQUAL,
    "<=": VisibilityOperator.LESS_THAN_OR_EQUAL,
    "!=": VisibilityOperator.NOT_EQUALS,
    "!~": VisibilityOperator.NOT_CONTAINS,
    "=": VisibilityOperator.EQUALS,
    "~": VisibilityOperator.CONTAINS,
    ">": VisibilityOperator.GREATER_THAN,
    "<": VisibilityOperator.LESS_THAN,
}
UNARY_FUNCTIONS: dict[str, VisibilityOperator] = {
    "empty": VisibilityOperator.IS_EMPTY,
    "present": VisibilityOperator.IS_NOT_EMPTY,
}

_CONDITION_PATTERN = re.compile(
    r"(?P<key>[A-Za-z][A-Za-z0-9_-]*)\s*(?P<op>>=|<=|!=|!~|=|~|>|<)\s*(?P<value>.*)",
    re.DOTALL,
)
_UNARY_CONDITION_PATTERN = re.compile(r"(?P<fn>[a-z]+)\(\s*(?P<key>[A-Za-z][A-Za-z0-9_-]*)\s*\)")
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_SEPARATORS = re.compile(r"[\s_-]+")


def derive_label(key: str) -> str:
    """Build the default display name for a property key.

    `due_date` becomes `Due date`, `dueDate` becomes `Due Date`.

    Args:
        key (str): Property key.

    Returns:
        str: Display label.
    """
    words = _SEPARATORS.sub(" ", _CAMEL_BOUNDARY.sub(" ", key)).strip()
    return words[:1].upper() + words[1:]


def parse_number(text: str) -> int | float:
    """Parse a DSL numeric literal.

    Args:
        text (str): Literal text.

    Raises:
        ValueError: If the literal is not a finite number.

    Returns:
        int | float: Integer when the literal has no fraction or exponent.
    """
    if _INTEGER_PATTERN.fullmatch(text):
        return int(text)
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"Non-finite number '{text}'")  # noqa: TRY003
    return number


def parse_condition(text: str) -> VisibilityCondition:
    """Parse a `visible_if` expression.

    Args:
        text (str): Expression such as `tier=gold` or `empty(notes)`.

    Raises:
        ValueError: If the expression is malformed.

    Returns:
        VisibilityCondition: Parsed condition.
    """
    expression = text.strip()
    unary = _UNARY_CONDITION_PATTERN.fullmatch(expression)
    if unary:
        function = unary.group("fn")
        if function not in UNARY_FUNCTIONS:
            supported = ", ".join(f"{name}(<key>)" for name in UNARY_FUNCTIONS)
            raise ValueError(f"Unknown condition function '{function}'. Expected one of: {supported}")  # noqa: TRY003
        return VisibilityCondition(depends_on_key=unary.group("key"), operator=UNARY_FUNCTIONS[function])

    binary = _CONDITION_PATTERN.fullmatch(expression)
    if not binary:
        raise ValueError(f"Malformed condition '{expression}', expected '<key><op><value>'")  # noqa: TRY003
    operator = OPERATOR_SYMBOLS[binary.group("op")]
    value = binary.group("value").strip()
    if not value and operator not in {VisibilityOperator.EQUALS, VisibilityOperator.NOT_EQUALS}:
        raise ValueError(f"Condition '{expression}' is missing a comparison value")  # noqa: TRY003
    return VisibilityCondition(depends_on_key=binary.group("key"), operator=operator, value=value)


def parse_field_line(line: str, *, line_number: int = 1, index: int = 0) -> FieldDeclaration:
    """Parse one `key: type modifier...` declaration.

    Args:
        line (str): Source line.
        line_number (int): Line number used in error reports.
        index (int): Declaration index, used as the default display order.

    Raises:
        DSLParseError: If the declaration is malformed.

    Returns:
        FieldDeclaration: Parsed declaration.
    """
    parser = _FieldLineParser(line, line_number=line_number)
    return parser.parse(index=index)


class _FieldLineParser:
    """Single-use parser state for one declaration line."""

    def __init__(self, line: str, *, line_number: int) -> None:
        self.line = line
        self.line_number = line_number

    def fail(self, reason: str) -> DSLParseError:
        return DSLParseError(reason=reason, line_number=self.line_number, line=self.line)

    def parse(self, *, index: int) -> FieldDeclaration:
        key_part, separator, rest = self.line.strip().partition(":")
        if not separator:
            raise self.fail("Expected a '<key>: <type>' declaration")
        key = key_part.strip()
        if not key:
            raise self.fail("Missing field key before ':'")
        if not KEY_PATTERN.fullmatch(key):
            raise self.fail(
                f"Invalid field key '{key}': keys start with a letter and contain only "
                "letters, digits, underscores and hyphens",
            )

        tokens = tokenize_modifiers(rest, line_number=self.line_number, line=self.line)
        if not tokens or not tokens[0].is_word:
            raise self.fail(f"Missing field type for '{key}'")
        field_type = self._field_type(tokens[0].name)
        modifiers = self._collect_modifiers(tokens[1:], field_type)

        return FieldDeclaration(
            property_key=key,
            property_name=self._label(modifiers, key),
            property_type=field_type,
            display_order=self._order(modifiers, index),
            is_required="required" in modifiers,
            default_value=self._default(modifiers, field_type),
            validation_rules=self._rules(modifiers, field_type),
            help_text=self._scalar(modifiers, "help"),
            placeholder=self._scalar(modifiers, "placeholder"),
            is_visible="hidden" not in modifiers,
            visibility_condition=self._condition(modifiers),
        )

    def _field_type(self, token: str) -> FieldType:
        try:
            return FieldType(token)
        except ValueError:
            supported = ", ".join(member.value for member in FieldType)
            raise self.fail(f"Unknown field type '{token}'. Expected one of: {supported}") from None

    def _collect_modifiers(self, tokens: list[Token], field_type: FieldType) -> dict[str, Token]:
        allowed_rules = RULE_MODIFIERS.get(field_type.rule_kind, frozenset())
        modifiers: dict[str, Token] = {}
        for token in tokens:
            name = token.name
            if name in modifiers:
                raise self.fail(f"Duplicate modifier '{name}'")
            if name in FLAG_MODIFIERS:
                if not token.is_word:
                    raise self.fail(f"Modifier '{name}' does not take a value")
            elif name in VALUE_MODIFIERS or name in ALL_RULE_MODIFIERS:
                if token.is_word:
                    raise self.fail(f"Modifier '{name}' requires a value, e.g. {name}=...")
                if name in ALL_RULE_MODIFIERS and name not in allowed_rules:
                    raise self.fail(f"Rule '{name}' is not supported for type '{field_type}'")
            else:
                raise self.fail(f"Unknown modifier '{name}'")
            modifiers[name] = token
        return modifiers

    def _scalar(self, modifiers: dict[str, Token], name: str) -> str | None:
        token = modifiers.get(name)
        if token is None:
            return None
        if isinstance(token.value, tuple):
            raise self.fail(f"Modifier '{name}' expects a single value, not a list")
        return token.value

    def _label(self, modifiers: dict[str, Token], key: str) -> str:
        label = self._scalar(modifiers, "label")
        if label is None:
            return derive_label(key)
        if not label.strip():
            raise self.fail("Label cannot be empty")
        return label

    def _order(self, modifiers: dict[str, Token], index: int) -> int:
        raw = self._scalar(modifiers, "order")
        if raw is None:
            return index
        if not _INTEGER_PATTERN.fullmatch(raw):
            raise self.fail(f"Invalid order '{raw}': expected an integer")
        return int(raw)

    def _default(self, modifiers: dict[str, Token], field_type: FieldType) -> str | None:
        token = modifiers.get("default")
        if token is None:
            return None
        if isinstance(token.value, tuple):
            if field_type != FieldType.MULTISELECT:
                raise self.fail(f"List defaults are only allowed for multiselect fields, not '{field_type}'")
            return json.dumps(list(token.value))
        return token.value

    def _number(self, modifiers: dict[str, Token], name: str) -> int | float | None:
        raw = self._scalar(modifiers, name)
        if raw is None:
            return None
        try:
            return parse_number(raw)
        except ValueError:
            raise self.fail(f"Invalid number '{raw}' for '{name}'") from None

    def _length(self, modifiers: dict[str, Token], name: str) -> int | None:
        raw = self._scalar(modifiers, name)
        if raw is None:
            return None
        if not _INTEGER_PATTERN.fullmatch(raw):
            raise self.fail(f"Invalid length '{raw}' for '{name}': expected an integer")
        return int(raw)

    def _date_bound(self, modifiers: dict[str, Token], name: str, field_type: FieldType) -> str | None:
        raw = self._scalar(modifiers, name)
        if raw is None:
            return None
        try:
            if field_type == FieldType.DATE:
                date.fromisoformat(raw)
            else:
                datetime.fromisoformat(raw)
        except ValueError:
            raise self.fail(f"Invalid {field_type} '{raw}' for '{name}': expected ISO-8601") from None
        return raw

    def _rules(self, modifiers: dict[str, Token], field_type: FieldType) -> ValidationRules | None:
        kind = field_type.rule_kind
        if kind == RuleKind.CHOICE:
            token = modifiers.get("options")
            if token is None:
                return ChoiceRules()
            if not isinstance(token.value, tuple):
                raise self.fail("Modifier 'options' expects a list like options=[a,b]")
            return ChoiceRules(options=token.value)
        if kind is None or not RULE_MODIFIERS[kind] & modifiers.keys():
            return None
        if kind == RuleKind.TEXT:
            return TextRules(
                min_length=self._length(modifiers, "min_length"),
                max_length=self._length(modifiers, "max_length"),
                pattern=self._scalar(modifiers, "pattern"),
            )
        if kind == RuleKind.NUMBER:
            return NumberRules(
                min=self._number(modifiers, "min"),
                max=self._number(modifiers, "max"),
                step=self._number(modifiers, "step"),
            )
        return DateRules(
            min=self._date_bound(modifiers, "min", field_type),
            max=self._date_bound(modifiers, "max", field_type),
        )

    def _condition(self, modifiers: dict[str, Token]) -> VisibilityCondition | None:
        raw = self._scalar(modifiers, "visible_if")
        if raw is None:
            return None
        try:
            return parse_condition(raw)
        except ValueError as exc:
            raise self.fail(str(exc)) from None
