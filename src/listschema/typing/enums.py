"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class RuleKind(_EnumMixin):
    """Validation rule families, one per group of field types."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    CHOICE = "choice"


class FieldType(_EnumMixin):
    """Supported list field types."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CHECKBOX = "checkbox"
    TEXTAREA = "textarea"
    URL = "url"
    EMAIL = "email"
    TEL = "tel"
    COLOR = "color"
    FILE = "file"

    @property
    def rule_kind(self) -> RuleKind | None:
        """Return the rule family accepted by this type, if any."""
        return _RULE_KIND_BY_TYPE.get(self)

    @property
    def is_choice(self) -> bool:
        """Return whether values must come from an options list."""
        return self in {FieldType.SELECT, FieldType.MULTISELECT}

    @property
    def is_boolean(self) -> bool:
        """Return whether values are true/false flags."""
        return self in {FieldType.BOOLEAN, FieldType.CHECKBOX}


_RULE_KIND_BY_TYPE: dict[FieldType, RuleKind] = {
    FieldType.TEXT: RuleKind.TEXT,
    FieldType.TEXTAREA: RuleKind.TEXT,
    FieldType.EMAIL: RuleKind.TEXT,
    FieldType.URL: RuleKind.TEXT,
    FieldType.TEL: RuleKind.TEXT,
    FieldType.NUMBER: RuleKind.NUMBER,
    FieldType.DATE: RuleKind.DATE,
    FieldType.DATETIME: RuleKind.DATE,
    FieldType.SELECT: RuleKind.CHOICE,
    FieldType.MULTISELECT: RuleKind.CHOICE,
}


class VisibilityOperator(_EnumMixin):
    """Comparison applied by a visibility condition."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    GREATER_THAN_OR_EQUAL = "greater_than_or_equal"
    LESS_THAN_OR_EQUAL = "less_than_or_equal"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"

    @property
    def is_unary(self) -> bool:
        """Return whether the operator ignores the comparison value."""
        return self in {VisibilityOperator.IS_EMPTY, VisibilityOperator.IS_NOT_EMPTY}
