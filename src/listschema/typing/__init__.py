"""Typing-centric domain modules."""

from listschema.typing.enums import FieldType, RuleKind, VisibilityOperator
from listschema.typing.models import (
    ChoiceRules,
    DateRules,
    DSLSchema,
    FieldDeclaration,
    FieldError,
    FieldWidget,
    FormValidationResult,
    NumberRules,
    ParseIssue,
    ParseResult,
    SanitizedJsonSchema,
    SchemaStats,
    SchemaSummary,
    TextRules,
    ValidationResult,
    VisibilityCondition,
)

__all__ = [
    "ChoiceRules",
    "DSLSchema",
    "DateRules",
    "FieldDeclaration",
    "FieldError",
    "FieldType",
    "FieldWidget",
    "FormValidationResult",
    "NumberRules",
    "ParseIssue",
    "ParseResult",
    "RuleKind",
    "SanitizedJsonSchema",
    "SchemaStats",
    "SchemaSummary",
    "TextRules",
    "ValidationResult",
    "VisibilityCondition",
    "VisibilityOperator",
]
