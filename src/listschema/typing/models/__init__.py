"""Core domain model exports."""

from listschema.typing.models.forms import FieldWidget
from listschema.typing.models.json_schema import SanitizedJsonSchema
from listschema.typing.models.rules import (
    ChoiceRules,
    DateRules,
    NumberRules,
    TextRules,
    ValidationRules,
)
from listschema.typing.models.schema import DSLSchema, FieldDeclaration, VisibilityCondition
from listschema.typing.models.validation import (
    FieldError,
    FormValidationResult,
    ParseIssue,
    ParseResult,
    SchemaStats,
    SchemaSummary,
    ValidationResult,
)

__all__ = [
    "ChoiceRules",
    "DSLSchema",
    "DateRules",
    "FieldDeclaration",
    "FieldError",
    "FieldWidget",
    "FormValidationResult",
    "NumberRules",
    "ParseIssue",
    "ParseResult",
    "SanitizedJsonSchema",
    "SchemaStats",
    "SchemaSummary",
    "TextRules",
    "ValidationResult",
    "ValidationRules",
    "VisibilityCondition",
]
