"""Parse and validation result models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from listschema.typing.models.schema import DSLSchema

_RESULT_CONFIG = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class ParseIssue(BaseModel):
    """A DSL line that could not be parsed."""

    model_config = _RESULT_CONFIG

    line: int
    message: str
    text: str = ""


class ParseResult(BaseModel):
    """Schema assembled from every parseable line, with per-line issues."""

    model_config = _RESULT_CONFIG

    dsl_schema: DSLSchema = Field(alias="schema")
    issues: list[ParseIssue] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return whether every line parsed."""
        return not self.issues


class FieldError(BaseModel):
    """Validation failure addressed to one field (or schema attribute)."""

    model_config = _RESULT_CONFIG

    field: str
    message: str


class ValidationResult(BaseModel):
    """Outcome of a validation pass."""

    model_config = _RESULT_CONFIG

    is_valid: bool
    errors: list[FieldError] = Field(default_factory=list)
    warnings: list[FieldError] = Field(default_factory=list)

    def errors_for(self, key: str) -> list[str]:
        """Return error messages attached to `key`.

        Args:
            key (str): Field key.

        Returns:
            list[str]: Messages in report order.
        """
        return [error.message for error in self.errors if error.field == key]


class FormValidationResult(ValidationResult):
    """Form validation outcome with coerced values."""

    cleaned_data: dict[str, Any] = Field(default_factory=dict)


class SchemaSummary(BaseModel):
    """Validation summary with field counts."""

    model_config = _RESULT_CONFIG

    is_valid: bool
    errors: list[FieldError] = Field(default_factory=list)
    warnings: list[FieldError] = Field(default_factory=list)
    field_count: int
    required_field_count: int
    conditional_field_count: int


class SchemaStats(BaseModel):
    """Field statistics for a schema."""

    model_config = _RESULT_CONFIG

    field_count: int
    required_field_count: int
    optional_field_count: int
    conditional_field_count: int
    field_types: dict[str, int] = Field(default_factory=dict)
