"""Schema-centric domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from listschema.typing.enums import FieldType, VisibilityOperator
from listschema.typing.models.rules import ChoiceRules, ValidationRules

_SCHEMA_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class VisibilityCondition(BaseModel):
    """Makes a field relevant only when another field's value matches."""

    model_config = _SCHEMA_CONFIG

    depends_on_key: str
    operator: VisibilityOperator
    value: str | None = None


class FieldDeclaration(BaseModel):
    """Single list field declaration."""

    model_config = _SCHEMA_CONFIG

    property_key: str
    property_name: str
    property_type: FieldType
    display_order: int = 0
    is_required: bool = False
    default_value: str | None = None
    validation_rules: ValidationRules | None = None
    help_text: str | None = None
    placeholder: str | None = None
    is_visible: bool = True
    visibility_condition: VisibilityCondition | None = None

    @model_validator(mode="after")
    def _check_rules_match_type(self) -> FieldDeclaration:
        """Reject rule variants that do not belong to the field type.

        Raises:
            ValueError: If the rule kind differs from the type's rule kind.

        Returns:
            FieldDeclaration: The validated declaration.
        """
        rules = self.validation_rules
        if rules is None:
            return self
        expected = self.property_type.rule_kind
        if expected is None or rules.kind != expected:
            message = f"Rules of kind '{rules.kind}' do not apply to type '{self.property_type}'"
            raise ValueError(message)
        return self

    @property
    def options(self) -> tuple[str, ...]:
        """Return choice options, empty for non-choice fields."""
        if isinstance(self.validation_rules, ChoiceRules):
            return self.validation_rules.options
        return ()


class DSLSchema(BaseModel):
    """A named, ordered collection of field declarations."""

    model_config = _SCHEMA_CONFIG

    name: str
    description: str | None = None
    fields: tuple[FieldDeclaration, ...] = ()

    def get_field(self, key: str) -> FieldDeclaration | None:
        """Return the first field declared under `key`.

        Args:
            key (str): Property key.

        Returns:
            FieldDeclaration | None: Matching field, if any.
        """
        for schema_field in self.fields:
            if schema_field.property_key == key:
                return schema_field
        return None
