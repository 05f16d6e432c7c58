"""Validation rule variants, tagged by rule kind."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


_RULES_CONFIG = ConfigDict(
    extra="forbid",
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,
)


class TextRules(BaseModel):
    """Length and pattern constraints for text-like fields."""

    model_config = _RULES_CONFIG

    kind: Literal["text"] = "text"
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None


class NumberRules(BaseModel):
    """Range and step constraints for number fields."""

    model_config = _RULES_CONFIG

    kind: Literal["number"] = "number"
    min: int | float | None = None
    max: int | float | None = None
    step: int | float | None = None


class DateRules(BaseModel):
    """Inclusive ISO-8601 bounds for date and datetime fields."""

    model_config = _RULES_CONFIG

    kind: Literal["date"] = "date"
    min: str | None = None
    max: str | None = None


class ChoiceRules(BaseModel):
    """Allowed options for select and multiselect fields."""

    model_config = _RULES_CONFIG

    kind: Literal["choice"] = "choice"
    options: tuple[str, ...] = ()


ValidationRules = Annotated[
    TextRules | NumberRules | DateRules | ChoiceRules,
    Field(discriminator="kind"),
]
