"""JSON Schema export models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SanitizedJsonSchema(BaseModel):
    """Named JSON Schema document describing one list data row.

    `strict` marks a closed object: every property is listed and no extra
    property is allowed.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str
    description: str | None = None
    json_schema: dict[str, Any] = Field(alias="schema")
    strict: bool = True

    def to_document(self) -> dict[str, Any]:
        """Return the schema document with its title and description filled in."""
        document = {"$schema": "https://json-schema.org/draft/2020-12/schema", "title": self.name}
        if self.description:
            document["description"] = self.description
        return {**document, **self.json_schema}
