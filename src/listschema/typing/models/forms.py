"""Form widget metadata models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FieldWidget(BaseModel):
    """Element name and attributes used to render one field input."""

    model_config = ConfigDict(extra="forbid")

    element: str
    props: dict[str, Any] = Field(default_factory=dict)
