"""Pydantic model for a resolved actor input schema."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from quick_actor.models.build_lookup import BuildLookup
from quick_actor.models.field_schema import FieldSchema

ResolutionSource = Literal["build", "example"]


class SchemaResolution(BaseModel):
    field_schemas: dict[str, FieldSchema] = Field(default_factory=dict)
    required_fields: list[str] = Field(default_factory=list)
    source: ResolutionSource
    build_lookup: BuildLookup
    example: dict[str, Any] = Field(default_factory=dict)
