"""Pydantic model for a single normalized input field."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel

FieldType = Literal["string", "number", "integer", "boolean", "array", "object"]


class FieldSchema(BaseModel):
    type: FieldType = "string"
    items_type: Optional[FieldType] = None  # only meaningful for arrays
    enum: Optional[list[Any]] = None
    title: Optional[str] = None
    description: Optional[str] = None
    required: bool = False
    placeholder: Any = None  # placeholderValue, else prefill
    default: Any = None  # declared default, or the example value
