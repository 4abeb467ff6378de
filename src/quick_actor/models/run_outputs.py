"""Pydantic models for the outputs of a run."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class KeyValueRecord(BaseModel):
    key: str
    content_type: Optional[str] = None
    value: Any = None


class RunOutputs(BaseModel):
    kv_record: Optional[KeyValueRecord] = None
    record_url: Optional[str] = None
    dataset_items: list[Any] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
