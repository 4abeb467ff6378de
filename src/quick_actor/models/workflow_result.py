"""Pydantic model for the result of one workflow pass."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from quick_actor.models.run_outputs import RunOutputs
from quick_actor.models.run_result import RunResult


class WorkflowResult(BaseModel):
    actor_id: str
    input: dict[str, Any] = Field(default_factory=dict)
    run: RunResult
    outputs: Optional[RunOutputs] = None
