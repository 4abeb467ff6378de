"""Pydantic model for the outcome of a build fetch."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel

BuildLookupStatus = Literal["found", "absent", "failed", "no_build"]


class BuildLookup(BaseModel):
    status: BuildLookupStatus
    build_id: Optional[str] = None
    definition: Optional[dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == "found" and self.definition is not None
