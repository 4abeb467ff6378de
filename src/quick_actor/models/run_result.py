"""Pydantic model for a finished (or stopped) actor run."""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

SUCCEEDED = "SUCCEEDED"


class RunResult(BaseModel):
    id: Optional[str] = None
    status: str
    usage_total_usd: Optional[float] = Field(
        default=None, validation_alias=AliasChoices("usage_total_usd", "usageTotalUsd")
    )
    default_key_value_store_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("default_key_value_store_id", "defaultKeyValueStoreId"),
    )
    default_dataset_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("default_dataset_id", "defaultDatasetId")
    )

    @property
    def succeeded(self) -> bool:
        return self.status == SUCCEEDED
