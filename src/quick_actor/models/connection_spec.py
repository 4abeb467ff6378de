"""Pydantic model for platform connection settings."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class ConnectionSpec(BaseModel):
    token: str = ""
    token_env: str = Field(default="APIFY_TOKEN")
    actor_id: str = Field(default="apify/hello-world")
    output_key: str = Field(default="OUTPUT")

    def resolved_token(self) -> str:
        if self.token:
            return self.token
        return os.environ.get(self.token_env, "")
