from __future__ import annotations

from pydantic import ConfigDict, Field

from noteboard.core.models.base import AppBaseModel


class FolderCreate(AppBaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=100)


class FolderUpdate(AppBaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=100)
