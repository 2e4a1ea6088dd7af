from __future__ import annotations

from pydantic import Field

from noteboard.core.models.base import AppBaseModel


class TagCreate(AppBaseModel):
    name: str = Field(..., min_length=1, max_length=50)


class TagUpdate(AppBaseModel):
    name: str = Field(..., min_length=1, max_length=50)
