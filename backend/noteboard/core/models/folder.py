from __future__ import annotations

from pydantic import Field

from noteboard.utils.ids import new_id

from .base import RecordModel


class Folder(RecordModel):
    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=100)
    user_id: str
