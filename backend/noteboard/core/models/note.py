from __future__ import annotations

from pydantic import Field, field_validator

from noteboard.utils.ids import new_id

from .base import RecordModel, unique_ids


class Note(RecordModel):
    """Note domain model."""

    id: str = Field(default_factory=new_id, description="Unique note identifier")

    title: str = Field(default="", max_length=255, description="Note title")
    content: str = Field(default="", description="Rich-text markup, stored as-is")

    # Ownership
    user_id: str = Field(..., description="Owner of the note")

    # Organization
    folder_id: str | None = Field(default=None, description="Folder owned by the same user")
    tag_ids: list[str] = Field(default_factory=list, description="Ids of global tags")
    category: str | None = Field(default=None, description="Free-form category")
    assigned_teams: list[str] = Field(default_factory=list, description="Ids of teams the note is shared with")

    @field_validator("tag_ids", "assigned_teams", mode="before")
    @classmethod
    def normalize_ids(cls, v: list[str] | None) -> list[str]:
        return unique_ids(v)

    @field_validator("category", "folder_id")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None
