from __future__ import annotations

from pydantic import ConfigDict, Field, field_validator

from noteboard.core.models.base import AppBaseModel, unique_ids


class NoteCreate(AppBaseModel):
    """Fields a caller may set on a new note.

    Unknown keys (including any owner field) are ignored; the owner always
    comes from the session.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", max_length=255, description="Note title")
    content: str = Field(default="", description="Rich-text markup")
    folder_id: str | None = Field(default=None, description="Folder owned by the caller")
    tag_ids: list[str] = Field(default_factory=list, description="Global tag ids")
    category: str | None = None
    assigned_teams: list[str] = Field(default_factory=list, description="Team ids")

    @field_validator("tag_ids", "assigned_teams", mode="before")
    @classmethod
    def normalize_ids(cls, v: list[str] | None) -> list[str]:
        return unique_ids(v)


class NoteUpdate(AppBaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, max_length=255)
    content: str | None = None
    folder_id: str | None = None
    tag_ids: list[str] | None = None
    category: str | None = None
    assigned_teams: list[str] | None = None

    @field_validator("tag_ids", "assigned_teams", mode="before")
    @classmethod
    def normalize_ids(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return unique_ids(v)
