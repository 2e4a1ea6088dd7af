from __future__ import annotations

from pydantic import Field, field_validator

from noteboard.utils.ids import new_id

from .base import RecordModel, unique_ids


class Team(RecordModel):
    """Team owned by one user and visible to its members."""

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1, max_length=100)
    user_id: str
    member_ids: list[str] = Field(default_factory=list)

    @field_validator("member_ids", mode="before")
    @classmethod
    def normalize_member_ids(cls, v: list[str] | None) -> list[str]:
        return unique_ids(v)

    def is_visible_to(self, user_id: str) -> bool:
        return self.user_id == user_id or user_id in self.member_ids


class TeamMember(RecordModel):
    id: str = Field(default_factory=new_id)
    name: str
