from __future__ import annotations

from pydantic import ConfigDict, Field, field_validator

from noteboard.core.models.base import AppBaseModel, unique_ids


class TeamCreate(AppBaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=100)
    member_ids: list[str] = Field(default_factory=list)

    @field_validator("member_ids", mode="before")
    @classmethod
    def normalize_member_ids(cls, v: list[str] | None) -> list[str]:
        return unique_ids(v)


class TeamUpdate(AppBaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    member_ids: list[str] | None = None

    @field_validator("member_ids", mode="before")
    @classmethod
    def normalize_member_ids(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return unique_ids(v)
