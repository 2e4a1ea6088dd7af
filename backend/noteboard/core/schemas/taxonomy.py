from __future__ import annotations

from pydantic import Field

from noteboard.core.models.base import AppBaseModel
from noteboard.core.models.tag import Tag  # noqa: TCH001


class NoteTaxonomy(AppBaseModel):
    """Values available for filtering a user's notes.

    - categories: unique categories used by the user's notes, sorted
    - tags: every tag (tags are shared across users)
    """

    categories: list[str] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
