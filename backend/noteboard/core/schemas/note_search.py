from __future__ import annotations

from enum import Enum

from pydantic import Field

from noteboard.core.models.base import AppBaseModel


class SearchType(str, Enum):
    """Which note fields the search term is matched against."""

    ALL = "all"
    TITLE = "title"
    CONTENT = "content"


class SortKey(str, Enum):
    TITLE = "title"
    CATEGORY = "category"
    TAGS = "tags"


class TeamSearchType(str, Enum):
    ALL = "all"
    TEAMS = "teams"
    MEMBERS = "members"


class NoteQuery(AppBaseModel):
    """Filter, search and sort options for a note listing.

    Filters combine with AND; the selected tags combine with OR.
    """

    folder_id: str | None = None
    tag_ids: list[str] = Field(default_factory=list)
    category: str | None = None
    team_id: str | None = None
    term: str = ""
    search_type: SearchType = SearchType.ALL
    sort_by: SortKey | None = None
