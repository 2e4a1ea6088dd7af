from __future__ import annotations

from enum import Enum


class Collection(str, Enum):
    """Collections exposed by the record store."""

    USERS = "users"
    NOTES = "notes"
    FOLDERS = "folders"
    TAGS = "tags"
    TEAMS = "teams"
    TEAM_MEMBERS = "teamMembers"
