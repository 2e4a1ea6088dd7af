from __future__ import annotations

import unicodedata
from typing import TYPE_CHECKING

from noteboard.core.schemas.note_search import SearchType, SortKey, TeamSearchType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from noteboard.core.models.note import Note
    from noteboard.core.models.tag import Tag
    from noteboard.core.models.team import Team, TeamMember
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.schemas.note_search import NoteQuery
    from noteboard.core.services.note_service import NoteService
    from noteboard.core.services.tag_service import TagService
    from noteboard.core.services.team_member_service import TeamMemberService
    from noteboard.core.services.team_service import TeamService


def filter_notes(notes: Sequence[Note], query: NoteQuery) -> list[Note]:
    """Apply folder, tag, category, team and text filters in that order."""
    filtered = list(notes)

    if query.folder_id is not None:
        filtered = [n for n in filtered if n.folder_id == query.folder_id]

    if query.tag_ids:
        selected = set(query.tag_ids)
        filtered = [n for n in filtered if selected.intersection(n.tag_ids)]

    if query.category:
        filtered = [n for n in filtered if n.category == query.category]

    if query.team_id:
        filtered = [n for n in filtered if query.team_id in n.assigned_teams]

    term = query.term.strip().lower()
    if term:
        if query.search_type is SearchType.TITLE:
            filtered = [n for n in filtered if term in n.title.lower()]
        elif query.search_type is SearchType.CONTENT:
            filtered = [n for n in filtered if term in n.content.lower()]
        else:
            filtered = [
                n for n in filtered
                if term in n.title.lower() or term in n.content.lower()
            ]

    return filtered


def note_tag_label(note: Note, tags: Sequence[Tag]) -> str:
    """Names of the note's tags, in catalogue order, joined by ", "."""
    return ", ".join(tag.name for tag in tags if tag.id in note.tag_ids)


def collation_key(text: str) -> tuple[str, str, str]:
    """Locale-style sort key that does not depend on the process locale.

    Letters compare first without accents or case, then by accent, then with
    lowercase before uppercase.
    """
    decomposed = unicodedata.normalize("NFD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), decomposed.casefold(), text.swapcase()


def sort_notes(notes: Sequence[Note], sort_by: SortKey | None, tags: Sequence[Tag] = ()) -> list[Note]:
    """Stable, case-insensitive sort; `sort_by=None` keeps the given order."""
    if sort_by is None:
        return list(notes)
    if sort_by is SortKey.TITLE:
        return sorted(notes, key=lambda n: collation_key(n.title))
    if sort_by is SortKey.CATEGORY:
        return sorted(notes, key=lambda n: collation_key(n.category or ""))
    return sorted(notes, key=lambda n: collation_key(note_tag_label(n, tags)))


def available_categories(notes: Sequence[Note]) -> list[str]:
    return sorted({n.category for n in notes if n.category})


def filter_teams(
    teams: Sequence[Team],
    members: Sequence[TeamMember],
    term: str,
    search_type: TeamSearchType = TeamSearchType.ALL,
) -> list[Team]:
    """Match `term` against team names, member names, or both."""
    term = term.strip().lower()
    if not term:
        return list(teams)

    names = {m.id: m.name.lower() for m in members}

    def _name_matches(team: Team) -> bool:
        return term in team.name.lower()

    def _member_matches(team: Team) -> bool:
        return any(term in names[mid] for mid in team.member_ids if mid in names)

    if search_type is TeamSearchType.TEAMS:
        return [t for t in teams if _name_matches(t)]
    if search_type is TeamSearchType.MEMBERS:
        return [t for t in teams if _member_matches(t)]
    return [t for t in teams if _name_matches(t) or _member_matches(t)]


class SearchService:
    """Service for filtering, searching and sorting already-authorized lists.

    Keeps view logic outside the transport layer.
    """

    def __init__(
        self,
        notes: NoteService,
        tags: TagService,
        teams: TeamService,
        members: TeamMemberService,
    ) -> None:
        self._notes = notes
        self._tags = tags
        self._teams = teams
        self._members = members

    async def search_notes(self, *, user: SessionUser | None, query: NoteQuery) -> list[Note]:
        notes = await self._notes.list_notes(user)
        filtered = filter_notes(notes, query)
        tags = await self._tags.list_tags() if query.sort_by is SortKey.TAGS else []
        return sort_notes(filtered, query.sort_by, tags)

    async def list_categories(self, *, user: SessionUser | None) -> list[str]:
        return available_categories(await self._notes.list_notes(user))

    async def search_teams(
        self,
        *,
        user: SessionUser | None,
        term: str,
        search_type: TeamSearchType = TeamSearchType.ALL,
    ) -> list[Team]:
        teams = await self._teams.list_teams(user)
        if not term.strip():
            return teams
        members = await self._members.list_members() if search_type is not TeamSearchType.TEAMS else []
        return filter_teams(teams, members, term, search_type)
