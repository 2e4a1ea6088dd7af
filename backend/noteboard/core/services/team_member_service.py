from __future__ import annotations

from noteboard.core.errors import AccessDeniedError
from noteboard.core.models.team import TeamMember
from noteboard.core.resources import Collection
from noteboard.core.services.base import RecordService


class TeamMemberService(RecordService[TeamMember]):
    """Read-only access to the people that can be added to teams."""

    collection = Collection.TEAM_MEMBERS
    model = TeamMember
    label = "Team member"

    async def list_members(self) -> list[TeamMember]:
        rows = await self._store.list(self.collection.value)
        return self._to_records(rows)

    async def get_member(self, member_id: str) -> TeamMember:
        row = await self._store.get(self.collection.value, member_id)
        if row is None:
            raise AccessDeniedError("Team member not found")
        return self._to_record(row)

    async def get_members_by_ids(self, member_ids: list[str]) -> list[TeamMember]:
        if not member_ids:
            return []
        rows = await self._store.list(self.collection.value, filters={"id": list(member_ids)})
        wanted = set(member_ids)
        return [m for m in self._to_records(rows) if m.id in wanted]
