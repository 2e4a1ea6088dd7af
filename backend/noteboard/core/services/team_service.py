from __future__ import annotations

from typing import TYPE_CHECKING, Any

from noteboard.core.errors import AccessDeniedError
from noteboard.core.models.team import Team
from noteboard.core.resources import Collection
from noteboard.core.services.base import OwnedRecordService, require_user
from noteboard.core.services.team_member_service import TeamMemberService

if TYPE_CHECKING:
    from noteboard.core.events import ChangeBus
    from noteboard.core.repositories.record_store import RecordStore
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.schemas.team import TeamCreate, TeamUpdate


class TeamService(OwnedRecordService[Team]):
    """Teams are readable by owner and members, writable by the owner only."""

    collection = Collection.TEAMS
    model = Team
    label = "Team"

    def __init__(self, store: RecordStore, bus: ChangeBus | None = None) -> None:
        super().__init__(store, bus)
        self._members = TeamMemberService(store, bus)

    def _is_visible(self, record: Team, user_id: str) -> bool:
        return record.is_visible_to(user_id)

    def _audience(self, record: Team) -> list[str] | None:
        return [record.user_id, *record.member_ids]

    def _delete_audience(self, user: SessionUser) -> list[str] | None:
        # Former members are unknown once the row is gone
        return None

    def _list_filters(self, user: SessionUser) -> dict[str, str]:
        # Membership lives inside an array column; filter after the fetch
        return {}

    async def list_teams(self, user: SessionUser | None) -> list[Team]:
        return await self._list_visible(user)

    async def get_team(self, team_id: str, user: SessionUser | None) -> Team:
        return await self._get_visible(team_id, user)

    async def create_team(self, create_dto: TeamCreate, user: SessionUser | None) -> Team:
        user = require_user(user)
        await self._check_members(create_dto.member_ids)
        team = Team(name=create_dto.name.strip(), user_id=user.id, member_ids=create_dto.member_ids)
        return await self._create(team)

    async def update_team(
        self, team_id: str, update_dto: TeamUpdate, user: SessionUser | None
    ) -> Team:
        user = require_user(user)
        changes: dict[str, Any] = update_dto.model_dump(
            exclude_unset=True, exclude_none=True, by_alias=True
        )
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if "memberIds" in changes:
            await self._check_members(changes["memberIds"])
        return await self._update_owned(team_id, changes, user)

    async def delete_team(self, team_id: str, user: SessionUser | None) -> None:
        await self._delete_owned(team_id, user)

    async def add_member(self, team_id: str, member_id: str, user: SessionUser | None) -> Team:
        user = require_user(user)
        team = await self._get_visible(team_id, user)
        if team.user_id != user.id:
            raise AccessDeniedError("Access denied: Only team owners can add members")
        if member_id in team.member_ids:
            return team
        await self._check_members([member_id])
        return await self._update_owned(
            team_id, {"memberIds": [*team.member_ids, member_id]}, user
        )

    async def remove_member(self, team_id: str, member_id: str, user: SessionUser | None) -> Team:
        user = require_user(user)
        team = await self._get_visible(team_id, user)
        if team.user_id != user.id:
            raise AccessDeniedError("Access denied: Only team owners can remove members")
        if member_id not in team.member_ids:
            return team
        return await self._update_owned(
            team_id, {"memberIds": [m for m in team.member_ids if m != member_id]}, user
        )

    async def _check_members(self, member_ids: list[str]) -> None:
        """Every id in `member_ids` must name an existing team member."""
        if not member_ids:
            return
        found = {m.id for m in await self._members.get_members_by_ids(member_ids)}
        missing = [m for m in member_ids if m not in found]
        if missing:
            raise AccessDeniedError(f"Team member not found: {', '.join(missing)}")

    async def _write_denied(self, record_id: str, user: SessionUser, verb: str) -> AccessDeniedError:
        # Members may read a team; tell them why the write was refused
        error = await super()._write_denied(record_id, user, verb)
        row = await self._store.get(self.collection.value, record_id)
        if row is not None and self._to_record(row).is_visible_to(user.id):
            return AccessDeniedError(f"Access denied: Only team owners can {verb} teams")
        return error
