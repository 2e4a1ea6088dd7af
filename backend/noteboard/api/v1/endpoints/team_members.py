from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query

from noteboard.core.models.team import TeamMember
from noteboard.dependencies import get_current_user, get_team_member_service

if TYPE_CHECKING:
    from noteboard.core.services.team_member_service import TeamMemberService

router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/", response_model=list[TeamMember])
async def list_team_members(
    ids: list[str] | None = Query(default=None),
    service: TeamMemberService = Depends(get_team_member_service),
):
    if ids is not None:
        return await service.get_members_by_ids(ids)
    return await service.list_members()


@router.get("/{member_id}", response_model=TeamMember)
async def get_team_member(
    member_id: str,
    service: TeamMemberService = Depends(get_team_member_service),
):
    return await service.get_member(member_id)
