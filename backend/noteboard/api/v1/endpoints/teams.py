from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from noteboard.core.models.team import Team
from noteboard.core.schemas.note_search import TeamSearchType
from noteboard.core.schemas.team import TeamCreate, TeamUpdate
from noteboard.dependencies import get_current_user, get_search_service, get_team_service

if TYPE_CHECKING:
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.services.search_service import SearchService
    from noteboard.core.services.team_service import TeamService

router = APIRouter()


@router.get("/", response_model=list[Team])
async def list_teams(
    q: str = "",
    search_type: TeamSearchType = TeamSearchType.ALL,
    current_user: SessionUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Teams the caller owns or belongs to, optionally narrowed by `q`."""
    return await service.search_teams(user=current_user, term=q, search_type=search_type)


@router.post("/", response_model=Team, status_code=status.HTTP_201_CREATED)
async def create_team(
    payload: TeamCreate,
    current_user: SessionUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return await service.create_team(payload, current_user)


@router.get("/{team_id}", response_model=Team)
async def get_team(
    team_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return await service.get_team(team_id, current_user)


@router.patch("/{team_id}", response_model=Team)
async def update_team(
    team_id: str,
    payload: TeamUpdate,
    current_user: SessionUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return await service.update_team(team_id, payload, current_user)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team(
    team_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    await service.delete_team(team_id, current_user)
    return None


@router.put("/{team_id}/members/{member_id}", response_model=Team)
async def add_team_member(
    team_id: str,
    member_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return await service.add_member(team_id, member_id, current_user)


@router.delete("/{team_id}/members/{member_id}", response_model=Team)
async def remove_team_member(
    team_id: str,
    member_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: TeamService = Depends(get_team_service),
):
    return await service.remove_member(team_id, member_id, current_user)
