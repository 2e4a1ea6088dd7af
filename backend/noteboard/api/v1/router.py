from __future__ import annotations

from fastapi import APIRouter

from .endpoints import auth, events, folders, health, notes, tags, taxonomy, team_members, teams

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(notes.router, prefix="/notes", tags=["notes"])
api_router.include_router(folders.router, prefix="/folders", tags=["folders"])
api_router.include_router(tags.router, prefix="/tags", tags=["tags"])
api_router.include_router(teams.router, prefix="/teams", tags=["teams"])
api_router.include_router(team_members.router, prefix="/team-members", tags=["team-members"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(taxonomy.router, prefix="/metadata", tags=["metadata"])
