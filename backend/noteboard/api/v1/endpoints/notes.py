from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from noteboard.core.models.note import Note
from noteboard.core.schemas.note import NoteCreate, NoteUpdate
from noteboard.core.schemas.note_search import NoteQuery
from noteboard.dependencies import (
    get_current_user,
    get_note_service,
    get_search_service,
)

if TYPE_CHECKING:
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.services.note_service import NoteService
    from noteboard.core.services.search_service import SearchService

router = APIRouter()


@router.post("/", response_model=Note, status_code=status.HTTP_201_CREATED)
async def create_note(
    payload: NoteCreate,
    current_user: SessionUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return await service.create_note(payload, current_user)


@router.get("/", response_model=list[Note])
async def list_notes(
    current_user: SessionUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return await service.list_notes(current_user)


@router.post("/search", response_model=list[Note])
async def search_notes(
    payload: NoteQuery,
    current_user: SessionUser = Depends(get_current_user),
    service: SearchService = Depends(get_search_service),
):
    """Filter, search and sort the caller's notes.

    Folder, category and team filters combine with AND; selected tags with OR.
    """
    return await service.search_notes(user=current_user, query=payload)


@router.get("/{note_id}", response_model=Note)
async def get_note(
    note_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return await service.get_note(note_id, current_user)


@router.patch("/{note_id}", response_model=Note)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    current_user: SessionUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    return await service.update_note(note_id, payload, current_user)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: NoteService = Depends(get_note_service),
):
    await service.delete_note(note_id, current_user)
    return None
