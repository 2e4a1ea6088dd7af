from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, status

from noteboard.core.models.folder import Folder
from noteboard.core.schemas.folder import FolderCreate, FolderUpdate
from noteboard.dependencies import get_current_user, get_folder_service

if TYPE_CHECKING:
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.services.folder_service import FolderService

router = APIRouter()


@router.post("/", response_model=Folder, status_code=status.HTTP_201_CREATED)
async def create_folder(
    payload: FolderCreate,
    current_user: SessionUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    return await service.create_folder(payload, current_user)


@router.get("/", response_model=list[Folder])
async def list_folders(
    current_user: SessionUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    return await service.list_folders(current_user)


@router.get("/{folder_id}", response_model=Folder)
async def get_folder(
    folder_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    return await service.get_folder(folder_id, current_user)


@router.patch("/{folder_id}", response_model=Folder)
async def update_folder(
    folder_id: str,
    payload: FolderUpdate,
    current_user: SessionUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    return await service.update_folder(folder_id, payload, current_user)


@router.delete("/{folder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_id: str,
    current_user: SessionUser = Depends(get_current_user),
    service: FolderService = Depends(get_folder_service),
):
    await service.delete_folder(folder_id, current_user)
    return None
