from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Query, status

from noteboard.core.models.tag import Tag
from noteboard.core.schemas.tag import TagCreate, TagUpdate
from noteboard.dependencies import get_current_user, get_tag_service

if TYPE_CHECKING:
    from noteboard.core.services.tag_service import TagService

# Tags are shared by all users; signing in is still required
router = APIRouter(dependencies=[Depends(get_current_user)])


@router.get("/", response_model=list[Tag])
async def list_tags(
    ids: list[str] | None = Query(default=None, description="Only return these tag ids"),
    service: TagService = Depends(get_tag_service),
):
    if ids is not None:
        return await service.get_tags_by_ids(ids)
    return await service.list_tags()


@router.post("/", response_model=Tag, status_code=status.HTTP_201_CREATED)
async def create_tag(payload: TagCreate, service: TagService = Depends(get_tag_service)):
    return await service.create_tag(payload)


@router.get("/{tag_id}", response_model=Tag)
async def get_tag(tag_id: str, service: TagService = Depends(get_tag_service)):
    return await service.get_tag(tag_id)


@router.put("/{tag_id}", response_model=Tag)
async def update_tag(tag_id: str, payload: TagUpdate, service: TagService = Depends(get_tag_service)):
    return await service.update_tag(tag_id, payload)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(tag_id: str, service: TagService = Depends(get_tag_service)):
    await service.delete_tag(tag_id)
    return None
