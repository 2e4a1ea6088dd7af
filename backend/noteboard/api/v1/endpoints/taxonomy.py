from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends

from noteboard.core.schemas.note_search import SearchType, SortKey, TeamSearchType
from noteboard.core.schemas.taxonomy import NoteTaxonomy
from noteboard.dependencies import get_current_user, get_search_service, get_tag_service

if TYPE_CHECKING:
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.services.search_service import SearchService
    from noteboard.core.services.tag_service import TagService


router = APIRouter()


@router.get("/taxonomy", response_model=NoteTaxonomy)
async def get_user_taxonomy(
    current_user: SessionUser = Depends(get_current_user),
    search: SearchService = Depends(get_search_service),
    tags: TagService = Depends(get_tag_service),
) -> NoteTaxonomy:
    """Return the categories used by the caller's notes and the shared tag list."""
    return NoteTaxonomy(
        categories=await search.list_categories(user=current_user),
        tags=await tags.list_tags(),
    )


@router.get("/search-options")
async def list_search_options() -> dict[str, list[str]]:
    """Return the accepted values of the search and sort selectors."""
    return {
        "note_search_types": [t.value for t in SearchType],
        "note_sort_keys": [k.value for k in SortKey],
        "team_search_types": [t.value for t in TeamSearchType],
    }
