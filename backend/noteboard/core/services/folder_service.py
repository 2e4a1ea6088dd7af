from __future__ import annotations

from typing import TYPE_CHECKING

from noteboard.core.models.folder import Folder
from noteboard.core.resources import Collection
from noteboard.core.services.base import OwnedRecordService, require_user

if TYPE_CHECKING:
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.schemas.folder import FolderCreate, FolderUpdate


class FolderService(OwnedRecordService[Folder]):
    """Folders visible and mutable only by their owner."""

    collection = Collection.FOLDERS
    model = Folder
    label = "Folder"

    async def list_folders(self, user: SessionUser | None) -> list[Folder]:
        return await self._list_visible(user)

    async def get_folder(self, folder_id: str, user: SessionUser | None) -> Folder:
        return await self._get_visible(folder_id, user)

    async def create_folder(self, create_dto: FolderCreate, user: SessionUser | None) -> Folder:
        user = require_user(user)
        folder = Folder(name=create_dto.name.strip(), user_id=user.id)
        return await self._create(folder)

    async def update_folder(
        self, folder_id: str, update_dto: FolderUpdate, user: SessionUser | None
    ) -> Folder:
        changes = update_dto.model_dump(exclude_unset=True, exclude_none=True, by_alias=True)
        return await self._update_owned(folder_id, changes, user)

    async def delete_folder(self, folder_id: str, user: SessionUser | None) -> None:
        await self._delete_owned(folder_id, user)
