from __future__ import annotations

from typing import TYPE_CHECKING

from noteboard.core.errors import AccessDeniedError
from noteboard.core.models.note import Note
from noteboard.core.resources import Collection
from noteboard.core.services.base import OwnedRecordService, require_user
from noteboard.core.services.folder_service import FolderService

if TYPE_CHECKING:
    from noteboard.core.events import ChangeBus
    from noteboard.core.repositories.record_store import RecordStore
    from noteboard.core.schemas.auth import SessionUser
    from noteboard.core.schemas.note import NoteCreate, NoteUpdate


class NoteService(OwnedRecordService[Note]):
    """Service for managing notes with owner-only access."""

    collection = Collection.NOTES
    model = Note
    label = "Note"

    def __init__(self, store: RecordStore, bus: ChangeBus | None = None) -> None:
        super().__init__(store, bus)
        self._folders = FolderService(store, bus)

    async def list_notes(self, user: SessionUser | None) -> list[Note]:
        """List the user's notes in store order; empty when signed out."""
        return await self._list_visible(user)

    async def get_note(self, note_id: str, user: SessionUser | None) -> Note:
        return await self._get_visible(note_id, user)

    async def create_note(self, create_dto: NoteCreate, user: SessionUser | None) -> Note:
        """Create a note owned by `user`, whatever owner the payload names."""
        user = require_user(user)
        await self._check_folder(create_dto.folder_id, user)
        note = Note(
            title=create_dto.title.strip(),
            content=create_dto.content,
            user_id=user.id,
            folder_id=create_dto.folder_id,
            tag_ids=create_dto.tag_ids,
            category=create_dto.category,
            assigned_teams=create_dto.assigned_teams,
        )
        return await self._create(note)

    async def update_note(
        self, note_id: str, update_dto: NoteUpdate, user: SessionUser | None
    ) -> Note:
        """Apply a partial update to a note the user owns."""
        user = require_user(user)
        changes = update_dto.model_dump(exclude_unset=True, by_alias=True)
        # folderId and category may be cleared; the rest cannot be null
        for key in ("title", "content", "tagIds", "assignedTeams"):
            if key in changes and changes[key] is None:
                del changes[key]
        if isinstance(changes.get("title"), str):
            changes["title"] = changes["title"].strip()
        if changes.get("folderId"):
            await self._check_folder(changes["folderId"], user)
        return await self._update_owned(note_id, changes, user)

    async def delete_note(self, note_id: str, user: SessionUser | None) -> None:
        await self._delete_owned(note_id, user)

    async def _check_folder(self, folder_id: str | None, user: SessionUser) -> None:
        """A note may only be filed into a folder of the same owner."""
        if not folder_id:
            return
        try:
            await self._folders.get_folder(folder_id, user)
        except AccessDeniedError as err:
            raise AccessDeniedError("Folder not found or access denied") from err
