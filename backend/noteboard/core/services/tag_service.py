from __future__ import annotations

from typing import TYPE_CHECKING

from noteboard.core.errors import AccessDeniedError
from noteboard.core.models.tag import Tag
from noteboard.core.resources import Collection
from noteboard.core.services.base import RecordService

if TYPE_CHECKING:
    from noteboard.core.schemas.tag import TagCreate, TagUpdate


class TagService(RecordService[Tag]):
    """Tags are a shared vocabulary: any user may list, create or edit them."""

    collection = Collection.TAGS
    model = Tag
    label = "Tag"

    async def list_tags(self) -> list[Tag]:
        rows = await self._store.list(self.collection.value)
        return self._to_records(rows)

    async def get_tag(self, tag_id: str) -> Tag:
        row = await self._store.get(self.collection.value, tag_id)
        if row is None:
            raise AccessDeniedError("Tag not found")
        return self._to_record(row)

    async def get_tags_by_ids(self, tag_ids: list[str]) -> list[Tag]:
        if not tag_ids:
            return []
        rows = await self._store.list(self.collection.value, filters={"id": list(tag_ids)})
        wanted = set(tag_ids)
        return [t for t in self._to_records(rows) if t.id in wanted]

    async def create_tag(self, create_dto: TagCreate) -> Tag:
        return await self._create(Tag(name=create_dto.name.strip()))

    async def update_tag(self, tag_id: str, update_dto: TagUpdate) -> Tag:
        row = await self._store.update(
            self.collection.value, tag_id, {"name": update_dto.name.strip()}
        )
        if row is None:
            raise AccessDeniedError("Tag not found")
        tag = self._to_record(row)
        self._publish("updated", tag.id)
        return tag

    async def delete_tag(self, tag_id: str) -> None:
        if not await self._store.delete(self.collection.value, tag_id):
            raise AccessDeniedError("Tag not found")
        self._publish("deleted", tag_id)
