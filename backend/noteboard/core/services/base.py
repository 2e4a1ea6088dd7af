from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError

from noteboard.core.errors import AccessDeniedError, BackendError, NotAuthenticatedError
from noteboard.core.models.base import RecordModel
from noteboard.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from noteboard.core.events import ChangeAction, ChangeBus
    from noteboard.core.repositories.record_store import RecordStore
    from noteboard.core.resources import Collection
    from noteboard.core.schemas.auth import SessionUser

logger = get_logger(__name__)

RecordT = TypeVar("RecordT", bound=RecordModel)

OWNER_FIELD = "userId"
PROTECTED_FIELDS = frozenset({"id", OWNER_FIELD})


def require_user(user: SessionUser | None) -> SessionUser:
    """Return the session user or fail before any store call is made."""
    if user is None:
        raise NotAuthenticatedError()
    return user


class RecordService(Generic[RecordT]):
    """Shared plumbing for services backed by one store collection."""

    collection: ClassVar[Collection]
    model: ClassVar[type[RecordModel]]
    label: ClassVar[str] = "Record"

    def __init__(self, store: RecordStore, bus: ChangeBus | None = None) -> None:
        self._store = store
        self._bus = bus

    def _to_record(self, row: Mapping[str, Any]) -> RecordT:
        try:
            return self.model.model_validate(row)  # type: ignore[return-value]
        except ValidationError as err:
            logger.warning(
                "Malformed row in store",
                extra={"collection": self.collection.value, "row_id": row.get("id")},
            )
            raise BackendError(f"Malformed {self.label.lower()} record") from err

    def _to_records(self, rows: list[Mapping[str, Any]]) -> list[RecordT]:
        records: list[RecordT] = []
        for row in rows:
            try:
                records.append(self._to_record(row))
            except BackendError:
                continue
        return records

    def _not_found(self) -> AccessDeniedError:
        return AccessDeniedError(f"{self.label} not found or access denied")

    def _audience(self, record: RecordT) -> list[str] | None:
        """User ids allowed to observe changes to `record` (None: everyone)."""
        return None

    def _publish(
        self, action: ChangeAction, record_id: str | None, audience: list[str] | None = None
    ) -> None:
        if self._bus is not None:
            self._bus.publish(self.collection, action, record_id, audience)

    async def _create(self, record: RecordT) -> RecordT:
        row = await self._store.create(self.collection.value, record.to_row())
        created = self._to_record(row)
        logger.info("Created %s", self.label.lower(), extra={"record_id": created.id})
        self._publish("created", created.id, self._audience(created))
        return created


class OwnedRecordService(RecordService[RecordT]):
    """Collection whose records carry an immutable owner (`userId`).

    Reads fail closed: listing without a user returns nothing and every row is
    re-checked against `_is_visible` after the store filtered it. Writes are
    conditional on the owner, so authorization and mutation are one store call.
    """

    def _is_visible(self, record: RecordT, user_id: str) -> bool:
        return record.user_id == user_id  # type: ignore[attr-defined]

    def _audience(self, record: RecordT) -> list[str] | None:
        return [record.user_id]  # type: ignore[attr-defined]

    def _delete_audience(self, user: SessionUser) -> list[str] | None:
        return [user.id]

    def _list_filters(self, user: SessionUser) -> dict[str, str]:
        return {OWNER_FIELD: user.id}

    async def _list_visible(self, user: SessionUser | None) -> list[RecordT]:
        if user is None:
            return []
        rows = await self._store.list(self.collection.value, filters=self._list_filters(user))
        return [r for r in self._to_records(rows) if self._is_visible(r, user.id)]

    async def _get_visible(self, record_id: str, user: SessionUser | None) -> RecordT:
        user = require_user(user)
        row = await self._store.get(self.collection.value, record_id)
        if row is None:
            raise self._not_found()
        record = self._to_record(row)
        if not self._is_visible(record, user.id):
            raise self._not_found()
        return record

    async def _get_owned(self, record_id: str, user: SessionUser) -> RecordT:
        record = await self._get_visible(record_id, user)
        if record.user_id != user.id:  # type: ignore[attr-defined]
            raise self._not_found()
        return record

    async def _update_owned(
        self, record_id: str, changes: dict[str, Any], user: SessionUser | None
    ) -> RecordT:
        user = require_user(user)
        sanitized = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}
        if not sanitized:
            return await self._get_owned(record_id, user)

        row = await self._store.update(
            self.collection.value, record_id, sanitized, match={OWNER_FIELD: user.id}
        )
        if row is None:
            raise await self._write_denied(record_id, user, "update")
        updated = self._to_record(row)
        self._publish("updated", updated.id, self._audience(updated))
        return updated

    async def _delete_owned(self, record_id: str, user: SessionUser | None) -> None:
        user = require_user(user)
        deleted = await self._store.delete(
            self.collection.value, record_id, match={OWNER_FIELD: user.id}
        )
        if not deleted:
            raise await self._write_denied(record_id, user, "delete")
        logger.info("Deleted %s", self.label.lower(), extra={"record_id": record_id})
        self._publish("deleted", record_id, self._delete_audience(user))

    async def _write_denied(self, record_id: str, user: SessionUser, verb: str) -> AccessDeniedError:
        """Build the error for a conditional write that matched no row."""
        logger.warning(
            "Denied %s of %s", verb, self.label.lower(),
            extra={"record_id": record_id, "user_id": user.id},
        )
        return self._not_found()
