from __future__ import annotations

import copy
from collections import defaultdict
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient

from noteboard import dependencies
from noteboard.core.errors import BackendError
from noteboard.core.events import ChangeBus
from noteboard.core.repositories.record_store import RecordStore
from noteboard.core.resources import Collection
from noteboard.core.schemas.auth import SessionUser
from noteboard.core.services.folder_service import FolderService
from noteboard.core.services.note_service import NoteService
from noteboard.core.services.tag_service import TagService
from noteboard.core.services.team_member_service import TeamMemberService
from noteboard.core.services.team_service import TeamService
from noteboard.core.session import SessionHolder
from noteboard.main import create_app

if TYPE_CHECKING:
    from collections.abc import Mapping


class InMemoryRecordStore(RecordStore):
    """Dict-backed store with the same filter and conditional-write rules."""

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, dict[str, Any]]] = defaultdict(dict)
        self.calls: list[tuple[str, str]] = []
        self.fail = False
        self.ignore_filters = False

    def seed(self, collection: Collection | str, **row: Any) -> dict[str, Any]:
        name = getattr(collection, "value", collection)
        self.collections[name][str(row["id"])] = dict(row)
        return row

    def rows(self, collection: Collection | str) -> list[dict[str, Any]]:
        return list(self.collections[getattr(collection, "value", collection)].values())

    def _record_call(self, op: str, collection: str) -> None:
        self.calls.append((op, collection))
        if self.fail:
            raise BackendError("store offline")

    async def list(self, collection: str, *, filters: Mapping[str, Any] | None = None):
        self._record_call("list", collection)
        rows = list(self.collections[collection].values())
        if not self.ignore_filters:
            for field, value in (filters or {}).items():
                allowed = {str(v) for v in value} if isinstance(value, list) else {str(value)}
                rows = [r for r in rows if str(r.get(field)) in allowed]
        return copy.deepcopy(rows)

    async def get(self, collection: str, record_id: str):
        self._record_call("get", collection)
        row = self.collections[collection].get(str(record_id))
        return copy.deepcopy(row) if row is not None else None

    async def create(self, collection: str, row: dict[str, Any]):
        self._record_call("create", collection)
        self.collections[collection][str(row["id"])] = copy.deepcopy(row)
        return copy.deepcopy(row)

    async def update(self, collection: str, record_id: str, changes, *, match=None):
        self._record_call("update", collection)
        row = self.collections[collection].get(str(record_id))
        if row is None or not self.matches(row, match):
            return None
        row.update(copy.deepcopy(changes))
        return copy.deepcopy(row)

    async def delete(self, collection: str, record_id: str, *, match=None):
        self._record_call("delete", collection)
        row = self.collections[collection].get(str(record_id))
        if row is None or not self.matches(row, match):
            return False
        del self.collections[collection][str(record_id)]
        return True


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def bus() -> ChangeBus:
    return ChangeBus(max_queue_size=10)


@pytest.fixture
def alice() -> SessionUser:
    return SessionUser(id="user-alice", email="alice@example.com", first_name="Alice")


@pytest.fixture
def bob() -> SessionUser:
    return SessionUser(id="user-bob", email="bob@example.com", first_name="Bob")


@pytest.fixture
def carol() -> SessionUser:
    return SessionUser(id="user-carol", email="carol@example.com", first_name="Carol")


@pytest.fixture
def note_service(store, bus) -> NoteService:
    return NoteService(store, bus)


@pytest.fixture
def folder_service(store, bus) -> FolderService:
    return FolderService(store, bus)


@pytest.fixture
def tag_service(store, bus) -> TagService:
    return TagService(store, bus)


@pytest.fixture
def team_service(store, bus) -> TeamService:
    return TeamService(store, bus)


@pytest.fixture
def member_service(store) -> TeamMemberService:
    return TeamMemberService(store)


@pytest.fixture
def team_members(store, alice, bob, carol):
    """Team member records whose ids mirror the test users."""
    for user in (alice, bob, carol):
        store.seed(Collection.TEAM_MEMBERS, id=user.id, name=user.first_name)
    return store.rows(Collection.TEAM_MEMBERS)


@pytest.fixture
def sessions() -> SessionHolder:
    return SessionHolder()


@pytest.fixture
def app(store):
    dependencies._login_attempts.clear()
    return create_app(record_store=store)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
