from __future__ import annotations

from uuid import UUID

import pytest

from noteboard.core.errors import AccessDeniedError, NotAuthenticatedError
from noteboard.core.resources import Collection
from noteboard.core.schemas.folder import FolderCreate
from noteboard.core.schemas.note import NoteCreate, NoteUpdate


async def test_notes_are_private_to_their_owner(note_service, alice, bob):
    note = await note_service.create_note(NoteCreate(title="Groceries"), alice)

    assert [n.id for n in await note_service.list_notes(alice)] == [note.id]
    assert await note_service.list_notes(bob) == []
    with pytest.raises(AccessDeniedError, match="Note not found or access denied"):
        await note_service.get_note(note.id, bob)


async def test_list_without_user_is_empty_and_skips_store(note_service, store):
    assert await note_service.list_notes(None) == []
    assert store.calls == []


async def test_list_rechecks_ownership_after_store_filter(note_service, store, alice, bob):
    store.ignore_filters = True
    mine = await note_service.create_note(NoteCreate(title="mine"), alice)
    await note_service.create_note(NoteCreate(title="theirs"), bob)

    assert [n.id for n in await note_service.list_notes(alice)] == [mine.id]


async def test_create_assigns_creator_as_owner(note_service, store, alice, bob):
    payload = NoteCreate.model_validate({"title": "Plan", "userId": bob.id, "id": "forged"})

    note = await note_service.create_note(payload, alice)

    assert note.user_id == alice.id
    assert note.id != "forged"
    UUID(note.id)
    assert store.rows(Collection.NOTES)[0]["userId"] == alice.id


async def test_create_requires_user_before_any_io(note_service, store):
    with pytest.raises(NotAuthenticatedError):
        await note_service.create_note(NoteCreate(title="x"), None)
    assert store.calls == []


async def test_create_publishes_change_event(note_service, bus, alice):
    with bus.subscribe(Collection.NOTES) as sub:
        note = await note_service.create_note(NoteCreate(title="x"), alice)
        event = sub.get_nowait()

    assert event.action == "created"
    assert event.record_id == note.id
    assert event.audience == [alice.id]


async def test_create_stores_camel_case_row(note_service, store, alice):
    await note_service.create_note(
        NoteCreate(title=" Trip ", content="<p>hi</p>", tag_ids=["t1", "t1", "t2"], category="travel"),
        alice,
    )

    row = store.rows(Collection.NOTES)[0]
    assert row["title"] == "Trip"
    assert row["content"] == "<p>hi</p>"
    assert row["tagIds"] == ["t1", "t2"]
    assert row["assignedTeams"] == []
    assert row["folderId"] is None


async def test_update_cannot_change_owner(note_service, store, alice, bob):
    note = await note_service.create_note(NoteCreate(title="old"), alice)

    updated = await note_service.update_note(
        note.id, NoteUpdate.model_validate({"title": "new", "userId": bob.id}), alice
    )

    assert updated.title == "new"
    assert updated.user_id == alice.id
    assert store.rows(Collection.NOTES)[0]["userId"] == alice.id


async def test_update_is_a_single_conditional_write(note_service, store, alice):
    note = await note_service.create_note(NoteCreate(title="old"), alice)
    store.calls.clear()

    await note_service.update_note(note.id, NoteUpdate(content="body"), alice)

    assert store.calls == [("update", "notes")]


async def test_update_of_foreign_note_is_denied(note_service, store, alice, bob):
    note = await note_service.create_note(NoteCreate(title="old"), alice)

    with pytest.raises(AccessDeniedError):
        await note_service.update_note(note.id, NoteUpdate(title="hijacked"), bob)
    assert store.rows(Collection.NOTES)[0]["title"] == "old"


async def test_update_can_clear_category(note_service, alice):
    note = await note_service.create_note(NoteCreate(title="x", category="work"), alice)

    updated = await note_service.update_note(note.id, NoteUpdate(category=None), alice)

    assert updated.category is None


async def test_delete_of_foreign_note_is_denied_and_record_kept(note_service, store, alice, bob):
    note = await note_service.create_note(NoteCreate(title="keep me"), alice)

    with pytest.raises(AccessDeniedError):
        await note_service.delete_note(note.id, bob)
    assert [r["id"] for r in store.rows(Collection.NOTES)] == [note.id]


async def test_delete_by_owner_publishes(note_service, store, bus, alice):
    note = await note_service.create_note(NoteCreate(title="bye"), alice)

    with bus.subscribe(Collection.NOTES) as sub:
        await note_service.delete_note(note.id, alice)
        event = sub.get_nowait()

    assert store.rows(Collection.NOTES) == []
    assert event.action == "deleted"


async def test_note_folder_must_belong_to_owner(note_service, folder_service, alice, bob):
    bobs_folder = await folder_service.create_folder(FolderCreate(name="Bob"), bob)
    alices_folder = await folder_service.create_folder(FolderCreate(name="Alice"), alice)

    with pytest.raises(AccessDeniedError, match="Folder not found or access denied"):
        await note_service.create_note(NoteCreate(title="x", folder_id=bobs_folder.id), alice)

    note = await note_service.create_note(NoteCreate(title="x", folder_id=alices_folder.id), alice)
    with pytest.raises(AccessDeniedError, match="Folder"):
        await note_service.update_note(note.id, NoteUpdate(folder_id=bobs_folder.id), alice)


async def test_numeric_legacy_ids_are_read_as_strings(note_service, store, alice):
    store.seed(Collection.NOTES, id=1712345678901, title="legacy", content="", userId=alice.id, tagIds=[5])

    notes = await note_service.list_notes(alice)

    assert notes[0].id == "1712345678901"
    assert notes[0].tag_ids == ["5"]
