from __future__ import annotations

import pytest

from noteboard.core.resources import Collection

API = "/api/v1"
PASSWORD = "s3cret-pass"


async def sign_up(client, email: str, first_name: str = "") -> dict[str, str]:
    resp = await client.post(
        f"{API}/auth/register",
        json={"email": email, "password": PASSWORD, "firstName": first_name},
    )
    assert resp.status_code == 201, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
async def alice_headers(client):
    return await sign_up(client, "alice@example.com", "Alice")


@pytest.fixture
async def bob_headers(client):
    return await sign_up(client, "bob@example.com", "Bob")


async def test_health(client):
    resp = await client.get(f"{API}/health/")

    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"


async def test_register_login_and_me(client, alice_headers):
    me = await client.get(f"{API}/auth/me", headers=alice_headers)
    login = await client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": PASSWORD})

    assert me.status_code == 200
    assert me.json()["firstName"] == "Alice"
    assert "password" not in me.json()
    assert login.status_code == 200
    assert login.json()["user"]["id"] == me.json()["id"]


async def test_duplicate_registration_conflicts(client, store, alice_headers):
    resp = await client.post(
        f"{API}/auth/register", json={"email": "alice@example.com", "password": "other-pass"}
    )

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Email already exists"
    assert len(store.rows(Collection.USERS)) == 1


async def test_wrong_password_is_unauthorized(client, alice_headers):
    resp = await client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "nope-nope"})

    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid email or password"


async def test_logout_invalidates_token(client, alice_headers):
    resp = await client.post(f"{API}/auth/logout", headers=alice_headers)

    assert resp.status_code == 204
    assert (await client.get(f"{API}/auth/me", headers=alice_headers)).status_code == 401
    assert (await client.get(f"{API}/notes/", headers=alice_headers)).status_code == 401


async def test_requests_without_token_are_rejected(client):
    assert (await client.get(f"{API}/notes/")).status_code == 401
    assert (await client.get(f"{API}/tags/")).status_code == 401


async def test_notes_are_private_to_their_owner(client, alice_headers, bob_headers):
    created = await client.post(
        f"{API}/notes/",
        json={"title": "Plan", "content": "<b>hi</b>", "userId": "someone-else"},
        headers=alice_headers,
    )
    note = created.json()
    me = (await client.get(f"{API}/auth/me", headers=alice_headers)).json()

    assert created.status_code == 201
    assert note["userId"] == me["id"]

    bob_get = await client.get(f"{API}/notes/{note['id']}", headers=bob_headers)
    bob_patch = await client.patch(f"{API}/notes/{note['id']}", json={"title": "x"}, headers=bob_headers)
    bob_delete = await client.delete(f"{API}/notes/{note['id']}", headers=bob_headers)
    bob_list = await client.get(f"{API}/notes/", headers=bob_headers)

    assert bob_get.status_code == 404
    assert bob_get.json()["detail"] == "Note not found or access denied"
    assert bob_patch.status_code == 404
    assert bob_delete.status_code == 404
    assert bob_list.json() == []

    alice_list = await client.get(f"{API}/notes/", headers=alice_headers)
    assert [n["title"] for n in alice_list.json()] == ["Plan"]


async def test_note_update_and_delete(client, alice_headers):
    note = (await client.post(f"{API}/notes/", json={"title": "a"}, headers=alice_headers)).json()

    patched = await client.patch(
        f"{API}/notes/{note['id']}", json={"category": "work", "tagIds": ["t1"]}, headers=alice_headers
    )
    deleted = await client.delete(f"{API}/notes/{note['id']}", headers=alice_headers)

    assert patched.status_code == 200
    assert patched.json()["category"] == "work"
    assert patched.json()["title"] == "a"
    assert deleted.status_code == 204
    assert (await client.get(f"{API}/notes/{note['id']}", headers=alice_headers)).status_code == 404


async def test_note_cannot_use_someone_elses_folder(client, alice_headers, bob_headers):
    folder = (await client.post(f"{API}/folders/", json={"name": "Bob's"}, headers=bob_headers)).json()

    resp = await client.post(
        f"{API}/notes/", json={"title": "x", "folderId": folder["id"]}, headers=alice_headers
    )

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Folder not found or access denied"


async def test_search_notes(client, alice_headers):
    for title, tags in (("beta", ["t1"]), ("alpha", ["t2"]), ("gamma", ["t1", "t2"])):
        await client.post(f"{API}/notes/", json={"title": title, "tagIds": tags}, headers=alice_headers)

    resp = await client.post(
        f"{API}/notes/search", json={"tagIds": ["t1"], "sortBy": "title"}, headers=alice_headers
    )

    assert resp.status_code == 200
    assert [n["title"] for n in resp.json()] == ["beta", "gamma"]


async def test_folders_crud(client, alice_headers, bob_headers):
    created = await client.post(f"{API}/folders/", json={"name": "Work"}, headers=alice_headers)
    folder_id = created.json()["id"]

    renamed = await client.patch(f"{API}/folders/{folder_id}", json={"name": "Job"}, headers=alice_headers)
    bob_list = await client.get(f"{API}/folders/", headers=bob_headers)

    assert created.status_code == 201
    assert renamed.json()["name"] == "Job"
    assert bob_list.json() == []
    assert (await client.delete(f"{API}/folders/{folder_id}", headers=bob_headers)).status_code == 404
    assert (await client.delete(f"{API}/folders/{folder_id}", headers=alice_headers)).status_code == 204


async def test_tags_are_shared(client, alice_headers, bob_headers):
    tag = (await client.post(f"{API}/tags/", json={"name": "urgent"}, headers=alice_headers)).json()

    listed = await client.get(f"{API}/tags/", headers=bob_headers)
    by_ids = await client.get(f"{API}/tags/", params={"ids": [tag["id"], "missing"]}, headers=bob_headers)
    missing = await client.get(f"{API}/tags/missing", headers=bob_headers)

    assert [t["name"] for t in listed.json()] == ["urgent"]
    assert [t["id"] for t in by_ids.json()] == [tag["id"]]
    assert missing.status_code == 404


async def test_teams_visible_to_members(client, store, alice_headers, bob_headers):
    bob = (await client.get(f"{API}/auth/me", headers=bob_headers)).json()
    store.seed(Collection.TEAM_MEMBERS, id=bob["id"], name="Bob")

    team = (await client.post(
        f"{API}/teams/", json={"name": "Design", "memberIds": [bob["id"]]}, headers=alice_headers
    )).json()
    bob_teams = await client.get(f"{API}/teams/", params={"q": "bob", "search_type": "members"}, headers=bob_headers)
    bob_rename = await client.patch(f"{API}/teams/{team['id']}", json={"name": "Mine"}, headers=bob_headers)

    assert [t["id"] for t in bob_teams.json()] == [team["id"]]
    assert bob_rename.status_code == 404
    assert bob_rename.json()["detail"] == "Access denied: Only team owners can update teams"


async def test_metadata_taxonomy(client, alice_headers):
    await client.post(f"{API}/notes/", json={"title": "a", "category": "work"}, headers=alice_headers)
    await client.post(f"{API}/tags/", json={"name": "urgent"}, headers=alice_headers)

    resp = await client.get(f"{API}/metadata/taxonomy", headers=alice_headers)

    assert resp.json()["categories"] == ["work"]
    assert [t["name"] for t in resp.json()["tags"]] == ["urgent"]


async def test_unknown_event_resource(client, alice_headers):
    resp = await client.get(f"{API}/events/bogus", headers=alice_headers)

    assert resp.status_code == 422


async def test_store_failure_maps_to_bad_gateway(client, store, alice_headers):
    store.fail = True

    resp = await client.get(f"{API}/notes/", headers=alice_headers)

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Storage service error. Please try again."


async def test_login_failure_when_store_is_down(client, store):
    store.fail = True

    resp = await client.post(f"{API}/auth/login", json={"email": "a@example.com", "password": PASSWORD})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Login failed. Please try again."


async def test_register_enforces_minimum_password_length(client, store):
    short = await client.post(f"{API}/auth/register", json={"email": "c@example.com", "password": "12345"})
    ok = await client.post(f"{API}/auth/register", json={"email": "c@example.com", "password": "secret7"})

    assert short.status_code == 422
    assert ok.status_code == 201
    assert len(store.rows(Collection.USERS)) == 1


async def test_password_change_enforces_minimum_length(client, alice_headers):
    short = await client.post(f"{API}/auth/me/password", json={"newPassword": "abc"}, headers=alice_headers)
    ok = await client.post(f"{API}/auth/me/password", json={"newPassword": "fresh1"}, headers=alice_headers)
    login = await client.post(f"{API}/auth/login", json={"email": "alice@example.com", "password": "fresh1"})

    assert short.status_code == 422
    assert ok.status_code == 200
    assert login.status_code == 200
