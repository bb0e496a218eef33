from __future__ import annotations

from uuid import uuid4

from fastapi.testclient import TestClient
from jose import jwt

from tests.fakes import FakeSession, FakeStore


def _create_note(client: TestClient, headers: dict[str, str], title: str = "Title"):
    return client.post("/api/notes", json={"title": title, "content": "Body"}, headers=headers)


def test_health_endpoint(client: TestClient) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_request_id_is_echoed(client: TestClient) -> None:
    res = client.get("/health", headers={"X-Request-Id": "req-123"})
    assert res.headers["X-Request-Id"] == "req-123"

    generated = client.get("/health")
    assert generated.headers["X-Request-Id"]


def test_missing_and_invalid_tokens_are_unauthorized(client: TestClient, demo) -> None:
    missing = client.get("/api/notes")
    assert missing.status_code == 401
    assert missing.json()["detail"]["code"] == "unauthorized"
    assert missing.headers["WWW-Authenticate"] == "Bearer"

    invalid = client.get("/api/notes", headers={"Authorization": "Bearer not-a-token"})
    assert invalid.status_code == 401

    other_secret = jwt.encode({"sub": str(uuid4())}, "other-secret", algorithm="HS256")
    forged = client.get("/api/notes", headers={"Authorization": f"Bearer {other_secret}"})
    assert forged.status_code == 401


def test_login_returns_session_for_demo_user(client: TestClient, demo) -> None:
    res = client.post("/api/auth/login", json={"email": "ADMIN@acme.test", "password": "password"})
    assert res.status_code == 200
    body = res.json()
    assert body["user"]["email"] == "admin@acme.test"
    assert body["user"]["role"] == "admin"
    assert body["user"]["tenant_slug"] == "acme"

    claims = jwt.get_unverified_claims(body["token"])
    assert claims["exp"] - claims["iat"] == 86400
    assert claims["tenant_slug"] == "acme"

    notes = client.get("/api/notes", headers={"Authorization": f"Bearer {body['token']}"})
    assert notes.status_code == 200
    assert notes.json() == []


def test_login_failures_are_indistinguishable(client: TestClient, demo) -> None:
    wrong_password = client.post("/api/auth/login", json={"email": "admin@acme.test", "password": "nope"})
    unknown_email = client.post("/api/auth/login", json={"email": "ghost@acme.test", "password": "password"})

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["detail"]["message"] == "Invalid credentials"


def test_signup_creates_free_tenant_and_admin(client: TestClient, store: FakeStore, fake_session: FakeSession) -> None:
    res = client.post(
        "/api/auth/signup",
        json={
            "organization_name": "Initech",
            "organization_slug": "initech",
            "admin_email": "Boss@Initech.test",
            "admin_password": "secret1",
        },
    )
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Organization registered successfully"
    assert body["organization"]["plan"] == "free"
    assert body["organization"]["note_limit"] == 3
    assert body["user"]["role"] == "admin"
    assert body["user"]["email"] == "boss@initech.test"
    assert fake_session.commits == 1

    claims = jwt.get_unverified_claims(body["token"])
    assert claims["exp"] - claims["iat"] == 604800

    tenant = client.get("/api/tenants/initech", headers={"Authorization": f"Bearer {body['token']}"})
    assert tenant.status_code == 200
    assert tenant.json()["usage"] == {"unlimited": False, "note_limit": 3, "notes_used": 0}


def test_signup_rejects_invalid_slug_without_normalizing(client: TestClient, store: FakeStore) -> None:
    res = client.post(
        "/api/auth/signup",
        json={
            "organization_name": "My Org",
            "organization_slug": "My Org!",
            "admin_email": "a@b.test",
            "admin_password": "secret1",
        },
    )
    assert res.status_code == 400
    assert res.json()["detail"]["code"] == "validation_error"
    assert store.tenants == {}


def test_signup_conflicts(client: TestClient, demo) -> None:
    taken_slug = client.post(
        "/api/auth/signup",
        json={
            "organization_name": "Acme 2",
            "organization_slug": "acme",
            "admin_email": "new@acme2.test",
            "admin_password": "secret1",
        },
    )
    assert taken_slug.status_code == 409
    assert taken_slug.json()["detail"]["message"] == "Organization slug is already taken"

    taken_email = client.post(
        "/api/auth/signup",
        json={
            "organization_name": "Other",
            "organization_slug": "other",
            "admin_email": "user@globex.test",
            "admin_password": "secret1",
        },
    )
    assert taken_email.status_code == 409
    assert taken_email.json()["detail"]["message"] == "Email is already registered"


def test_note_crud_for_owner(client: TestClient, auth_headers) -> None:
    headers = auth_headers("user@acme.test")

    created = _create_note(client, headers, title="  First  ")
    assert created.status_code == 201
    note = created.json()
    assert note["title"] == "First"

    listed = client.get("/api/notes", headers=headers)
    assert [n["id"] for n in listed.json()] == [note["id"]]

    updated = client.put(
        f"/api/notes/{note['id']}",
        json={"title": "Renamed", "content": "New body"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Renamed"

    deleted = client.delete(f"/api/notes/{note['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Note deleted successfully"}

    assert client.get(f"/api/notes/{note['id']}", headers=headers).status_code == 404


def test_note_validation_errors_are_bad_requests(client: TestClient, auth_headers) -> None:
    headers = auth_headers("user@acme.test")

    assert client.post("/api/notes", json={"title": "   ", "content": "x"}, headers=headers).status_code == 400
    assert client.post("/api/notes", json={"title": "x"}, headers=headers).status_code == 400
    assert client.post("/api/notes", json={"title": "x" * 201, "content": "x"}, headers=headers).status_code == 400


def test_notes_list_newest_first(client: TestClient, auth_headers) -> None:
    headers = auth_headers("admin@acme.test")
    ids = [_create_note(client, headers, title=f"n{i}").json()["id"] for i in range(3)]

    listed = client.get("/api/notes", headers=headers).json()
    assert [n["id"] for n in listed] == list(reversed(ids))

    page = client.get("/api/notes?limit=1&offset=1", headers=headers).json()
    assert [n["id"] for n in page] == [ids[1]]


def test_cross_tenant_note_is_indistinguishable_from_missing(client: TestClient, auth_headers) -> None:
    acme_note = _create_note(client, auth_headers("user@acme.test")).json()
    globex = auth_headers("admin@globex.test")

    cross = client.get(f"/api/notes/{acme_note['id']}", headers=globex)
    missing = client.get(f"/api/notes/{uuid4()}", headers=globex)
    malformed = client.get("/api/notes/not-a-uuid", headers=globex)

    assert cross.status_code == missing.status_code == malformed.status_code == 404
    assert cross.json() == missing.json() == malformed.json()

    assert client.put(
        f"/api/notes/{acme_note['id']}", json={"title": "x", "content": "y"}, headers=globex
    ).status_code == 404
    assert client.delete(f"/api/notes/{acme_note['id']}", headers=globex).status_code == 404
    assert client.get("/api/notes", headers=globex).json() == []


def test_notes_are_private_to_their_author(client: TestClient, store: FakeStore, demo, auth_headers) -> None:
    demo["second@acme.test"] = store.add_user(tenant_id=demo["acme"].id, email="second@acme.test")
    mine = _create_note(client, auth_headers("user@acme.test")).json()

    for email in ("second@acme.test", "admin@acme.test"):
        res = client.get(f"/api/notes/{mine['id']}", headers=auth_headers(email))
        assert res.status_code == 404
        assert client.get("/api/notes", headers=auth_headers(email)).json() == []


def test_free_limit_then_upgrade_unlocks_creation(client: TestClient, store: FakeStore, auth_headers) -> None:
    member = auth_headers("user@acme.test")
    for i in range(3):
        assert _create_note(client, member, title=f"n{i}").status_code == 201

    blocked = _create_note(client, member)
    assert blocked.status_code == 403
    detail = blocked.json()["detail"]
    assert detail["code"] == "limit_reached"
    assert detail["limitReached"] is True
    assert len(store.notes) == 3

    upgraded = client.post("/api/tenants/acme/upgrade", headers=auth_headers("admin@acme.test"))
    assert upgraded.status_code == 200
    assert upgraded.json()["message"] == "Tenant upgraded to Pro successfully"
    assert upgraded.json()["tenant"]["plan"] == "pro"
    assert upgraded.json()["tenant"]["note_limit"] == -1

    count_calls = store.note_count_calls
    assert _create_note(client, member).status_code == 201
    assert store.note_count_calls == count_calls

    overview = client.get("/api/tenants/acme", headers=member).json()
    assert overview["usage"] == {"unlimited": True, "note_limit": None, "notes_used": None}


def test_note_limit_is_counted_per_user(client: TestClient, auth_headers) -> None:
    member = auth_headers("user@acme.test")
    admin = auth_headers("admin@acme.test")
    for i in range(3):
        assert _create_note(client, member, title=f"m{i}").status_code == 201

    assert _create_note(client, admin).status_code == 201


def test_upgrade_is_idempotent(client: TestClient, store: FakeStore, demo, auth_headers) -> None:
    admin = auth_headers("admin@acme.test")
    first = client.post("/api/tenants/acme/upgrade", headers=admin)
    second = client.post("/api/tenants/acme/upgrade", headers=admin)

    assert first.status_code == second.status_code == 200
    assert demo["acme"].plan == "pro"
    assert demo["globex"].plan == "free"


def test_cross_tenant_upgrade_is_forbidden(client: TestClient, demo, auth_headers) -> None:
    res = client.post("/api/tenants/acme/upgrade", headers=auth_headers("admin@globex.test"))
    assert res.status_code == 403
    assert res.json()["detail"]["message"] == "Cannot upgrade other tenants"
    assert demo["acme"].plan == "free"


def test_member_cannot_upgrade_own_tenant(client: TestClient, demo, auth_headers) -> None:
    res = client.post("/api/tenants/acme/upgrade", headers=auth_headers("user@acme.test"))
    assert res.status_code == 403
    assert res.json()["detail"]["message"] == "Forbidden. Admin access required."
    assert demo["acme"].plan == "free"


def test_tenant_read_rules(client: TestClient, auth_headers) -> None:
    member = auth_headers("user@acme.test")

    own = client.get("/api/tenants/acme", headers=member)
    assert own.status_code == 200
    assert own.json()["tenant"]["slug"] == "acme"

    other = client.get("/api/tenants/globex", headers=member)
    assert other.status_code == 403
    assert other.json()["detail"]["message"] == "Forbidden. Cannot access other tenants."


def test_members_cannot_manage_users(client: TestClient, demo, auth_headers) -> None:
    member = auth_headers("user@acme.test")
    target = demo["admin@acme.test"].id

    responses = [
        client.get("/api/users", headers=member),
        client.post("/api/users", json={"email": "x@acme.test", "password": "secret1"}, headers=member),
        client.get(f"/api/users/{target}", headers=member),
        client.get("/api/users/not-a-uuid", headers=member),
        client.put(f"/api/users/{target}", json={"role": "member"}, headers=member),
        client.delete(f"/api/users/{target}", headers=member),
    ]
    for res in responses:
        assert res.status_code == 403
        assert res.json()["detail"]["message"] == "Forbidden. Admin access required."


def test_admin_manages_users_in_own_tenant(client: TestClient, demo, auth_headers) -> None:
    admin = auth_headers("admin@acme.test")

    listed = client.get("/api/users", headers=admin).json()
    assert {u["email"] for u in listed} == {"admin@acme.test", "user@acme.test"}

    invited = client.post(
        "/api/users",
        json={"email": "New@acme.test", "password": "secret1", "first_name": "New"},
        headers=admin,
    )
    assert invited.status_code == 201
    assert invited.json()["email"] == "new@acme.test"
    assert invited.json()["role"] == "member"
    assert invited.json()["tenant_id"] == str(demo["acme"].id)

    user_id = invited.json()["id"]
    promoted = client.put(f"/api/users/{user_id}", json={"role": "admin"}, headers=admin)
    assert promoted.status_code == 200
    assert promoted.json()["role"] == "admin"

    removed = client.delete(f"/api/users/{user_id}", headers=admin)
    assert removed.status_code == 200
    assert removed.json() == {"message": "User deleted successfully"}
    assert client.get(f"/api/users/{user_id}", headers=admin).status_code == 404


def test_invited_user_can_log_in(client: TestClient, demo, auth_headers) -> None:
    client.post(
        "/api/users",
        json={"email": "fresh@acme.test", "password": "secret1"},
        headers=auth_headers("admin@acme.test"),
    )
    res = client.post("/api/auth/login", json={"email": "fresh@acme.test", "password": "secret1"})
    assert res.status_code == 200
    assert res.json()["user"]["role"] == "member"


def test_duplicate_invite_is_conflict(client: TestClient, fake_session: FakeSession, demo, auth_headers) -> None:
    res = client.post(
        "/api/users",
        json={"email": "user@globex.test", "password": "secret1"},
        headers=auth_headers("admin@acme.test"),
    )
    assert res.status_code == 409
    assert res.json()["detail"]["code"] == "conflict"
    assert fake_session.rollbacks == 1


def test_update_to_taken_email_is_conflict(client: TestClient, fake_session: FakeSession, demo, auth_headers) -> None:
    member = demo["user@acme.test"]
    res = client.put(
        f"/api/users/{member.id}",
        json={"email": "user@globex.test"},
        headers=auth_headers("admin@acme.test"),
    )
    assert res.status_code == 409
    assert res.json()["detail"]["code"] == "conflict"
    assert fake_session.rollbacks == 1
    assert fake_session.commits == 0
    assert member.email == "user@acme.test"


def test_cross_tenant_user_update_is_not_found(client: TestClient, demo, auth_headers) -> None:
    admin = auth_headers("admin@acme.test")
    foreign = demo["user@globex.test"]

    cross = client.put(f"/api/users/{foreign.id}", json={"role": "admin"}, headers=admin)
    missing = client.put(f"/api/users/{uuid4()}", json={"role": "admin"}, headers=admin)

    assert cross.status_code == missing.status_code == 404
    assert cross.json() == missing.json()
    assert foreign.role == "member"
    assert foreign.email == "user@globex.test"


def test_admin_cannot_delete_self(client: TestClient, demo, auth_headers) -> None:
    admin = demo["admin@acme.test"]
    res = client.delete(f"/api/users/{admin.id}", headers=auth_headers("admin@acme.test"))
    assert res.status_code == 400
    assert res.json()["detail"]["code"] == "cannot_delete_self"
    assert res.json()["detail"]["message"] == "Cannot delete your own account"


def test_cross_tenant_user_is_not_found(client: TestClient, store: FakeStore, demo, auth_headers) -> None:
    admin = auth_headers("admin@acme.test")
    foreign = demo["user@globex.test"].id

    cross = client.get(f"/api/users/{foreign}", headers=admin)
    missing = client.get(f"/api/users/{uuid4()}", headers=admin)
    assert cross.status_code == missing.status_code == 404
    assert cross.json() == missing.json()

    assert client.delete(f"/api/users/{foreign}", headers=admin).status_code == 404
    assert foreign in store.users


def test_limit_reached_shape_is_documented(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()
    forbidden = schema["paths"]["/api/notes"]["post"]["responses"]["403"]
    assert "detail.limitReached" in forbidden["description"]
