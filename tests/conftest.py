from __future__ import annotations

from collections.abc import Callable
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from tenantnotes.api.main import app
from tenantnotes.core.db import get_db_session
from tenantnotes.core.security.dependencies import get_token_service
from tenantnotes.core.security.tokens import TokenService
from tenantnotes.core.services import principal_for
from tests.fakes import (
    FakeNoteRepository,
    FakeSession,
    FakeStore,
    FakeTenantRepository,
    FakeUserDirectory,
    FakeUserRepository,
    seed_demo,
)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def demo(store: FakeStore) -> dict[str, SimpleNamespace]:
    return seed_demo(store)


@pytest.fixture
def token_service() -> TokenService:
    return TokenService("test-secret")


@pytest.fixture
def fake_session(store: FakeStore) -> FakeSession:
    return FakeSession(store)


@pytest.fixture
def client(fake_session: FakeSession, token_service: TokenService, monkeypatch: pytest.MonkeyPatch):
    from tenantnotes.api import dependencies

    async def _db_override():
        yield fake_session

    app.dependency_overrides[get_db_session] = _db_override
    app.dependency_overrides[get_token_service] = lambda: token_service
    monkeypatch.setattr(dependencies, "NoteRepository", FakeNoteRepository)
    monkeypatch.setattr(dependencies, "TenantRepository", FakeTenantRepository)
    monkeypatch.setattr(dependencies, "UserRepository", FakeUserRepository)
    monkeypatch.setattr(dependencies, "UserDirectory", FakeUserDirectory)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(
    store: FakeStore, demo: dict[str, SimpleNamespace], token_service: TokenService
) -> Callable[[str], dict[str, str]]:
    def _headers(email: str) -> dict[str, str]:
        user = demo[email]
        token = token_service.issue(principal_for(user, store.tenants[user.tenant_id]))
        return {"Authorization": f"Bearer {token}"}

    return _headers
