from __future__ import annotations

import pytest
from fastapi import HTTPException

from tenantnotes.core.errors import denial_to_http, ensure_allowed
from tenantnotes.core.policy import ALLOW, Action, DenialReason, Deny


@pytest.mark.parametrize(
    ("reason", "action", "status_code", "message"),
    [
        (DenialReason.UNAUTHENTICATED, Action.NOTE_LIST, 401, "Unauthorized"),
        (DenialReason.INSUFFICIENT_ROLE, Action.USER_LIST, 403, "Forbidden. Admin access required."),
        (DenialReason.TENANT_MISMATCH, Action.NOTE_READ, 404, "Note not found"),
        (DenialReason.TENANT_MISMATCH, Action.USER_DELETE, 404, "User not found"),
        (DenialReason.TENANT_MISMATCH, Action.TENANT_READ, 403, "Forbidden. Cannot access other tenants."),
        (DenialReason.TENANT_MISMATCH, Action.TENANT_UPGRADE, 403, "Cannot upgrade other tenants"),
        (DenialReason.CANNOT_DELETE_SELF, Action.USER_DELETE, 400, "Cannot delete your own account"),
        (
            DenialReason.LIMIT_REACHED,
            Action.NOTE_CREATE,
            403,
            "Note limit reached. Upgrade to Pro for unlimited notes.",
        ),
    ],
)
def test_denial_to_http(reason: DenialReason, action: Action, status_code: int, message: str) -> None:
    exc = denial_to_http(Deny(reason), action)

    assert exc.status_code == status_code
    assert exc.detail["message"] == message


def test_every_denial_reason_is_mapped() -> None:
    for reason in DenialReason:
        assert isinstance(denial_to_http(Deny(reason), Action.NOTE_CREATE), HTTPException)


def test_limit_reached_is_flagged() -> None:
    exc = denial_to_http(Deny(DenialReason.LIMIT_REACHED), Action.NOTE_CREATE)
    assert exc.detail == {
        "code": "limit_reached",
        "message": "Note limit reached. Upgrade to Pro for unlimited notes.",
        "limitReached": True,
    }


def test_unauthenticated_carries_bearer_challenge() -> None:
    exc = denial_to_http(Deny(DenialReason.UNAUTHENTICATED), Action.NOTE_LIST)
    assert exc.headers == {"WWW-Authenticate": "Bearer"}


def test_ensure_allowed() -> None:
    ensure_allowed(ALLOW, Action.NOTE_READ)

    with pytest.raises(HTTPException) as exc:
        ensure_allowed(Deny(DenialReason.INSUFFICIENT_ROLE), Action.USER_INVITE)
    assert exc.value.status_code == 403
