from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import HTTPException, status

from tenantnotes.core.policy import Action, Decision, DenialReason, Deny

NOTE_ACTIONS: frozenset[Action] = frozenset(
    {Action.NOTE_LIST, Action.NOTE_CREATE, Action.NOTE_READ, Action.NOTE_UPDATE, Action.NOTE_DELETE}
)
USER_ACTIONS: frozenset[Action] = frozenset(
    {Action.USER_LIST, Action.USER_INVITE, Action.USER_READ, Action.USER_UPDATE, Action.USER_DELETE}
)

NOTE_NOT_FOUND = "Note not found"
USER_NOT_FOUND = "User not found"
TENANT_NOT_FOUND = "Tenant not found"


class ErrorCode(str, Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    CANNOT_DELETE_SELF = "cannot_delete_self"
    LIMIT_REACHED = "limit_reached"
    NOT_FOUND = "not_found"
    VALIDATION_ERROR = "validation_error"
    CONFLICT = "conflict"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INTERNAL_ERROR = "internal_error"


def error_body(code: ErrorCode, message: str, **extra: Any) -> dict[str, Any]:
    return {"code": code.value, "message": message, **extra}


def http_error(
    *,
    status_code: int,
    code: ErrorCode,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: Any,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=error_body(code, message, **extra),
        headers=headers,
    )


def unauthorized(message: str = "Unauthorized") -> HTTPException:
    return http_error(
        status_code=status.HTTP_401_UNAUTHORIZED,
        code=ErrorCode.UNAUTHORIZED,
        message=message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def not_found(message: str) -> HTTPException:
    return http_error(status_code=status.HTTP_404_NOT_FOUND, code=ErrorCode.NOT_FOUND, message=message)


def conflict(message: str) -> HTTPException:
    return http_error(status_code=status.HTTP_409_CONFLICT, code=ErrorCode.CONFLICT, message=message)


def internal_error(message: str = "Internal server error") -> HTTPException:
    return http_error(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
    )


def denial_to_http(denial: Deny, action: Action) -> HTTPException:
    """Translate a policy or quota denial into the HTTP error the client sees.

    Tenant mismatches on individual notes and users surface as the same 404 a
    missing row produces, so a caller cannot probe for another tenant's ids.
    """
    match denial.reason:
        case DenialReason.UNAUTHENTICATED:
            return unauthorized()
        case DenialReason.INSUFFICIENT_ROLE:
            return http_error(
                status_code=status.HTTP_403_FORBIDDEN,
                code=ErrorCode.FORBIDDEN,
                message="Forbidden. Admin access required.",
            )
        case DenialReason.TENANT_MISMATCH:
            if action in NOTE_ACTIONS:
                return not_found(NOTE_NOT_FOUND)
            if action in USER_ACTIONS:
                return not_found(USER_NOT_FOUND)
            message = (
                "Cannot upgrade other tenants"
                if action is Action.TENANT_UPGRADE
                else "Forbidden. Cannot access other tenants."
            )
            return http_error(status_code=status.HTTP_403_FORBIDDEN, code=ErrorCode.FORBIDDEN, message=message)
        case DenialReason.CANNOT_DELETE_SELF:
            return http_error(
                status_code=status.HTTP_400_BAD_REQUEST,
                code=ErrorCode.CANNOT_DELETE_SELF,
                message="Cannot delete your own account",
            )
        case DenialReason.LIMIT_REACHED:
            return http_error(
                status_code=status.HTTP_403_FORBIDDEN,
                code=ErrorCode.LIMIT_REACHED,
                message="Note limit reached. Upgrade to Pro for unlimited notes.",
                limitReached=True,
            )
        case _:
            raise AssertionError(f"Unmapped denial reason: {denial.reason!r}")


def ensure_allowed(decision: Decision, action: Action) -> None:
    if isinstance(decision, Deny):
        raise denial_to_http(decision, action)
