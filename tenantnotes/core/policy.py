"""Authorization policy for tenant-scoped actions.

``authorize`` is a pure function of the principal, the action and a
description of the target resource. It never touches the store, settings or
request state; callers load whatever they need first and translate the
resulting ``Deny`` into an HTTP error at the boundary.

Rules, first match wins:

1. no principal                                  -> UNAUTHENTICATED
2. admin-only action and principal is not admin  -> INSUFFICIENT_ROLE
3. resource tenant differs from principal tenant -> TENANT_MISMATCH
4. admin deleting their own user                 -> CANNOT_DELETE_SELF
5. otherwise                                     -> allow
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID

from tenantnotes.core.principal import Principal


class Action(str, Enum):
    NOTE_LIST = "note.list"
    NOTE_CREATE = "note.create"
    NOTE_READ = "note.read"
    NOTE_UPDATE = "note.update"
    NOTE_DELETE = "note.delete"
    USER_LIST = "user.list"
    USER_INVITE = "user.invite"
    USER_READ = "user.read"
    USER_UPDATE = "user.update"
    USER_DELETE = "user.delete"
    TENANT_READ = "tenant.read"
    TENANT_UPGRADE = "tenant.upgrade"


class DenialReason(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    INSUFFICIENT_ROLE = "insufficient_role"
    TENANT_MISMATCH = "tenant_mismatch"
    CANNOT_DELETE_SELF = "cannot_delete_self"
    LIMIT_REACHED = "limit_reached"


ADMIN_ACTIONS: frozenset[Action] = frozenset(
    {
        Action.USER_LIST,
        Action.USER_INVITE,
        Action.USER_READ,
        Action.USER_UPDATE,
        Action.USER_DELETE,
        Action.TENANT_UPGRADE,
    }
)

# Every action in the system reads or writes data owned by a tenant.
TENANT_SCOPED_ACTIONS: frozenset[Action] = frozenset(Action)


@dataclass(frozen=True, slots=True)
class Allow:
    @property
    def allowed(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Deny:
    reason: DenialReason

    @property
    def allowed(self) -> bool:
        return False


Decision = Allow | Deny

ALLOW = Allow()


def authorize(
    principal: Principal | None,
    action: Action,
    resource_owner_id: UUID | None = None,
    resource_tenant_id: UUID | None = None,
    *,
    resource_tenant_slug: str | None = None,
) -> Decision:
    if principal is None:
        return Deny(DenialReason.UNAUTHENTICATED)

    if action in ADMIN_ACTIONS and not principal.is_admin:
        return Deny(DenialReason.INSUFFICIENT_ROLE)

    if action in TENANT_SCOPED_ACTIONS and _crosses_tenant(
        principal, resource_tenant_id, resource_tenant_slug
    ):
        return Deny(DenialReason.TENANT_MISMATCH)

    if action is Action.USER_DELETE and resource_owner_id == principal.user_id:
        return Deny(DenialReason.CANNOT_DELETE_SELF)

    return ALLOW


def _crosses_tenant(
    principal: Principal,
    resource_tenant_id: UUID | None,
    resource_tenant_slug: str | None,
) -> bool:
    # A resource with no tenant descriptor is addressed through the principal's
    # own tenant (e.g. listing), so only an explicit mismatch is denied.
    if resource_tenant_id is not None and resource_tenant_id != principal.tenant_id:
        return True
    if resource_tenant_slug is not None and resource_tenant_slug != principal.tenant_slug:
        return True
    return False
