from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from tenantnotes.core.errors import conflict, ensure_allowed
from tenantnotes.core.policy import Action, Deny, authorize
from tenantnotes.core.principal import Principal

logger = logging.getLogger(__name__)


class UnitOfWork(Protocol):
    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


def guard(
    principal: Principal | None,
    action: Action,
    resource_owner_id: UUID | None = None,
    resource_tenant_id: UUID | None = None,
    *,
    resource_tenant_slug: str | None = None,
) -> None:
    decision = authorize(
        principal,
        action,
        resource_owner_id,
        resource_tenant_id,
        resource_tenant_slug=resource_tenant_slug,
    )
    if isinstance(decision, Deny):
        logger.warning(
            "Denied action=%s user=%s tenant=%s reason=%s",
            action.value,
            principal.user_id if principal else None,
            principal.tenant_id if principal else None,
            decision.reason.value,
        )
    ensure_allowed(decision, action)


@asynccontextmanager
async def unique_violation_as_conflict(unit: UnitOfWork, message: str) -> AsyncIterator[None]:
    try:
        yield
    except IntegrityError as exc:
        await unit.rollback()
        logger.info("Unique constraint violated: %s", message)
        raise conflict(message) from exc
