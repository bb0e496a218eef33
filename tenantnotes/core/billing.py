from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

import redis.asyncio as redis
from fastapi import status
from redis.exceptions import LockError

from tenantnotes.core.config import settings
from tenantnotes.core.errors import ErrorCode, http_error
from tenantnotes.core.policy import ALLOW, Decision, DenialReason, Deny
from tenantnotes.models.tenant import UNLIMITED_NOTES, Plan

logger = logging.getLogger(__name__)


class PlanHolder(Protocol):
    plan: str
    note_limit: int


@dataclass(slots=True)
class PlanEntitlements:
    plan: Plan
    note_limit: int | None

    @property
    def unlimited(self) -> bool:
        return self.note_limit is None


def is_unlimited(tenant: PlanHolder) -> bool:
    return tenant.plan == "pro" or tenant.note_limit < 0


def plan_entitlements(tenant: PlanHolder) -> PlanEntitlements:
    if is_unlimited(tenant):
        return PlanEntitlements(plan="pro", note_limit=None)
    return PlanEntitlements(plan="free", note_limit=tenant.note_limit)


def free_plan_values() -> dict[str, object]:
    return {"plan": "free", "note_limit": settings.free_plan_note_limit}


def pro_plan_values() -> dict[str, object]:
    return {"plan": "pro", "note_limit": UNLIMITED_NOTES}


def check_quota(tenant: PlanHolder, current_usage: int) -> Decision:
    """Decide whether one more note fits under the tenant's plan.

    ``current_usage`` is the acting user's own note count in the tenant: the
    tenant's ``note_limit`` is applied to each user separately.
    """
    if is_unlimited(tenant):
        return ALLOW
    if current_usage < tenant.note_limit:
        return ALLOW
    return Deny(DenialReason.LIMIT_REACHED)


async def enforce_note_quota(
    tenant: PlanHolder,
    count_usage: Callable[[], Awaitable[int]],
) -> Decision:
    # Unlimited plans never pay for a count query.
    if is_unlimited(tenant):
        return ALLOW
    return check_quota(tenant, await count_usage())


@asynccontextmanager
async def quota_lock(tenant_id: UUID, user_id: UUID) -> AsyncIterator[None]:
    """Serialise count-then-create for one user when ``QUOTA_LOCK_ENABLED`` is set."""
    if not settings.quota_lock_enabled:
        yield
        return

    redis_client = redis.from_url(settings.redis_url, decode_responses=True)
    lock = redis_client.lock(
        f"notes:quota:{tenant_id}:{user_id}",
        timeout=settings.quota_lock_timeout_seconds,
        blocking_timeout=settings.quota_lock_blocking_timeout_seconds,
    )
    try:
        if not await lock.acquire():
            logger.warning("Quota lock busy for tenant=%s user=%s", tenant_id, user_id)
            raise http_error(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                code=ErrorCode.SERVICE_UNAVAILABLE,
                message="Note creation is busy for this user, try again",
            )
        try:
            yield
        finally:
            try:
                await lock.release()
            except LockError:
                logger.warning("Quota lock expired before release for tenant=%s user=%s", tenant_id, user_id)
    finally:
        await redis_client.aclose()
