from __future__ import annotations

import logging
from dataclasses import dataclass

from tenantnotes.core.billing import PlanEntitlements, is_unlimited, plan_entitlements, pro_plan_values
from tenantnotes.core.errors import TENANT_NOT_FOUND, not_found
from tenantnotes.core.policy import Action
from tenantnotes.core.principal import Principal
from tenantnotes.core.repositories.notes import NoteRepository
from tenantnotes.core.repositories.tenants import TenantRepository
from tenantnotes.core.services.base import UnitOfWork, guard
from tenantnotes.models.tenant import Tenant

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TenantOverview:
    tenant: Tenant
    entitlements: PlanEntitlements
    notes_used: int | None


class TenantService:
    def __init__(
        self,
        principal: Principal,
        *,
        tenants: TenantRepository,
        notes: NoteRepository,
        unit: UnitOfWork,
    ) -> None:
        self.principal = principal
        self.tenants = tenants
        self.notes = notes
        self.unit = unit

    async def get(self, slug: str) -> TenantOverview:
        tenant = await self._load(slug, Action.TENANT_READ)
        # Usage is per user, so only the caller's own count is reported.
        notes_used = None if is_unlimited(tenant) else await self.notes.count()
        return TenantOverview(
            tenant=tenant,
            entitlements=plan_entitlements(tenant),
            notes_used=notes_used,
        )

    async def upgrade(self, slug: str) -> Tenant:
        tenant = await self._load(slug, Action.TENANT_UPGRADE)
        if tenant.plan == "pro":
            return tenant

        tenant = await self.tenants.set_plan(tenant, **pro_plan_values())
        await self.unit.commit()
        logger.info("Tenant %s (%s) upgraded to pro by user=%s", tenant.id, tenant.slug, self.principal.user_id)
        return tenant

    async def _load(self, slug: str, action: Action) -> Tenant:
        guard(self.principal, action, resource_tenant_slug=slug)
        tenant = await self.tenants.get_by_slug(slug)
        if tenant is None:
            raise not_found(TENANT_NOT_FOUND)
        guard(self.principal, action, resource_tenant_id=tenant.id, resource_tenant_slug=tenant.slug)
        return tenant
