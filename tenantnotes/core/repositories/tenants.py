from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantnotes.models.tenant import Tenant


class TenantRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, tenant_id: UUID) -> Tenant | None:
        return await self.session.scalar(select(Tenant).where(Tenant.id == tenant_id))

    async def get_by_slug(self, slug: str) -> Tenant | None:
        return await self.session.scalar(select(Tenant).where(Tenant.slug == slug))

    async def count(self) -> int:
        return int(await self.session.scalar(select(func.count(Tenant.id))) or 0)

    async def create(self, **values: object) -> Tenant:
        tenant = Tenant(**values)
        self.session.add(tenant)
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant

    async def set_plan(self, tenant: Tenant, *, plan: str, note_limit: int) -> Tenant:
        tenant.plan = plan
        tenant.note_limit = note_limit
        await self.session.flush()
        await self.session.refresh(tenant)
        return tenant
