from __future__ import annotations

from fastapi import APIRouter, Depends

from tenantnotes.api.dependencies import get_tenant_service
from tenantnotes.core.services import TenantService
from tenantnotes.schemas.tenant import (
    TenantDetailResponse,
    TenantResponse,
    TenantUpgradeResponse,
    TenantUsage,
)

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("/{slug}", response_model=TenantDetailResponse)
async def get_tenant(
    slug: str,
    tenants: TenantService = Depends(get_tenant_service),
) -> TenantDetailResponse:
    overview = await tenants.get(slug)
    return TenantDetailResponse(
        tenant=TenantResponse.model_validate(overview.tenant),
        usage=TenantUsage(
            unlimited=overview.entitlements.unlimited,
            note_limit=overview.entitlements.note_limit,
            notes_used=overview.notes_used,
        ),
    )


@router.post("/{slug}/upgrade", response_model=TenantUpgradeResponse)
async def upgrade_tenant(
    slug: str,
    tenants: TenantService = Depends(get_tenant_service),
) -> TenantUpgradeResponse:
    tenant = await tenants.upgrade(slug)
    return TenantUpgradeResponse(
        message="Tenant upgraded to Pro successfully",
        tenant=TenantResponse.model_validate(tenant),
    )
