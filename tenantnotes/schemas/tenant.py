from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class TenantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    plan: str
    note_limit: int
    created_at: datetime
    updated_at: datetime


class TenantUsage(BaseModel):
    unlimited: bool
    note_limit: int | None
    notes_used: int | None


class TenantDetailResponse(BaseModel):
    tenant: TenantResponse
    usage: TenantUsage


class TenantUpgradeResponse(BaseModel):
    message: str
    tenant: TenantResponse
