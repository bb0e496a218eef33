from __future__ import annotations

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from tenantnotes.core.auth import require_principal
from tenantnotes.core.db import get_db_session
from tenantnotes.core.principal import Principal
from tenantnotes.core.repositories import NoteRepository, TenantRepository, UserDirectory, UserRepository
from tenantnotes.core.security.dependencies import get_token_service
from tenantnotes.core.security.tokens import TokenService
from tenantnotes.core.services import AccountService, NoteService, TenantService, UserService


def get_account_service(
    session: AsyncSession = Depends(get_db_session),
    tokens: TokenService = Depends(get_token_service),
) -> AccountService:
    return AccountService(
        tenants=TenantRepository(session),
        directory=UserDirectory(session),
        unit=session,
        tokens=tokens,
    )


def get_note_service(
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_db_session),
) -> NoteService:
    return NoteService(
        principal,
        notes=NoteRepository(session, principal.tenant_id, principal.user_id),
        tenants=TenantRepository(session),
        unit=session,
    )


def get_user_service(
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_db_session),
) -> UserService:
    return UserService(
        principal,
        users=UserRepository(session, principal.tenant_id),
        unit=session,
    )


def get_tenant_service(
    principal: Principal = Depends(require_principal),
    session: AsyncSession = Depends(get_db_session),
) -> TenantService:
    return TenantService(
        principal,
        tenants=TenantRepository(session),
        notes=NoteRepository(session, principal.tenant_id, principal.user_id),
        unit=session,
    )


def parse_resource_id(raw: str) -> UUID | None:
    # Malformed ids resolve to None; services report them as not found once
    # the role check has run, with the same 404 as an unknown id.
    try:
        return UUID(raw)
    except ValueError:
        return None
