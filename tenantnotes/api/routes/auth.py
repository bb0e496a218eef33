from __future__ import annotations

from fastapi import APIRouter, Depends, status

from tenantnotes.api.dependencies import get_account_service
from tenantnotes.core.services import AccountService, SessionGrant
from tenantnotes.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SessionUser,
    SignupRequest,
    SignupResponse,
)
from tenantnotes.schemas.tenant import TenantResponse

router = APIRouter(prefix="/auth", tags=["auth"])


def _session_user(grant: SessionGrant) -> SessionUser:
    return SessionUser(
        id=grant.user.id,
        email=grant.user.email,
        first_name=grant.user.first_name or "",
        last_name=grant.user.last_name or "",
        role=grant.user.role,
        tenant_id=grant.tenant.id,
        tenant_slug=grant.tenant.slug,
    )


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    accounts: AccountService = Depends(get_account_service),
) -> SignupResponse:
    grant = await accounts.signup(
        organization_name=payload.organization_name,
        organization_slug=payload.organization_slug,
        admin_email=payload.admin_email,
        admin_password=payload.admin_password,
        admin_first_name=payload.admin_first_name,
        admin_last_name=payload.admin_last_name,
    )
    return SignupResponse(
        message="Organization registered successfully",
        token=grant.token,
        user=_session_user(grant),
        organization=TenantResponse.model_validate(grant.tenant),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
) -> LoginResponse:
    grant = await accounts.login(payload.email, payload.password)
    return LoginResponse(token=grant.token, user=_session_user(grant))
