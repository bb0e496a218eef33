"""Credential verification, login and organization signup.

These are the only operations that run without a principal, so they use the
unscoped ``UserDirectory`` and look tenants up by id or slug directly.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from tenantnotes.core.billing import free_plan_values
from tenantnotes.core.config import settings
from tenantnotes.core.errors import TENANT_NOT_FOUND, conflict, internal_error, unauthorized
from tenantnotes.core.principal import Principal
from tenantnotes.core.repositories.tenants import TenantRepository
from tenantnotes.core.repositories.users import UserDirectory
from tenantnotes.core.security.passwords import hash_password, verify_password
from tenantnotes.core.security.tokens import TokenService
from tenantnotes.core.services.base import UnitOfWork, unique_violation_as_conflict
from tenantnotes.models.tenant import Tenant
from tenantnotes.models.user import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(slots=True)
class SessionGrant:
    token: str
    user: User
    tenant: Tenant


def principal_for(user: User, tenant: Tenant) -> Principal:
    return Principal(
        user_id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=tenant.id,
        tenant_slug=tenant.slug,
    )


class AccountService:
    def __init__(
        self,
        *,
        tenants: TenantRepository,
        directory: UserDirectory,
        unit: UnitOfWork,
        tokens: TokenService,
    ) -> None:
        self.tenants = tenants
        self.directory = directory
        self.unit = unit
        self.tokens = tokens

    async def verify_credentials(self, email: str, password: str) -> tuple[User, Tenant]:
        """Resolve an email/password pair to the user and their tenant.

        Unknown emails and wrong passwords fail identically.
        """
        user = await self.directory.get_by_email(email)
        if user is None or not await asyncio.to_thread(verify_password, password, user.password_digest):
            logger.info("Failed login attempt")
            raise unauthorized(INVALID_CREDENTIALS)

        tenant = await self.tenants.get(user.tenant_id)
        if tenant is None:
            logger.error("User %s references missing tenant %s", user.id, user.tenant_id)
            raise internal_error(TENANT_NOT_FOUND)
        return user, tenant

    async def login(self, email: str, password: str) -> SessionGrant:
        user, tenant = await self.verify_credentials(email, password)
        token = self.tokens.issue(principal_for(user, tenant), ttl_seconds=settings.auth_token_ttl_seconds)
        logger.info("User %s logged in to tenant=%s", user.id, tenant.id)
        return SessionGrant(token=token, user=user, tenant=tenant)

    async def signup(
        self,
        *,
        organization_name: str,
        organization_slug: str,
        admin_email: str,
        admin_password: str,
        admin_first_name: str = "",
        admin_last_name: str = "",
    ) -> SessionGrant:
        if await self.tenants.get_by_slug(organization_slug) is not None:
            raise conflict("Organization slug is already taken")
        if await self.directory.get_by_email(admin_email) is not None:
            raise conflict("Email is already registered")

        digest = await asyncio.to_thread(hash_password, admin_password)
        async with unique_violation_as_conflict(self.unit, "Organization slug or email is already taken"):
            tenant = await self.tenants.create(
                name=organization_name,
                slug=organization_slug,
                **free_plan_values(),
            )
            user = await self.directory.create(
                email=admin_email,
                password_digest=digest,
                first_name=admin_first_name,
                last_name=admin_last_name,
                role="admin",
                tenant_id=tenant.id,
            )
            await self.unit.commit()

        token = self.tokens.issue(principal_for(user, tenant), ttl_seconds=settings.signup_token_ttl_seconds)
        logger.info("Organization %s (%s) signed up with admin user=%s", tenant.id, tenant.slug, user.id)
        return SessionGrant(token=token, user=user, tenant=tenant)
