from __future__ import annotations

import asyncio
import logging
from uuid import UUID

from tenantnotes.core.errors import USER_NOT_FOUND, not_found
from tenantnotes.core.policy import Action
from tenantnotes.core.principal import Principal
from tenantnotes.core.repositories.users import UserRepository
from tenantnotes.core.security.passwords import hash_password
from tenantnotes.core.services.base import UnitOfWork, guard, unique_violation_as_conflict
from tenantnotes.models.user import Role, User

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "User with this email already exists"


class UserService:
    """Tenant user management. Every operation is admin-only."""

    def __init__(self, principal: Principal, *, users: UserRepository, unit: UnitOfWork) -> None:
        self.principal = principal
        self.users = users
        self.unit = unit

    async def list(self, *, limit: int = 100, offset: int = 0) -> list[User]:
        guard(self.principal, Action.USER_LIST)
        return await self.users.list(limit=limit, offset=offset)

    async def invite(
        self,
        *,
        email: str,
        password: str,
        role: Role = "member",
        first_name: str = "",
        last_name: str = "",
    ) -> User:
        guard(self.principal, Action.USER_INVITE)
        digest = await asyncio.to_thread(hash_password, password)
        async with unique_violation_as_conflict(self.unit, DUPLICATE_EMAIL):
            user = await self.users.create(
                email=email,
                password_digest=digest,
                role=role,
                first_name=first_name,
                last_name=last_name,
            )
            await self.unit.commit()
        logger.info(
            "User %s invited to tenant=%s as %s by user=%s",
            user.id,
            self.principal.tenant_id,
            role,
            self.principal.user_id,
        )
        return user

    async def get(self, user_id: UUID | None) -> User:
        return await self._load(user_id, Action.USER_READ)

    async def update(
        self,
        user_id: UUID | None,
        *,
        email: str | None = None,
        role: Role | None = None,
        password: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        current = await self._load(user_id, Action.USER_UPDATE)

        changes: dict[str, object] = {}
        if email is not None:
            changes["email"] = email
        if role is not None:
            changes["role"] = role
        if first_name is not None:
            changes["first_name"] = first_name
        if last_name is not None:
            changes["last_name"] = last_name
        if password is not None:
            changes["password_digest"] = await asyncio.to_thread(hash_password, password)

        async with unique_violation_as_conflict(self.unit, DUPLICATE_EMAIL):
            user = await self.users.update(current.id, **changes)
            if user is None:
                raise not_found(USER_NOT_FOUND)
            await self.unit.commit()
        return user

    async def delete(self, user_id: UUID | None) -> None:
        guard(self.principal, Action.USER_DELETE, resource_owner_id=user_id)
        user = await self._load(user_id, Action.USER_DELETE)
        if not await self.users.delete(user.id):
            raise not_found(USER_NOT_FOUND)
        await self.unit.commit()
        logger.info(
            "User %s deleted from tenant=%s by user=%s",
            user_id,
            self.principal.tenant_id,
            self.principal.user_id,
        )

    async def _load(self, user_id: UUID | None, action: Action) -> User:
        guard(self.principal, action)
        user = None if user_id is None else await self.users.get(user_id)
        if user is None:
            raise not_found(USER_NOT_FOUND)
        guard(self.principal, action, user.id, user.tenant_id)
        return user
