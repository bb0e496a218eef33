from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tenantnotes.core.repositories.base import ScopedRepository
from tenantnotes.models.user import User


class UserRepository(ScopedRepository[User]):
    def __init__(self, session: AsyncSession, tenant_id: UUID | None) -> None:
        super().__init__(session=session, model=User, tenant_id=tenant_id)


class UserDirectory:
    """Unscoped user lookups, used only before a principal exists (login, signup)."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        return await self.session.scalar(select(User).where(User.email == email.strip().lower()))

    async def create(self, **values: object) -> User:
        user = User(**values)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
