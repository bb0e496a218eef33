from __future__ import annotations

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from tenantnotes.core.repositories.base import ScopedRepository, TenantContextMissingError
from tenantnotes.models.note import Note


class NoteRepository(ScopedRepository[Note]):
    """Notes visible to one user: every query filters on tenant *and* owner."""

    def __init__(self, session: AsyncSession, tenant_id: UUID | None, owner_id: UUID | None) -> None:
        super().__init__(session=session, model=Note, tenant_id=tenant_id)
        if owner_id is None:
            raise TenantContextMissingError("NoteRepository requires an owner id to scope its queries")
        self.owner_id = owner_id

    def _scope(self, stmt: Select) -> Select:
        return super()._scope(stmt).where(Note.user_id == self.owner_id)

    def _scoped_delete(self):  # noqa: ANN202
        return super()._scoped_delete().where(Note.user_id == self.owner_id)

    def _create_values(self, values: dict[str, object]) -> dict[str, object]:
        payload = super()._create_values(values)
        payload["user_id"] = self.owner_id
        return payload
