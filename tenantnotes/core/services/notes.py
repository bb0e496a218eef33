from __future__ import annotations

import logging
from uuid import UUID

from tenantnotes.core.billing import enforce_note_quota, quota_lock
from tenantnotes.core.errors import NOTE_NOT_FOUND, TENANT_NOT_FOUND, denial_to_http, internal_error, not_found
from tenantnotes.core.policy import Action, Deny
from tenantnotes.core.principal import Principal
from tenantnotes.core.repositories.notes import NoteRepository
from tenantnotes.core.repositories.tenants import TenantRepository
from tenantnotes.core.services.base import UnitOfWork, guard
from tenantnotes.models.note import Note

logger = logging.getLogger(__name__)


class NoteService:
    """Notes of the acting user. The repository is bound to (tenant, owner)."""

    def __init__(
        self,
        principal: Principal,
        *,
        notes: NoteRepository,
        tenants: TenantRepository,
        unit: UnitOfWork,
    ) -> None:
        self.principal = principal
        self.notes = notes
        self.tenants = tenants
        self.unit = unit

    async def list(self, *, limit: int = 100, offset: int = 0) -> list[Note]:
        guard(self.principal, Action.NOTE_LIST)
        return await self.notes.list(limit=limit, offset=offset)

    async def create(self, *, title: str, content: str) -> Note:
        guard(self.principal, Action.NOTE_CREATE)
        tenant = await self.tenants.get(self.principal.tenant_id)
        if tenant is None:
            logger.error("Tenant %s of user %s is missing", self.principal.tenant_id, self.principal.user_id)
            raise internal_error(TENANT_NOT_FOUND)
        guard(self.principal, Action.NOTE_CREATE, resource_tenant_id=tenant.id)

        async with quota_lock(self.principal.tenant_id, self.principal.user_id):
            decision = await enforce_note_quota(tenant, self.notes.count)
            if isinstance(decision, Deny):
                logger.info(
                    "Note limit reached for user=%s tenant=%s limit=%s",
                    self.principal.user_id,
                    tenant.id,
                    tenant.note_limit,
                )
                raise denial_to_http(decision, Action.NOTE_CREATE)

            note = await self.notes.create(title=title, content=content)
            await self.unit.commit()
        return note

    async def get(self, note_id: UUID | None) -> Note:
        return await self._load(note_id, Action.NOTE_READ)

    async def update(self, note_id: UUID | None, *, title: str, content: str) -> Note:
        current = await self._load(note_id, Action.NOTE_UPDATE)
        note = await self.notes.update(current.id, title=title, content=content)
        if note is None:
            raise not_found(NOTE_NOT_FOUND)
        await self.unit.commit()
        return note

    async def delete(self, note_id: UUID | None) -> None:
        note = await self._load(note_id, Action.NOTE_DELETE)
        if not await self.notes.delete(note.id):
            raise not_found(NOTE_NOT_FOUND)
        await self.unit.commit()

    async def _load(self, note_id: UUID | None, action: Action) -> Note:
        guard(self.principal, action)
        note = None if note_id is None else await self.notes.get(note_id)
        if note is None:
            raise not_found(NOTE_NOT_FOUND)
        guard(self.principal, action, resource_tenant_id=note.tenant_id)
        # Notes are private to their author, including from admins of the tenant.
        if note.user_id != self.principal.user_id:
            raise not_found(NOTE_NOT_FOUND)
        return note
