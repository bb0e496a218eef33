from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from tenantnotes.models.user import Role

ROLES: frozenset[str] = frozenset({"admin", "member"})


@dataclass(frozen=True, slots=True)
class Principal:
    user_id: UUID
    email: str
    role: Role
    tenant_id: UUID
    tenant_slug: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
