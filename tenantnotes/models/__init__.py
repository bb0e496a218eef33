from tenantnotes.models.base import Base, TenantScopedBase, TimestampedBase
from tenantnotes.models.note import Note
from tenantnotes.models.tenant import Tenant
from tenantnotes.models.user import User

__all__ = [
    "Base",
    "TimestampedBase",
    "TenantScopedBase",
    "Tenant",
    "User",
    "Note",
]
