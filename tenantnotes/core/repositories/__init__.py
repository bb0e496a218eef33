from tenantnotes.core.repositories.base import ScopedRepository, TenantContextMissingError
from tenantnotes.core.repositories.notes import NoteRepository
from tenantnotes.core.repositories.tenants import TenantRepository
from tenantnotes.core.repositories.users import UserDirectory, UserRepository

__all__ = [
    "TenantContextMissingError",
    "ScopedRepository",
    "NoteRepository",
    "TenantRepository",
    "UserDirectory",
    "UserRepository",
]
