from tenantnotes.core.services.accounts import AccountService, SessionGrant, principal_for
from tenantnotes.core.services.notes import NoteService
from tenantnotes.core.services.tenants import TenantOverview, TenantService
from tenantnotes.core.services.users import UserService

__all__ = [
    "AccountService",
    "SessionGrant",
    "principal_for",
    "NoteService",
    "TenantOverview",
    "TenantService",
    "UserService",
]
