from tenantnotes.api.routes.auth import router as auth_router
from tenantnotes.api.routes.notes import router as notes_router
from tenantnotes.api.routes.tenants import router as tenants_router
from tenantnotes.api.routes.users import router as users_router

__all__ = [
    "auth_router",
    "notes_router",
    "tenants_router",
    "users_router",
]
