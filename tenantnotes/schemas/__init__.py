from tenantnotes.schemas.auth import (
    LoginRequest,
    LoginResponse,
    SessionUser,
    SignupRequest,
    SignupResponse,
)
from tenantnotes.schemas.common import MessageResponse
from tenantnotes.schemas.note import NoteResponse, NoteWriteRequest
from tenantnotes.schemas.tenant import (
    TenantDetailResponse,
    TenantResponse,
    TenantUpgradeResponse,
    TenantUsage,
)
from tenantnotes.schemas.user import UserInviteRequest, UserResponse, UserUpdateRequest

__all__ = [
    "SignupRequest",
    "SignupResponse",
    "LoginRequest",
    "LoginResponse",
    "SessionUser",
    "MessageResponse",
    "NoteWriteRequest",
    "NoteResponse",
    "TenantResponse",
    "TenantUsage",
    "TenantDetailResponse",
    "TenantUpgradeResponse",
    "UserInviteRequest",
    "UserUpdateRequest",
    "UserResponse",
]
