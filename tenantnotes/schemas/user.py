from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from tenantnotes.models.user import Role
from tenantnotes.schemas.common import EmailAddress, Password, PersonName


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str = ""
    last_name: str = ""
    role: Role
    tenant_id: UUID
    created_at: datetime | None = None


class UserInviteRequest(BaseModel):
    email: EmailAddress
    password: Password
    role: Role = "member"
    first_name: PersonName = ""
    last_name: PersonName = ""


class UserUpdateRequest(BaseModel):
    email: EmailAddress | None = None
    role: Role | None = None
    password: Password | None = None
    first_name: PersonName | None = None
    last_name: PersonName | None = None
