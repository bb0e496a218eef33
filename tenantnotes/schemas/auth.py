from __future__ import annotations

from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, Field, StringConstraints

from tenantnotes.models.user import Role
from tenantnotes.schemas.common import SLUG_PATTERN, EmailAddress, Password, PersonName
from tenantnotes.schemas.tenant import TenantResponse


class SignupRequest(BaseModel):
    organization_name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
    organization_slug: str = Field(min_length=1, max_length=63, pattern=SLUG_PATTERN)
    admin_email: EmailAddress
    admin_password: Password
    admin_first_name: PersonName = ""
    admin_last_name: PersonName = ""


class LoginRequest(BaseModel):
    email: Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, min_length=1, max_length=255)]
    password: str = Field(min_length=1, max_length=128)


class SessionUser(BaseModel):
    id: UUID
    email: str
    first_name: str
    last_name: str
    role: Role
    tenant_id: UUID
    tenant_slug: str


class LoginResponse(BaseModel):
    token: str
    user: SessionUser


class SignupResponse(BaseModel):
    message: str
    token: str
    user: SessionUser
    organization: TenantResponse
