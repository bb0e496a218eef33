from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, StringConstraints

from tenantnotes.models.note import NOTE_CONTENT_MAX_LENGTH, NOTE_TITLE_MAX_LENGTH

NoteTitle = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=NOTE_TITLE_MAX_LENGTH),
]
NoteContent = Annotated[str, StringConstraints(min_length=1, max_length=NOTE_CONTENT_MAX_LENGTH)]


class NoteWriteRequest(BaseModel):
    title: NoteTitle
    content: NoteContent


class NoteResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    user_id: UUID
    tenant_id: UUID
    created_at: datetime
    updated_at: datetime
