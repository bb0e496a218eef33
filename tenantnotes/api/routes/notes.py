from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from tenantnotes.api.dependencies import get_note_service, parse_resource_id
from tenantnotes.core.services import NoteService
from tenantnotes.schemas.common import MessageResponse
from tenantnotes.schemas.note import NoteResponse, NoteWriteRequest

router = APIRouter(prefix="/notes", tags=["notes"])

LIMIT_REACHED_RESPONSE = {
    "description": (
        "Note limit reached on the free plan. The body is "
        "`{\"detail\": {\"code\": \"limit_reached\", \"message\": ..., \"limitReached\": true}}`; "
        "clients should read `detail.limitReached`."
    )
}


@router.get("", response_model=list[NoteResponse])
async def list_notes(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    notes: NoteService = Depends(get_note_service),
) -> list[NoteResponse]:
    return [NoteResponse.model_validate(note) for note in await notes.list(limit=limit, offset=offset)]


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_403_FORBIDDEN: LIMIT_REACHED_RESPONSE},
)
async def create_note(
    payload: NoteWriteRequest,
    notes: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await notes.create(title=payload.title, content=payload.content)
    return NoteResponse.model_validate(note)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: str,
    notes: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await notes.get(parse_resource_id(note_id))
    return NoteResponse.model_validate(note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: str,
    payload: NoteWriteRequest,
    notes: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await notes.update(
        parse_resource_id(note_id),
        title=payload.title,
        content=payload.content,
    )
    return NoteResponse.model_validate(note)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: str,
    notes: NoteService = Depends(get_note_service),
) -> MessageResponse:
    await notes.delete(parse_resource_id(note_id))
    return MessageResponse(message="Note deleted successfully")
