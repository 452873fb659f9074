"""Personal notes. Every note is private to the user who wrote it."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from knowledge.access import authorize_note_access
from knowledge.app.auth import require_reader
from knowledge.app.models import NoteRequest, DeleteResponse
from knowledge.db.notes import (
    get_notes_for_user,
    get_note_by_id,
    create_note,
    update_note,
    delete_note,
)
from knowledge.models import Note, User

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[Note])
def read_notes(user: User = Depends(require_reader)) -> list[Note]:
    """Get the caller's notes, most recently updated first."""
    return get_notes_for_user(user.id)


@router.post("", status_code=201, response_model=Note)
def create_note_endpoint(
    request: NoteRequest,
    user: User = Depends(require_reader),
) -> Note:
    try:
        return create_note(user.id, request.title, request.content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{note_id}", response_model=Note)
def update_note_endpoint(
    note_id: UUID,
    request: NoteRequest,
    user: User = Depends(require_reader),
) -> Note:
    authorize_note_access(_get_note(note_id), user)
    try:
        note = update_note(note_id, request.title, request.content)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note


@router.delete("/{note_id}", response_model=DeleteResponse)
def delete_note_endpoint(
    note_id: UUID,
    user: User = Depends(require_reader),
) -> DeleteResponse:
    authorize_note_access(_get_note(note_id), user)
    if not delete_note(note_id):
        raise HTTPException(status_code=404, detail="Note not found")
    return DeleteResponse()


def _get_note(note_id: UUID) -> Note:
    note = get_note_by_id(note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found")
    return note
