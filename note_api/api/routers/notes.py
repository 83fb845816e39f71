# This file defines note endpoints: creation, global and per-account listing, updates, and deletion.
# It exists so the note service is reachable over HTTP at the routes existing clients already call.
# Per-account listings also report the account's pinned note id exactly as stored.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from note_api.api.dependencies import get_note_service
from note_api.api.response_envelope import build_envelope
from note_api.api.schemas.common import ErrorResponse, MessageResponse
from note_api.api.schemas.note_schemas import (
    AccountNotesResponseV1,
    AddNoteRequest,
    CreatedNoteResponseV1,
    NoteListResponseV1,
    NoteResponseV1,
    UpdateNoteRequest,
)
from note_api.api.services.note_service import NoteService

router = APIRouter(
    tags=["notes"],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
NoteServiceDep = Annotated[NoteService, Depends(get_note_service)]


@router.post("/add-note", response_model=CreatedNoteResponseV1)
def add_note(
    request: Request,
    payload: AddNoteRequest,
    service: NoteServiceDep,
) -> dict[str, object]:
    note = service.add_note(
        title=payload.title,
        body=payload.body,
        image=payload.image,
        datetime=payload.datetime,
        color=payload.color,
        user_id=payload.user_id,
    )
    return build_envelope(
        request_id=request.state.request_id,
        message="Note added successfully",
        note=note,
    )


@router.get("/get-notes", response_model=NoteListResponseV1)
def list_notes(request: Request, service: NoteServiceDep) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id,
        notes=service.list_notes(),
    )


@router.get("/get-notes/{user_id}", response_model=AccountNotesResponseV1)
def list_notes_for_account(
    request: Request,
    user_id: int,
    service: NoteServiceDep,
) -> dict[str, object]:
    result = service.list_notes_for_account(user_id=user_id)
    return build_envelope(request_id=request.state.request_id, **result)


@router.put("/update-note/{note_id}", response_model=NoteResponseV1)
def update_note(
    request: Request,
    note_id: int,
    payload: UpdateNoteRequest,
    service: NoteServiceDep,
) -> dict[str, object]:
    note = service.update_note(
        note_id=note_id,
        title=payload.title,
        body=payload.body,
        image=payload.image,
        datetime=payload.datetime,
        color=payload.color,
    )
    return build_envelope(
        request_id=request.state.request_id,
        message=f"Note with ID {note_id} updated successfully",
        note=note,
    )


@router.delete("/delete-note/{note_id}", response_model=MessageResponse)
def delete_note(
    request: Request,
    note_id: int,
    service: NoteServiceDep,
) -> dict[str, object]:
    service.delete_note(note_id=note_id)
    return build_envelope(
        request_id=request.state.request_id,
        message=f"Note with ID {note_id} deleted successfully",
    )
