# This file defines request and response schemas for note endpoints.
# It exists so note contracts are explicit while the wire keeps camelCase names like userId.
# The timestamp is accepted loosely here and checked by the note service.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from note_api.api.schemas.common import EnvelopeFields

TimestampInput = int | float | str | None


class AddNoteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    body: str | None = None
    image: str | None = None
    datetime: TimestampInput = None
    color: str | None = None
    user_id: int | None = Field(default=None, alias="userId")


class UpdateNoteRequest(BaseModel):
    title: str | None = None
    body: str | None = None
    image: str | None = None
    datetime: TimestampInput = None
    color: str | None = None


class NoteV1(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    body: str
    image: str | None = None
    datetime: int | float
    color: str | None = None


class CreatedNoteV1(NoteV1):
    user_id: int | None = Field(default=None, alias="userId")


class NoteResponseV1(EnvelopeFields):
    message: str
    note: NoteV1


class CreatedNoteResponseV1(EnvelopeFields):
    message: str
    note: CreatedNoteV1


class NoteListResponseV1(EnvelopeFields):
    notes: list[NoteV1]


class AccountNotesResponseV1(EnvelopeFields):
    model_config = ConfigDict(populate_by_name=True)

    pinned_note_id: int | None = Field(default=None, alias="pinnedNoteId")
    notes: list[NoteV1]
