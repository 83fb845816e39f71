# This file defines request and response schemas for account endpoints.
# Request fields are all optional so missing values reach the service and fail with its own messages.
# Response models never carry the password column.

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from note_api.api.schemas.common import EnvelopeFields


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    avatar: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UpdateAccountRequest(BaseModel):
    name: str | None = None
    avatar: str | None = None


class DeleteAccountRequest(BaseModel):
    email: str | None = None


class PinNoteRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    pinned_note_id: int | None = Field(default=None, alias="pinnedNoteId")


class AccountV1(BaseModel):
    id: int
    name: str | None = None
    email: str
    avatar: str | None = None


class AccountResponseV1(EnvelopeFields):
    message: str
    user: AccountV1


class AccountListResponseV1(EnvelopeFields):
    accounts: list[AccountV1]
