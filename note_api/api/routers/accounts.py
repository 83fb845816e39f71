# This file defines account endpoints: registration, login, listing, updates, deletion, and pinning.
# It exists so the account service is reachable over HTTP at the routes existing clients already call.
# Routers only shape envelopes; validation and store access live in the account service.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from note_api.api.dependencies import get_account_service
from note_api.api.response_envelope import build_envelope
from note_api.api.schemas.account_schemas import (
    AccountListResponseV1,
    AccountResponseV1,
    DeleteAccountRequest,
    LoginRequest,
    PinNoteRequest,
    RegisterRequest,
    UpdateAccountRequest,
)
from note_api.api.schemas.common import ErrorResponse, MessageResponse
from note_api.api.services.account_service import AccountService

router = APIRouter(
    tags=["accounts"],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]


@router.post("/register", response_model=AccountResponseV1)
def register(
    request: Request,
    payload: RegisterRequest,
    service: AccountServiceDep,
) -> dict[str, object]:
    account = service.register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        avatar=payload.avatar,
    )
    return build_envelope(
        request_id=request.state.request_id,
        message="Registration successful",
        user=account,
    )


@router.post("/login", response_model=AccountResponseV1)
def login(
    request: Request,
    payload: LoginRequest,
    service: AccountServiceDep,
) -> dict[str, object]:
    account = service.login(email=payload.email, password=payload.password)
    return build_envelope(
        request_id=request.state.request_id,
        message=f"Login successful for {account['name']} ({account['email']})",
        user=account,
    )


@router.get("/accounts", response_model=AccountListResponseV1)
def list_accounts(request: Request, service: AccountServiceDep) -> dict[str, object]:
    return build_envelope(
        request_id=request.state.request_id,
        accounts=service.list_accounts(),
    )


@router.put("/update-user/{account_id}", response_model=MessageResponse)
def update_account(
    request: Request,
    account_id: int,
    payload: UpdateAccountRequest,
    service: AccountServiceDep,
) -> dict[str, object]:
    service.update_account(account_id=account_id, name=payload.name, avatar=payload.avatar)
    return build_envelope(
        request_id=request.state.request_id,
        message=f"User with ID {account_id} updated successfully",
    )


@router.delete("/account", response_model=MessageResponse)
def delete_account(
    request: Request,
    payload: DeleteAccountRequest,
    service: AccountServiceDep,
) -> dict[str, object]:
    service.delete_account(email=payload.email)
    return build_envelope(
        request_id=request.state.request_id,
        message=f'Account with email "{payload.email}" deleted successfully',
    )


@router.put("/pin-note/{user_id}", response_model=MessageResponse)
def pin_note(
    request: Request,
    user_id: int,
    payload: PinNoteRequest,
    service: AccountServiceDep,
) -> dict[str, object]:
    service.pin_note(account_id=user_id, pinned_note_id=payload.pinned_note_id)
    return build_envelope(
        request_id=request.state.request_id,
        message="Pinned note updated successfully",
    )
