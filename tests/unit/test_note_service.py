"""
Unit tests for the note service and timestamp parsing.
Service tests run against a real SQLite store; timestamp tests are pure.
"""

from __future__ import annotations

import math

import pytest

from note_api.api.api_config import ApiConfig
from note_api.api.db_access import DatabaseClient
from note_api.api.error_handlers import NotFoundError, ValidationError
from note_api.api.services.account_service import AccountService
from note_api.api.services.note_service import (
    TIMESTAMP_ERROR_MESSAGE,
    NoteService,
    parse_unix_timestamp,
)


@pytest.fixture
def accounts(api_config: ApiConfig, sqlite_store: DatabaseClient) -> AccountService:
    return AccountService(config=api_config, db=sqlite_store)


@pytest.fixture
def service(api_config: ApiConfig, sqlite_store: DatabaseClient) -> NoteService:
    return NoteService(config=api_config, db=sqlite_store)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (1700000000, 1700000000),
        ("1700000000", 1700000000),
        (" 1700000000 ", 1700000000),
        (1700000000.0, 1700000000),
        ("1700000.55", 1700000.55),
        (1000000000, 1000000000),
        (9999999999, 9999999999),
        ("0x6553F100", 1700000000),
        ("0o14524770400", 1700000000),
        ("-999999999", -999999999),
        ("0.00001234", 0.00001234),
        ("1.23456e-7", 1.23456e-7),
    ],
)
def test_parse_unix_timestamp_accepts_ten_character_values(raw: object, expected: float) -> None:
    assert parse_unix_timestamp(raw) == expected


def test_parse_unix_timestamp_returns_int_for_integral_values() -> None:
    assert isinstance(parse_unix_timestamp("1700000000.0"), int)


@pytest.mark.parametrize(
    "raw",
    [
        170000000,
        17000000000,
        "abc",
        "",
        "1_700_000_000",
        "0.000012345",
        "1.2345678e-7",
        "-0x6553F100",
        "\uff11\uff17\uff10\uff10\uff10\uff10\uff10\uff10\uff10\uff10",
        10**400,
        1700000000.5,
        math.nan,
        math.inf,
        True,
        None,
        [1700000000],
    ],
)
def test_parse_unix_timestamp_rejects_other_values(raw: object) -> None:
    with pytest.raises(ValidationError, match=TIMESTAMP_ERROR_MESSAGE):
        parse_unix_timestamp(raw)


def test_add_note_returns_stored_fields(service: NoteService, accounts: AccountService) -> None:
    owner = accounts.register(name="Ada", email="ada@x.com", password="pw")

    note = service.add_note(
        title="T", body="B", datetime="1700000000", user_id=owner["id"]
    )

    assert note == {
        "id": 1,
        "title": "T",
        "body": "B",
        "image": "",
        "datetime": 1700000000,
        "color": "",
        "user_id": owner["id"],
    }


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"body": None},
        {"datetime": None},
        {"datetime": 0},
        {"user_id": 0},
        {"user_id": None},
    ],
)
def test_add_note_requires_fields(service: NoteService, overrides: dict[str, object]) -> None:
    values: dict[str, object] = {"title": "T", "body": "B", "datetime": 1700000000, "user_id": 1}
    values.update(overrides)

    with pytest.raises(ValidationError, match="Title, body, datetime, and userId are required"):
        service.add_note(**values)  # type: ignore[arg-type]


def test_add_note_rejects_bad_timestamp(service: NoteService) -> None:
    with pytest.raises(ValidationError, match=TIMESTAMP_ERROR_MESSAGE):
        service.add_note(title="T", body="B", datetime=170000000, user_id=1)


def test_add_note_does_not_require_owner_to_exist(service: NoteService) -> None:
    note = service.add_note(title="T", body="B", datetime=1700000000, user_id=404)
    assert note["user_id"] == 404


def test_list_notes_orders_newest_first_without_owner(service: NoteService) -> None:
    service.add_note(title="old", body="B", datetime=1600000000, user_id=1)
    service.add_note(title="new", body="B", datetime=1700000000, user_id=2)
    service.add_note(title="mid", body="B", datetime=1650000000, user_id=1)

    notes = service.list_notes()

    assert [note["title"] for note in notes] == ["new", "mid", "old"]
    assert all("userId" not in note and "user_id" not in note for note in notes)


def test_list_notes_for_account_filters_by_owner(
    service: NoteService, accounts: AccountService
) -> None:
    ada = accounts.register(name="Ada", email="ada@x.com", password="pw")
    bob = accounts.register(name="Bob", email="bob@x.com", password="pw")
    service.add_note(title="ada-1", body="B", datetime=1600000000, user_id=ada["id"])
    service.add_note(title="bob-1", body="B", datetime=1700000000, user_id=bob["id"])
    service.add_note(title="ada-2", body="B", datetime=1650000000, user_id=ada["id"])

    result = service.list_notes_for_account(user_id=ada["id"])

    assert result["pinned_note_id"] is None
    assert [note["title"] for note in result["notes"]] == ["ada-2", "ada-1"]


def test_list_notes_for_account_with_no_notes(service: NoteService, accounts: AccountService) -> None:
    ada = accounts.register(name="Ada", email="ada@x.com", password="pw")
    accounts.pin_note(account_id=ada["id"], pinned_note_id=5)

    assert service.list_notes_for_account(user_id=ada["id"]) == {"pinned_note_id": 5, "notes": []}


def test_list_notes_for_unknown_account_is_not_found(service: NoteService) -> None:
    with pytest.raises(NotFoundError, match="User with ID 3 not found"):
        service.list_notes_for_account(user_id=3)


def test_update_note_rewrites_fields_but_keeps_owner(
    service: NoteService, accounts: AccountService
) -> None:
    ada = accounts.register(name="Ada", email="ada@x.com", password="pw")
    created = service.add_note(
        title="T", body="B", datetime=1700000000, user_id=ada["id"], image="i.png", color="red"
    )

    updated = service.update_note(
        note_id=created["id"], title="T2", body="B2", datetime=1700000100
    )

    assert updated == {
        "id": created["id"],
        "title": "T2",
        "body": "B2",
        "image": "",
        "datetime": 1700000100,
        "color": "",
    }
    owned = service.list_notes_for_account(user_id=ada["id"])["notes"]
    assert [note["title"] for note in owned] == ["T2"]


def test_update_note_validation_and_not_found(service: NoteService) -> None:
    with pytest.raises(ValidationError, match="Title, body, and datetime are required"):
        service.update_note(note_id=1, title="T", body="", datetime=1700000000)
    with pytest.raises(ValidationError, match=TIMESTAMP_ERROR_MESSAGE):
        service.update_note(note_id=1, title="T", body="B", datetime="17000000000")
    with pytest.raises(NotFoundError, match="Note with ID 1 not found"):
        service.update_note(note_id=1, title="T", body="B", datetime=1700000000)


def test_delete_note(service: NoteService) -> None:
    note = service.add_note(title="T", body="B", datetime=1700000000, user_id=1)

    service.delete_note(note_id=note["id"])

    assert service.list_notes() == []
    with pytest.raises(NotFoundError):
        service.delete_note(note_id=note["id"])
