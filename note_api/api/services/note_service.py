# This file implements note creation, listing, updates, and deletion.
# It exists so routers can expose note operations without embedding SQL or validation rules.
# Listings are ordered newest first by the note's own timestamp, not by insertion order.
# Owner and pin references are unchecked integers; nothing here enforces that they resolve.

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import Any

from note_api.api.api_config import ApiConfig
from note_api.api.db_access import DatabaseClient
from note_api.api.error_handlers import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

TIMESTAMP_ERROR_MESSAGE = "datetime must be a 10-digit Unix timestamp in seconds"
TIMESTAMP_TEXT_LENGTH = 10
RADIX_PREFIXES = ("0x", "0o", "0b")

NOTE_PUBLIC_COLUMNS = "id, title, body, image, datetime, color"


def _number_text(number: int | float) -> str:
    """Render a number the way ECMAScript ``Number.prototype.toString`` does.

    Plain decimals are used from 1e-7 up to 1e21; outside that range the text is
    ``d.ddde+N`` with an unpadded exponent.
    """

    if number == 0:
        return "0"
    sign = "-" if number < 0 else ""
    shortest = Decimal(repr(abs(float(number)))).normalize().as_tuple()
    digits = "".join(str(digit) for digit in shortest.digits)
    k = len(digits)
    n = shortest.exponent + k

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        exponent = n - 1
        body = f"{mantissa}e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    return sign + body


def parse_unix_timestamp(value: Any) -> int | float:
    """Convert a loosely typed timestamp to a number whose text form has 10 characters.

    Strings are stripped and read as ASCII decimal literals or unsigned ``0x``/``0o``/``0b``
    integers. The length is measured on the shortest round-trip text with no trailing
    ``.0``, so ``"1700000000"``, ``"0x6553F100"`` and ``1700000000.0`` pass while
    ``170000000`` and ``17000000000`` do not. Integral values come back as ``int``.
    """

    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(TIMESTAMP_ERROR_MESSAGE)

    number: int | float
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate or not candidate.isascii() or "_" in candidate:
            raise ValidationError(TIMESTAMP_ERROR_MESSAGE)
        try:
            if candidate[:2].lower() in RADIX_PREFIXES:
                number = int(candidate, 0)
            else:
                number = float(candidate)
        except ValueError:
            raise ValidationError(TIMESTAMP_ERROR_MESSAGE) from None
    else:
        number = value

    try:
        as_float = float(number)
    except OverflowError:
        raise ValidationError(TIMESTAMP_ERROR_MESSAGE) from None
    if not math.isfinite(as_float):
        raise ValidationError(TIMESTAMP_ERROR_MESSAGE)
    if isinstance(number, float) and number.is_integer():
        number = int(number)

    if len(_number_text(number)) != TIMESTAMP_TEXT_LENGTH:
        raise ValidationError(TIMESTAMP_ERROR_MESSAGE)
    return number


class NoteService:
    """Validation and persistence for notes."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.notes_table = self.config.notes_table_name
        self.users_table = self.config.users_table_name

    def add_note(
        self,
        *,
        title: str | None,
        body: str | None,
        datetime: Any,
        user_id: int | None,
        image: str | None = None,
        color: str | None = None,
    ) -> dict[str, Any]:
        if not title or not body or not datetime or not user_id:
            raise ValidationError("Title, body, datetime, and userId are required")
        timestamp = parse_unix_timestamp(datetime)

        params = {
            "title": title,
            "body": body,
            "image": image or "",
            "datetime": timestamp,
            "color": color or "",
            "user_id": user_id,
        }
        query = f"""
        INSERT INTO {self.notes_table} (title, body, image, datetime, color, "userId")
        VALUES (:title, :body, :image, :datetime, :color, :user_id)
        RETURNING id
        """
        note_id = self.db.insert_returning_id(query, params)
        logger.info("Added note id=%s for user_id=%s", note_id, user_id)
        return {"id": note_id, **params}

    def list_notes(self) -> list[dict[str, Any]]:
        query = f"""
        SELECT {NOTE_PUBLIC_COLUMNS}
        FROM {self.notes_table}
        ORDER BY datetime DESC, id DESC
        """
        return self.db.fetch_all(query)

    def list_notes_for_account(self, *, user_id: int) -> dict[str, Any]:
        account_query = f"""
        SELECT "pinnedNoteId" AS pinned_note_id
        FROM {self.users_table}
        WHERE id = :user_id
        """
        account = self.db.fetch_one(account_query, {"user_id": user_id})
        if account is None:
            raise NotFoundError(f"User with ID {user_id} not found")

        notes_query = f"""
        SELECT {NOTE_PUBLIC_COLUMNS}
        FROM {self.notes_table}
        WHERE "userId" = :user_id
        ORDER BY datetime DESC, id DESC
        """
        notes = self.db.fetch_all(notes_query, {"user_id": user_id})
        return {"pinned_note_id": account["pinned_note_id"], "notes": notes}

    def update_note(
        self,
        *,
        note_id: int,
        title: str | None,
        body: str | None,
        datetime: Any,
        image: str | None = None,
        color: str | None = None,
    ) -> dict[str, Any]:
        if not title or not body or not datetime:
            raise ValidationError("Title, body, and datetime are required")
        timestamp = parse_unix_timestamp(datetime)

        params = {
            "title": title,
            "body": body,
            "image": image or "",
            "datetime": timestamp,
            "color": color or "",
        }
        query = f"""
        UPDATE {self.notes_table}
        SET title = :title, body = :body, image = :image, datetime = :datetime, color = :color
        WHERE id = :note_id
        """
        if self.db.execute(query, {**params, "note_id": note_id}) == 0:
            raise NotFoundError(f"Note with ID {note_id} not found")
        return {"id": note_id, **params}

    def delete_note(self, *, note_id: int) -> None:
        query = f"DELETE FROM {self.notes_table} WHERE id = :note_id"
        if self.db.execute(query, {"note_id": note_id}) == 0:
            raise NotFoundError(f"Note with ID {note_id} not found")
        logger.info("Deleted note id=%s", note_id)
