# This file implements account registration, login, profile updates, deletion, and note pinning.
# It exists so routers can expose account operations without embedding SQL or validation rules.
# Presence checks are truthiness checks: empty strings and zero count as missing.
# Passwords are stored and compared as plain text; hashing is a known gap that is not addressed here.

from __future__ import annotations

import logging
from typing import Any

from note_api.api.api_config import ApiConfig
from note_api.api.db_access import DatabaseClient
from note_api.api.error_handlers import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    StorageIntegrityError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Fields UpdateAccount may write, mapped to their column expressions.
ACCOUNT_UPDATE_FIELD_MAP: dict[str, str] = {
    "name": "name",
    "avatar": "avatar",
}

ACCOUNT_PUBLIC_COLUMNS = "id, name, email, avatar"


class AccountService:
    """Validation and persistence for user accounts."""

    def __init__(self, *, config: ApiConfig, db: DatabaseClient) -> None:
        self.config = config
        self.db = db
        self.users_table = self.config.users_table_name

    def register(
        self,
        *,
        name: str | None,
        email: str | None,
        password: str | None,
        avatar: str | None = None,
    ) -> dict[str, Any]:
        if not name or not email or not password:
            raise ValidationError("Name, email, and password are required")

        if self._find_by_email(email) is not None:
            raise ConflictError("Email already registered")

        stored_avatar = avatar or ""
        query = f"""
        INSERT INTO {self.users_table} (name, email, password, avatar)
        VALUES (:name, :email, :password, :avatar)
        RETURNING id
        """
        try:
            account_id = self.db.insert_returning_id(
                query,
                {"name": name, "email": email, "password": password, "avatar": stored_avatar},
            )
        except StorageIntegrityError as exc:
            # A concurrent registration with the same email reached the unique index first.
            raise ConflictError("Email already registered") from exc

        logger.info("Registered account id=%s", account_id)
        return {"id": account_id, "name": name, "email": email, "avatar": stored_avatar}

    def login(self, *, email: str | None, password: str | None) -> dict[str, Any]:
        if not email or not password:
            raise ValidationError("Email and password are required")

        query = f"""
        SELECT {ACCOUNT_PUBLIC_COLUMNS}
        FROM {self.users_table}
        WHERE email = :email AND password = :password
        LIMIT 1
        """
        row = self.db.fetch_one(query, {"email": email, "password": password})
        if row is None:
            raise AuthenticationError("Invalid email or password")
        return row

    def list_accounts(self) -> list[dict[str, Any]]:
        query = f"SELECT {ACCOUNT_PUBLIC_COLUMNS} FROM {self.users_table} ORDER BY id ASC"
        return self.db.fetch_all(query)

    def update_account(
        self,
        *,
        account_id: int,
        name: str | None = None,
        avatar: str | None = None,
    ) -> None:
        supplied = {"name": name, "avatar": avatar}
        assignments: list[str] = []
        params: dict[str, Any] = {"account_id": account_id}
        for field_name, column in ACCOUNT_UPDATE_FIELD_MAP.items():
            value = supplied[field_name]
            if not value:
                continue
            assignments.append(f"{column} = :{field_name}")
            params[field_name] = value

        if not assignments:
            raise ValidationError("At least one field (name or avatar) is required to update")

        query = f"UPDATE {self.users_table} SET {', '.join(assignments)} WHERE id = :account_id"
        if self.db.execute(query, params) == 0:
            raise NotFoundError(f"User with ID {account_id} not found")

    def delete_account(self, *, email: str | None) -> None:
        if not email:
            raise ValidationError("Email is required")

        query = f"DELETE FROM {self.users_table} WHERE email = :email"
        if self.db.execute(query, {"email": email}) == 0:
            raise NotFoundError(f'Account with email "{email}" not found')
        logger.info("Deleted account with email=%s", email)

    def pin_note(self, *, account_id: int, pinned_note_id: int | None) -> None:
        # The note is not looked up: a pin may reference a missing or foreign note.
        if not pinned_note_id:
            raise ValidationError("Pinned note ID is required")

        query = f'UPDATE {self.users_table} SET "pinnedNoteId" = :pinned_note_id WHERE id = :account_id'
        params = {"pinned_note_id": pinned_note_id, "account_id": account_id}
        if self.db.execute(query, params) == 0:
            raise NotFoundError(f"User with ID {account_id} not found")

    def _find_by_email(self, email: str) -> dict[str, Any] | None:
        query = f"SELECT id FROM {self.users_table} WHERE email = :email LIMIT 1"
        return self.db.fetch_one(query, {"email": email})
