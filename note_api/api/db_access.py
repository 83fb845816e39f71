# This file wraps database access so API services can run parameterized SQL safely.
# It exists to keep SQL execution details out of service code and make testing easier.
# Every call opens its own connection and commits on its own; there is no cross-call transaction.
# Driver failures surface as StorageError so services never see raw SQLAlchemy exceptions.

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from note_api.api import ddl
from note_api.api.error_handlers import StorageError, StorageIntegrityError

_IDENTIFIER_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class DatabaseClient:
    """Minimal SQLAlchemy wrapper for API read/write access."""

    def __init__(self, *, database_url: str) -> None:
        connect_args: dict[str, Any] = {}
        if make_url(database_url).get_backend_name() == "sqlite":
            connect_args["check_same_thread"] = False
        self._engine: Engine = create_engine(
            database_url,
            pool_pre_ping=True,
            future=True,
            connect_args=connect_args,
        )

    def can_connect(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False

    def table_exists(self, table_name: str) -> bool:
        self._validate_identifier(table_name)
        with self._translate_errors():
            return inspect(self._engine).has_table(table_name)

    def ensure_schema(self, *, users_table: str, notes_table: str) -> list[str]:
        """Create missing tables and columns; return the columns that were added."""

        with self._translate_errors():
            return ddl.apply_store_ddl(
                self._engine,
                users_table=self._validate_identifier(users_table),
                notes_table=self._validate_identifier(notes_table),
            )

    def fetch_all(self, query: str, params: Mapping[str, Any] | None = None) -> list[dict[str, Any]]:
        with self._translate_errors(), self._engine.connect() as connection:
            rows = connection.execute(text(query), dict(params or {})).mappings().all()
        return [dict(row) for row in rows]

    def fetch_one(self, query: str, params: Mapping[str, Any] | None = None) -> dict[str, Any] | None:
        with self._translate_errors(), self._engine.connect() as connection:
            row = connection.execute(text(query), dict(params or {})).mappings().first()
        return dict(row) if row is not None else None

    def execute(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        """Run one write statement and return the number of affected rows."""

        with self._translate_errors(), self._engine.begin() as connection:
            result = connection.execute(text(query), dict(params or {}))
            return result.rowcount

    def insert_returning_id(self, query: str, params: Mapping[str, Any] | None = None) -> int:
        """Run one INSERT ... RETURNING id statement and return the generated id."""

        with self._translate_errors(), self._engine.begin() as connection:
            return int(connection.execute(text(query), dict(params or {})).scalar_one())

    @contextmanager
    def _translate_errors(self) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            raise StorageIntegrityError(str(exc.orig)) from exc
        except SQLAlchemyError as exc:
            raise StorageError(str(exc)) from exc

    def _validate_identifier(self, identifier: str) -> str:
        if not _IDENTIFIER_RE.match(identifier):
            raise ValueError(f"Unsafe SQL identifier: {identifier!r}")
        return identifier
