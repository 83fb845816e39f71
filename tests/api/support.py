# This file provides shared helpers for API endpoint tests.
# It exists so tests can override service dependencies with fakes or SQLite-backed services.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from fastapi.testclient import TestClient

from note_api.api.api_config import ApiConfig
from note_api.api.app import app
from note_api.api.db_access import DatabaseClient
from note_api.api.dependencies import (
    get_account_service,
    get_config,
    get_database_client,
    get_note_service,
)
from note_api.api.services.account_service import AccountService
from note_api.api.services.note_service import NoteService


def build_test_config(*, database_url: str = "sqlite://") -> ApiConfig:
    """Create deterministic API config for tests."""

    return ApiConfig(
        api_name="Test Note API",
        host="127.0.0.1",
        port=3000,
        environment="test",
        log_level="INFO",
        database_url=database_url,
        enable_request_logging=False,
        allowed_origins=[],
        users_table_name="users",
        notes_table_name="notes",
        app_version="0.1.0",
    )


class FakeDBClient:
    """Simple fake DB dependency for health/readiness endpoint tests."""

    def __init__(self, *, connected: bool = True, existing_tables: set[str] | None = None) -> None:
        self._connected = connected
        self._tables = existing_tables if existing_tables is not None else {"users", "notes"}

    def can_connect(self) -> bool:
        return self._connected

    def table_exists(self, table_name: str) -> bool:
        return self._connected and table_name in self._tables

    def ensure_schema(self, **_: Any) -> list[str]:
        return []


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    db_client: Any | None = None,
    account_service: Any | None = None,
    note_service: Any | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    if db_client is not None:
        app.dependency_overrides[get_database_client] = lambda: db_client
    if account_service is not None:
        app.dependency_overrides[get_account_service] = lambda: account_service
    if note_service is not None:
        app.dependency_overrides[get_note_service] = lambda: note_service

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


@contextmanager
def sqlite_api_client(tmp_path: Path) -> Iterator[TestClient]:
    """Yield a TestClient whose services share one fresh SQLite store."""

    config = build_test_config(database_url=f"sqlite:///{tmp_path / 'api.db'}")
    db = DatabaseClient(database_url=config.database_url)
    with api_test_client(
        config=config,
        db_client=db,
        account_service=AccountService(config=config, db=db),
        note_service=NoteService(config=config, db=db),
    ) as client:
        yield client
