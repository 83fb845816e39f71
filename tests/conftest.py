"""
Shared test configuration.
It keeps tests away from the default on-disk store and provides SQLite-backed fixtures.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

# Set before any test module imports the app, which reads configuration at import time.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from note_api.api.api_config import ApiConfig  # noqa: E402
from note_api.api.db_access import DatabaseClient  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure predictable environment variables are present during tests."""

    defaults = {
        "ENV": "test",
        "LOG_LEVEL": "INFO",
        "DATABASE_URL": "sqlite://",
    }

    for key, value in defaults.items():
        if os.getenv(key) is None:
            monkeypatch.setenv(key, value)


@pytest.fixture
def api_config() -> ApiConfig:
    return ApiConfig(environment="test", database_url="sqlite://")


@pytest.fixture
def sqlite_store(tmp_path: Path, api_config: ApiConfig) -> DatabaseClient:
    """A file-backed SQLite store with both tables created."""

    db = DatabaseClient(database_url=f"sqlite:///{tmp_path / 'notes.db'}")
    db.ensure_schema(
        users_table=api_config.users_table_name,
        notes_table=api_config.notes_table_name,
    )
    return db
