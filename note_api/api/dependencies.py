# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the store client and services are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.

from __future__ import annotations

from functools import lru_cache

from note_api.api.api_config import ApiConfig, get_api_config
from note_api.api.db_access import DatabaseClient
from note_api.api.services.account_service import AccountService
from note_api.api.services.note_service import NoteService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(database_url=config.database_url)


@lru_cache(maxsize=1)
def get_account_service() -> AccountService:
    config = get_api_config()
    db_client = get_database_client()
    return AccountService(config=config, db=db_client)


@lru_cache(maxsize=1)
def get_note_service() -> NoteService:
    config = get_api_config()
    db_client = get_database_client()
    return NoteService(config=config, db=db_client)


def get_config() -> ApiConfig:
    return get_api_config()
