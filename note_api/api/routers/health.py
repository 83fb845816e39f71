# This file defines the welcome, liveness, readiness, and version endpoints.
# It exists so orchestration and monitoring systems can verify service health quickly.
# The readiness check confirms store connectivity and that both record tables exist.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from note_api.api.api_config import ApiConfig
from note_api.api.db_access import DatabaseClient
from note_api.api.dependencies import get_config, get_database_client
from note_api.api.error_handlers import StorageError
from note_api.api.schemas.health_schemas import (
    HealthResponse,
    ReadinessResponse,
    VersionResponse,
    WelcomeResponse,
)

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


def _table_ready(db: DatabaseClient, table_name: str) -> bool:
    try:
        return db.table_exists(table_name)
    except StorageError:
        return False


@router.get("/", response_model=WelcomeResponse)
def welcome() -> dict[str, str]:
    return {"message": "Welcome to To-Do Note API"}


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    db: DBDep,
) -> dict[str, object]:
    db_connected = db.can_connect()
    users_table_ready = db_connected and _table_ready(db, config.users_table_name)
    notes_table_ready = db_connected and _table_ready(db, config.notes_table_name)
    is_ready = db_connected and users_table_ready and notes_table_ready

    return {
        "request_id": request.state.request_id,
        "db_connected": db_connected,
        "users_table_ready": users_table_ready,
        "notes_table_ready": notes_table_ready,
        "ready": is_ready,
        "database": "reachable" if db_connected else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        "request_id": request.state.request_id,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
