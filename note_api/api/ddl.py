"""DDL helpers for the account and note tables."""

from __future__ import annotations

import logging

from sqlalchemy import Column, Integer, MetaData, Table, Text, inspect
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

# Columns a users table from an older deployment may lack. Added in place so existing rows survive.
OPTIONAL_USER_COLUMNS: list[tuple[str, str]] = [
    ("avatar", "TEXT"),
    ("pinnedNoteId", "INTEGER"),
]


def build_store_metadata(*, users_table: str = "users", notes_table: str = "notes") -> MetaData:
    """Describe both tables. Note and pin references are plain integers without foreign keys."""

    metadata = MetaData()
    Table(
        users_table,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("name", Text),
        Column("email", Text, unique=True),
        Column("password", Text),
        Column("avatar", Text),
        Column("pinnedNoteId", Integer, nullable=True),
        sqlite_autoincrement=True,
    )
    Table(
        notes_table,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("title", Text, nullable=False),
        Column("body", Text, nullable=False),
        Column("image", Text),
        Column("datetime", Integer, nullable=False),
        Column("color", Text),
        Column("userId", Integer, nullable=True),
        sqlite_autoincrement=True,
    )
    return metadata


def apply_store_ddl(engine: Engine, *, users_table: str, notes_table: str) -> list[str]:
    """Create absent tables, then add absent optional user columns. Safe to rerun."""

    metadata = build_store_metadata(users_table=users_table, notes_table=notes_table)
    metadata.create_all(engine, checkfirst=True)

    existing = {column["name"].lower() for column in inspect(engine).get_columns(users_table)}
    added: list[str] = []
    with engine.begin() as connection:
        for column_name, sql_type in OPTIONAL_USER_COLUMNS:
            if column_name.lower() in existing:
                continue
            connection.exec_driver_sql(
                f'ALTER TABLE {users_table} ADD COLUMN "{column_name}" {sql_type}'
            )
            added.append(column_name)

    if added:
        logger.info("Added columns to %s: %s", users_table, ", ".join(added))
    return added
