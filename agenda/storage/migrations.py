"""Ad-hoc database migrations for Agenda."""

from __future__ import annotations

import logging

from sqlalchemy import text

logger = logging.getLogger(__name__)


def _column_exists(conn, table: str, column: str) -> bool:
    result = conn.execute(text(f"PRAGMA table_info('{table}')"))
    return any(row[1] == column for row in result)


def _table_exists(conn, table: str) -> bool:
    result = conn.execute(
        text("SELECT name FROM sqlite_master WHERE type = 'table' AND name = :name"),
        {"name": table},
    )
    return result.first() is not None


def ensure_partition_timestamps(conn) -> None:
    # Databases created before partitions tracked their last write.
    if not _table_exists(conn, "partitionentry"):
        return
    if _column_exists(conn, "partitionentry", "updated_at"):
        return
    conn.execute(text("ALTER TABLE partitionentry ADD COLUMN updated_at TEXT"))
    conn.execute(
        text(
            """
            UPDATE partitionentry
            SET updated_at = CURRENT_TIMESTAMP
            WHERE updated_at IS NULL
            """
        )
    )
    logger.info("Migration: added partitionentry.updated_at")


def run_all(engine) -> None:
    with engine.begin() as conn:
        ensure_partition_timestamps(conn)


__all__ = ["run_all"]
