"""
SQLite document store and simple migration system.

``SQLiteAppStore`` keeps app records in an embedded SQLite database.
It is the store used for local development and tests; production
deployments normally point ``DATABASE_URL`` at MongoDB instead (see
``core.mongo``).

Each operation opens its own connection and runs in a worker thread
via ``asyncio.to_thread`` so that the event loop is never blocked on
disk I/O.  The migration mechanism stores applied migration versions in
the ``migrations`` table and executes new migrations in order when the
store is opened.
"""

from __future__ import annotations

import asyncio
import logging
import re
import secrets
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from app_catalog_api.app.core.errors import Err, NotFound, Ok, PersistenceError, Result
from app_catalog_api.app.core.store import AppStore
from app_catalog_api.app.schemas.app import ApkFile, AppCreate, AppRecord

logger = logging.getLogger(__name__)

# Record identifiers are 24 lowercase hex characters, the same shape as
# a MongoDB ObjectId, so clients see one id format regardless of backend.
_ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS apps (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            description TEXT NOT NULL,
            version TEXT NOT NULL,
            github_link TEXT NOT NULL,
            apk_filename TEXT,
            apk_storage_path TEXT,
            apk_upload_date TEXT NOT NULL
        );

        CREATE INDEX IF NOT EXISTS idx_apps_upload_date ON apps (apk_upload_date DESC, seq DESC);
        """,
    ),
]


def new_record_id() -> str:
    return secrets.token_hex(12)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as a fixed‑width UTC ISO string.

    A fixed width (always including microseconds) keeps lexical order
    equal to chronological order, which the ``ORDER BY`` relies on.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


class SQLiteAppStore(AppStore):
    """App records stored in a single SQLite table."""

    def __init__(self, database_path: str):
        self.database_path = str(Path(database_path).expanduser().resolve())

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection with rows keyed by column name."""
        conn = sqlite3.connect(self.database_path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Context manager that yields a cursor and closes the connection on exit."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    async def open(self) -> None:
        Path(self.database_path).parent.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(self.migrate)
        logger.info("SQLite store ready at %s", self.database_path)

    def migrate(self) -> None:
        """Apply pending migrations from ``MIGRATIONS``.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version and runs every newer migration.  If you add
        a new migration, append it with an incremented version number.
        """
        with self.get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
                    logger.info("Applied SQLite migration %s", version)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def insert_one(self, data: AppCreate) -> Result[AppRecord]:
        try:
            record = await asyncio.to_thread(self._insert, data)
        except sqlite3.Error as exc:
            logger.error("SQLite insert failed: %s", exc)
            return Err(PersistenceError(str(exc)))
        return Ok(record)

    async def find_sorted(self, limit: Optional[int] = None) -> Result[List[AppRecord]]:
        try:
            records = await asyncio.to_thread(self._select_sorted, limit)
        except sqlite3.Error as exc:
            logger.error("SQLite query failed: %s", exc)
            return Err(PersistenceError(str(exc)))
        except ValueError as exc:
            logger.error("SQLite returned a malformed app row: %s", exc)
            return Err(PersistenceError(str(exc)))
        return Ok(records)

    async def find_by_id(self, app_id: str) -> Result[AppRecord]:
        if not _ID_PATTERN.match(app_id or ""):
            return Err(NotFound())
        try:
            record = await asyncio.to_thread(self._select_one, app_id)
        except sqlite3.Error as exc:
            logger.error("SQLite lookup of %s failed: %s", app_id, exc)
            return Err(PersistenceError(str(exc)))
        except ValueError as exc:
            logger.error("SQLite row %s is malformed: %s", app_id, exc)
            return Err(PersistenceError(str(exc)))
        if record is None:
            return Err(NotFound())
        return Ok(record)

    # ------------------------------------------------------------------
    # Blocking helpers, executed in a worker thread
    # ------------------------------------------------------------------
    def _insert(self, data: AppCreate) -> AppRecord:
        record = AppRecord(id=new_record_id(), **data.model_dump())
        with self.get_cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO apps (id, name, description, version, github_link,
                                  apk_filename, apk_storage_path, apk_upload_date)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.name,
                    record.description,
                    record.version,
                    record.github_link,
                    record.apk_file.filename,
                    record.apk_file.storage_path,
                    format_timestamp(record.apk_file.upload_date),
                ),
            )
        return record

    def _select_sorted(self, limit: Optional[int]) -> List[AppRecord]:
        query = "SELECT * FROM apps ORDER BY apk_upload_date DESC, seq DESC"
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)
        with self.get_cursor() as cursor:
            rows = cursor.execute(query, params).fetchall()
        return [self._row_to_record(row) for row in rows]

    def _select_one(self, app_id: str) -> Optional[AppRecord]:
        with self.get_cursor() as cursor:
            row = cursor.execute("SELECT * FROM apps WHERE id = ?", (app_id,)).fetchone()
        if not row:
            return None
        return self._row_to_record(row)

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> AppRecord:
        """Convert a database row to an ``AppRecord``."""
        return AppRecord(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            version=row["version"],
            github_link=row["github_link"],
            apk_file=ApkFile(
                filename=row["apk_filename"],
                storage_path=row["apk_storage_path"],
                upload_date=datetime.fromisoformat(row["apk_upload_date"]),
            ),
        )
